"""Shared fixtures.

Editor tests drive EditorState / EditSession directly with key names and
keep the backlog in memory. CLI tests run `python -m backlog` inside a
throwaway git repo with BACKLOG_HOME pointed at a temp dir.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from backlog.errors import StoreUnwritable
from backlog.model import Backlog
from backlog.tui.keys import Key, interpret
from backlog.tui.state import EditorState
from backlog.tui.session import EditSession

SRC = Path(__file__).parents[1] / "src"


class MemoryStore:
    """Store double that keeps saved snapshots instead of writing files."""

    def __init__(self, backlog=None, fail_saves=False):
        self.backlog = backlog if backlog is not None else Backlog()
        self.fail_saves = fail_saves
        self.saved = []

    def load(self):
        return Backlog.from_dict(self.backlog.to_dict())

    def save(self, backlog):
        if self.fail_saves:
            raise StoreUnwritable(Path("/read-only/backlog.json"), "Permission denied")
        self.saved.append(backlog.texts())


def make_state(*texts, width=80, height=20, done=()):
    state = EditorState(backlog=Backlog.of(*texts))
    for index in done:
        state.backlog.set_done(index, True)
    state.resize(width, height)
    return state


def press(state, *names):
    """Feed key names straight through the key table and reducer."""
    for name in names:
        action = interpret(state, Key.press(name))
        if action is not None:
            state.dispatch(action)
    return state


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def session_for():
    def factory(*texts, fail_saves=False, size=(80, 20), hide_completed=False):
        store = MemoryStore(Backlog.of(*texts), fail_saves=fail_saves)
        return EditSession(store, hide_completed=hide_completed, size=size), store

    return factory


# --- CLI helpers ---------------------------------------------


def run(args, cwd: Path, home: Path) -> subprocess.CompletedProcess:
    """Run the CLI in a subprocess, isolated from the real ~/.backlog."""
    env = {
        **os.environ,
        "BACKLOG_HOME": str(home),
        "PYTHONPATH": os.pathsep.join(
            p for p in (str(SRC), os.environ.get("PYTHONPATH", "")) if p
        ),
    }
    return subprocess.run(
        [sys.executable, "-m", "backlog", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        env=env,
    )


@pytest.fixture
def home(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def repo(tmp_path):
    path = tmp_path / "project"
    (path / ".git").mkdir(parents=True)
    return path
