"""Git repository discovery.

A repo is any ancestor directory holding a `.git` entry (directory or
worktree file). No git binary is involved.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from backlog.config import DEFAULT_TODO_DIR, Config, load_config
from backlog.errors import NotInRepository
from backlog.storage.jsonstore import JsonStore

BACKLOG_FILE = "backlog.json"


def find_repo_root(start: Path | None = None) -> Path:
    start = (start or Path.cwd()).resolve()
    for directory in (start, *start.parents):
        if (directory / ".git").exists():
            return directory
    raise NotInRepository(start)


def backlog_path(repo_root: Path, todo_dir: str = DEFAULT_TODO_DIR) -> Path:
    return repo_root / todo_dir / BACKLOG_FILE


@dataclass(frozen=True)
class RepoBacklog:
    root: Path
    cfg: Config
    store: JsonStore


def open_repo(cwd: Path | None = None, cfg: Config | None = None) -> RepoBacklog:
    """Locate the enclosing repo and its backlog store."""
    cfg = cfg or load_config()
    root = find_repo_root(cwd)
    return RepoBacklog(root=root, cfg=cfg, store=JsonStore(backlog_path(root, cfg.todo_dir)))
