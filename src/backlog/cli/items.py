"""Item commands: backlog add|list|done|remove|next"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import typer

from backlog.config import load_config
from backlog.errors import BacklogError
from backlog.model import Backlog
from backlog.storage.index import GlobalIndex
from backlog.storage.jsonstore import JsonStore
from backlog.storage.repo import RepoBacklog, backlog_path, open_repo


def fail(message: str) -> None:
    print(message, file=sys.stderr)
    sys.exit(1)


def _open() -> tuple[RepoBacklog, Backlog]:
    try:
        repo = open_repo()
        return repo, repo.store.load()
    except BacklogError as e:
        fail(str(e))


def _save(repo: RepoBacklog, backlog: Backlog) -> None:
    try:
        repo.store.save(backlog)
    except BacklogError as e:
        fail(f"Failed to save backlog: {e}")


def _resolve(backlog: Backlog, number: int) -> int:
    """1-based item number -> index."""
    if number < 1 or number > len(backlog):
        fail("Invalid item number")
    return number - 1


def format_item(number: int, done: bool, text: str) -> str:
    status = "[x]" if done else "[ ]"
    return f"{number}. {status} {text}"


def summary() -> None:
    """Bare `backlog`: pending items only."""
    try:
        repo = open_repo()
    except BacklogError as e:
        fail(f"{e}. Use 'backlog --help' for usage.")
    try:
        backlog = repo.store.load()
    except BacklogError as e:
        fail(str(e))

    if not len(backlog):
        print("Backlog is empty. Use 'backlog add <description>' to add items.")
        return

    pending = backlog.pending()
    if not pending:
        print("All done! Backlog is clear.")
        return

    print(f"\n{len(pending)} item(s) in backlog:")
    for index, item in pending:
        print(format_item(index + 1, item.done, item.text))
    print()


def register(app: typer.Typer):
    @app.command()
    def add(
        description: List[str] = typer.Argument(None, help="The backlog item description"),
    ):
        """Add a new item to the backlog."""
        text = " ".join(description or []).strip()
        if not text:
            fail("Please provide a description")

        repo, backlog = _open()
        backlog.append(text)
        _save(repo, backlog)

        try:
            GlobalIndex.load(repo.cfg.index_path).register(repo.root)
        except BacklogError as e:
            print(f"Warning: could not update global index: {e}", file=sys.stderr)

        print(f"Added: {text}")

    @app.command("list")
    def list_items(
        show_all: bool = typer.Option(
            False, "--all", "-a", help="Show all backlogs across all repos"
        ),
    ):
        """List backlog items (current repo or all)."""
        if show_all:
            _list_all()
            return

        _, backlog = _open()
        if not len(backlog):
            print("Backlog is empty.")
            return

        print("\nBacklog:")
        print("--------")
        for i, item in enumerate(backlog, 1):
            print(format_item(i, item.done, item.text))
        print()

    @app.command()
    def done(number: int = typer.Argument(..., help="Item number to mark as done")):
        """Mark an item as done."""
        repo, backlog = _open()
        index = _resolve(backlog, number)
        backlog.set_done(index, True)
        _save(repo, backlog)
        print(f"Marked as done: {backlog.get(index).text}")

    @app.command()
    def remove(number: int = typer.Argument(..., help="Item number to remove")):
        """Remove an item from the backlog."""
        repo, backlog = _open()
        removed = backlog.remove_at(_resolve(backlog, number))
        _save(repo, backlog)
        print(f"Removed: {removed.text}")

    @app.command("next")
    def next_item():
        """Show what to do next (first incomplete item)."""
        _, backlog = _open()
        item = backlog.first_pending()
        if item is None:
            print("All done! Backlog is clear.", file=sys.stderr)
            return
        print(item.text)


def _list_all() -> None:
    try:
        cfg = load_config()
    except BacklogError as e:
        fail(str(e))

    index = GlobalIndex.load(cfg.index_path)
    if not index.repos:
        print("No backlogs found.")
        return

    for repo_path in index.repos:
        store = JsonStore(backlog_path(Path(repo_path), cfg.todo_dir))
        try:
            backlog = store.load()
        except BacklogError as e:
            print(f"\n{repo_path}: {e}", file=sys.stderr)
            continue

        if not backlog.pending():
            continue

        print(f"\n{repo_path}")
        print("-" * len(repo_path))
        for i, item in enumerate(backlog, 1):
            print("  " + format_item(i, item.done, item.text))
    print()
