"""`backlog cli` / `backlog tui`: the interactive editor."""

from __future__ import annotations

from backlog.errors import BacklogError
from backlog.cli.items import fail


def register(app):
    def launch():
        """Interactive CLI mode: browse and edit the backlog."""
        from backlog.storage.repo import open_repo
        from backlog.tui.app import run_editor

        try:
            repo = open_repo()
        except BacklogError as e:
            fail(str(e))

        selected = run_editor(repo.store, cfg=repo.cfg)
        if selected is not None:
            print(selected)

    app.command("cli")(launch)
    app.command("tui", hidden=True)(launch)
