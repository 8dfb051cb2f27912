"""Main CLI application wiring for backlog.

  backlog                 pending items of the current repo
  backlog add "Fix CI"
  backlog list --all
  backlog done 2
  backlog cli             interactive editor
"""

from importlib.metadata import PackageNotFoundError, version
from typing import Optional

import typer

app = typer.Typer(
    add_completion=False,
    help="A simple backlog manager for your repos",
)


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        print(f"backlog {version('backlog')}")
    except PackageNotFoundError:
        print("backlog (not installed)")
    raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    show_version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Print version",
    ),
):
    """Show the pending items of the current repo when no command is given."""
    if ctx.invoked_subcommand is None:
        items_cmd.summary()


# =============================================================================
# Register commands
# =============================================================================

from backlog.cli import items as items_cmd
from backlog.cli import editor as editor_cmd

items_cmd.register(app)
editor_cmd.register(app)
