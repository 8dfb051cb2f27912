"""Backlog editor as a Textual application.

- The app owns no editing logic: every key goes to the EditSession
- Views are pure functions of state; the app only remounts them
- exit() carries the selected item's text back to run_editor()
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.css.query import NoMatches

from backlog.config import Config, load_config, setup_logging
from backlog.model import Backlog
from backlog.tui.keys import Key
from backlog.tui.session import EditSession
from backlog.tui.views.backlog import BacklogView


class BacklogApp(App[Optional[str]]):
    CSS_PATH = "tui.tcss"
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, session: EditSession, cfg: Config | None = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.session = session
        self.cfg = cfg
        self.backlog_view = BacklogView()
        self._last_warning: Optional[str] = session.state.warning

    def compose(self) -> ComposeResult:
        yield Vertical(id="main")

    def on_mount(self) -> None:
        if self.cfg is not None:
            setup_logging(self.cfg)
        logging.info("Editor started with %d item(s)", len(self.session.state.backlog))
        if self._last_warning:
            self.notify(self._last_warning, severity="warning")
        self._render_view()

    def on_resize(self, event: events.Resize) -> None:
        self._render_view()

    # =====================
    # Keys
    # =====================

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()

        self.session.feed(Key.from_event(event))
        self._announce_warning()

        if self.session.finished:
            logging.info("Editor finished (selected: %s)", self.session.result is not None)
            self.exit(self.session.result)
            return

        self._render_view()

    def _announce_warning(self) -> None:
        warning = self.session.state.warning
        if warning and warning != self._last_warning:
            self.notify(warning, severity="warning")
        self._last_warning = warning

    # =====================
    # Rendering
    # =====================

    def _render_view(self) -> None:
        """Schedule a view re-render.

        remove_children() / mount() are async; running them in an exclusive
        worker keeps two renders from mounting duplicate ids.
        """
        self.run_worker(
            self._render_view_async(),
            group="render",
            exclusive=True,
            exit_on_error=False,
        )

    async def _render_view_async(self) -> None:
        try:
            container = self.screen.query_one("#main")
        except NoMatches:
            return

        state = self.session.state
        width, height = self.backlog_view.viewport(self.size.width, self.size.height, state)
        self.session.resize(width, height)

        await container.remove_children()
        await container.mount_all(self.backlog_view.render(state))


def run_editor(
    store: Any,
    backlog: Optional[Backlog] = None,
    size: Optional[tuple[int, int]] = None,
    cfg: Config | None = None,
) -> Optional[str]:
    """Run the editor until quit; return the selected item's text, if any."""
    cfg = cfg or load_config()
    setup_logging(cfg)
    session = EditSession(store, backlog, hide_completed=cfg.hide_completed)
    return BacklogApp(session, cfg).run(size=size)
