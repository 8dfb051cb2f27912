"""One editing session: load once, apply keys, save after every change.

The store is anything with `load() -> Backlog` and `save(Backlog)`; in
practice a JsonStore. Store failures never end the session. A failed
load starts from an empty backlog, a failed save keeps the in-memory
edit, and both leave a warning on the state for the next frame.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from backlog.errors import StoreUnreadable, StoreUnwritable
from backlog.model import Backlog
from backlog.tui.keys import Key, interpret
from backlog.tui.state import Action, EditorState


class EditSession:
    def __init__(
        self,
        store: Any,
        backlog: Optional[Backlog] = None,
        *,
        hide_completed: bool = False,
        size: tuple[int, int] = (80, 20),
    ) -> None:
        self.store = store
        warning = None
        if backlog is None:
            try:
                backlog = store.load()
            except StoreUnreadable as e:
                logging.warning("Starting with an empty backlog: %s", e)
                backlog = Backlog()
                warning = f"Could not read backlog ({e.reason}); starting empty"

        self.state = EditorState(backlog=backlog, hide_completed=hide_completed)
        self.state.warning = warning
        self.resize(*size)

    @property
    def finished(self) -> bool:
        return self.state.finished

    @property
    def result(self) -> Optional[str]:
        return self.state.result

    def resize(self, width: int, height: int) -> None:
        self.state.resize(width, height)

    def feed(self, key: Key) -> Optional[Action]:
        """Process one key to completion. Returns the action it mapped to."""
        if self.state.finished:
            return None
        action = interpret(self.state, key)
        if action is None:
            return None

        logging.debug("key %s -> %s", key.name, action)
        self.state.dispatch(action)
        if self.state.dirty:
            self.persist()
        return action

    def press(self, *names: str) -> None:
        for name in names:
            self.feed(Key.press(name))

    def type_text(self, text: str) -> None:
        for ch in text:
            self.feed(Key.char(ch))

    def persist(self) -> bool:
        """Save the backlog. On failure the edit stays in memory."""
        self.state.dirty = False
        try:
            self.store.save(self.state.backlog)
        except StoreUnwritable as e:
            logging.warning("Keeping unsaved edit: %s", e)
            self.state.warning = f"Not saved: {e.reason}"
            return False
        self.state.warning = None
        return True
