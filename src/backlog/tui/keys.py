"""Key events -> actions, one table per mode.

Key names follow Textual's (`j`, `J`, `down`, `pagedown`, `enter`, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from backlog.tui.state import (
    AcceptDelete,
    Action,
    BufferBackspace,
    BufferDelete,
    BufferInsert,
    BufferMove,
    Cancel,
    ClearPending,
    Commit,
    ConfirmDelete,
    CursorDown,
    CursorUp,
    DeclineDelete,
    DeleteItem,
    EditExisting,
    EditorState,
    InsertNew,
    MoveItemDown,
    MoveItemUp,
    Normal,
    PageDown,
    PageUp,
    PendKey,
    Quit,
    RequestDelete,
    Select,
    StartEdit,
    StartInsert,
    ToggleDone,
    ToggleHideCompleted,
)

# Terminals with extended keyboard reporting send these instead.
_ALIASES = {
    "shift+j": "J",
    "shift+k": "K",
    "ctrl+h": "backspace",
}

# Names Textual gives to characters that are not alphanumeric.
_CHAR_NAMES = {
    " ": "space",
}


@dataclass(frozen=True)
class Key:
    name: str
    character: Optional[str] = None

    @classmethod
    def from_event(cls, event: Any) -> "Key":
        name = _ALIASES.get(event.key, event.key)
        character = event.character if event.is_printable else None
        return cls(name, character)

    @classmethod
    def press(cls, name: str) -> "Key":
        """A named key; single characters carry themselves as text."""
        if len(name) == 1:
            return cls.char(name)
        return cls(_ALIASES.get(name, name))

    @classmethod
    def char(cls, ch: str) -> "Key":
        return cls(_CHAR_NAMES.get(ch, ch), ch)

    @property
    def printable(self) -> bool:
        ch = self.character
        return ch is not None and len(ch) == 1 and ch.isprintable()


NORMAL_KEYS: dict[str, Action] = {
    "j": CursorDown(),
    "down": CursorDown(),
    "k": CursorUp(),
    "up": CursorUp(),
    "pagedown": PageDown(),
    "pageup": PageUp(),
    "a": StartInsert(),
    "e": StartEdit(),
    "x": ToggleDone(),
    "K": MoveItemUp(),
    "shift+up": MoveItemUp(),
    "J": MoveItemDown(),
    "shift+down": MoveItemDown(),
    "backspace": RequestDelete(),
    "delete": RequestDelete(),
    "h": ToggleHideCompleted(),
    "q": Quit(),
    "escape": Quit(),
    "enter": Select(),
}

BUFFER_KEYS: dict[str, Action] = {
    "enter": Commit(),
    "escape": Cancel(),
    "backspace": BufferBackspace(),
    "delete": BufferDelete(),
    "left": BufferMove("left"),
    "right": BufferMove("right"),
    "home": BufferMove("home"),
    "end": BufferMove("end"),
}

CONFIRM_KEYS = ("y", "enter")

DOUBLE_KEYS: dict[str, Action] = {
    "d": DeleteItem(),
}


def interpret(state: EditorState, key: Key) -> Optional[Action]:
    """The action a key stands for in the current mode (None: ignore it)."""
    match state.mode:
        case Normal():
            second = DOUBLE_KEYS.get(key.name)
            if second is not None:
                if state.pending_key == key.name:
                    return second
                return PendKey(key.name)
            return NORMAL_KEYS.get(key.name, ClearPending())

        case InsertNew() | EditExisting():
            action = BUFFER_KEYS.get(key.name)
            if action is not None:
                return action
            if key.printable:
                return BufferInsert(key.character)
            return None

        case ConfirmDelete():
            if key.name in CONFIRM_KEYS:
                return AcceptDelete()
            return DeclineDelete()

    return None
