"""
Editor state and the transitions that act on it.

Architecture (same shape for every mode):
- Modes are frozen dataclasses forming a closed set: Normal, InsertNew,
  EditExisting(index), ConfirmDelete(index)
- Actions are frozen dataclasses describing one transition
- reduce(state, action) mutates the state; it is the only place that
  touches the item store
- EditorState.dispatch(action) applies reduce and re-clamps the viewport

`cursor` is a position among the visible rows. With hide_completed off,
rows are exactly the backlog indices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal, Optional, Union

from backlog.errors import InvalidLayoutWidth
from backlog.model import Backlog, Item
from backlog.tui import viewport
from backlog.tui.layout import Layout, build_layout


# =============================================================================
# Modes
# =============================================================================

@dataclass(frozen=True)
class Normal:
    """Browsing the list."""


@dataclass(frozen=True)
class InsertNew:
    """Composing a new item in the input box."""


@dataclass(frozen=True)
class EditExisting:
    """Rewriting the text of an existing item."""
    index: int


@dataclass(frozen=True)
class ConfirmDelete:
    """Waiting for y/Enter before deleting an item."""
    index: int


Mode = Union[Normal, InsertNew, EditExisting, ConfirmDelete]


# =============================================================================
# Actions
# =============================================================================

@dataclass(frozen=True)
class CursorDown:
    pass


@dataclass(frozen=True)
class CursorUp:
    pass


@dataclass(frozen=True)
class PageDown:
    pass


@dataclass(frozen=True)
class PageUp:
    pass


@dataclass(frozen=True)
class StartInsert:
    """Open an empty input box for a new item."""
    pass


@dataclass(frozen=True)
class StartEdit:
    """Open the input box on the item under the cursor."""
    pass


@dataclass(frozen=True)
class ToggleDone:
    pass


@dataclass(frozen=True)
class MoveItemUp:
    pass


@dataclass(frozen=True)
class MoveItemDown:
    pass


@dataclass(frozen=True)
class PendKey:
    """First key of a two-key command."""
    key: str


@dataclass(frozen=True)
class ClearPending:
    """A key with no meaning in the current mode."""
    pass


@dataclass(frozen=True)
class DeleteItem:
    """Delete the item under the cursor without asking."""
    pass


@dataclass(frozen=True)
class RequestDelete:
    """Ask before deleting the item under the cursor."""
    pass


@dataclass(frozen=True)
class AcceptDelete:
    pass


@dataclass(frozen=True)
class DeclineDelete:
    pass


@dataclass(frozen=True)
class ToggleHideCompleted:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Select:
    """Finish the session with the item under the cursor."""
    pass


@dataclass(frozen=True)
class BufferInsert:
    text: str


@dataclass(frozen=True)
class BufferBackspace:
    pass


@dataclass(frozen=True)
class BufferDelete:
    pass


@dataclass(frozen=True)
class BufferMove:
    to: Literal["left", "right", "home", "end"]


@dataclass(frozen=True)
class Commit:
    pass


@dataclass(frozen=True)
class Cancel:
    pass


Action = Union[
    CursorDown,
    CursorUp,
    PageDown,
    PageUp,
    StartInsert,
    StartEdit,
    ToggleDone,
    MoveItemUp,
    MoveItemDown,
    PendKey,
    ClearPending,
    DeleteItem,
    RequestDelete,
    AcceptDelete,
    DeclineDelete,
    ToggleHideCompleted,
    Quit,
    Select,
    BufferInsert,
    BufferBackspace,
    BufferDelete,
    BufferMove,
    Commit,
    Cancel,
]


# =============================================================================
# Reducer
# =============================================================================

def reduce(state: "EditorState", action: Action) -> None:
    """
    Apply an action to the state.

    Store mutations set state.dirty; whoever dispatched is expected to
    persist and clear it. Any action other than PendKey drops a pending key.
    """
    if not isinstance(action, PendKey):
        state.pending_key = None

    match action:
        case CursorDown():
            if state.cursor < len(state.rows) - 1:
                state.cursor += 1

        case CursorUp():
            if state.cursor > 0:
                state.cursor -= 1

        case PageDown():
            _page(state, 1)

        case PageUp():
            _page(state, -1)

        case StartInsert():
            _open_buffer(state, InsertNew(), "")

        case StartEdit():
            index = state.current_index
            if index is not None:
                _open_buffer(state, EditExisting(index), state.backlog.get(index).text)

        case ToggleDone():
            index = state.current_index
            if index is not None:
                state.backlog.toggle_done(index)
                state.dirty = True

        case MoveItemUp():
            index = state.current_index
            if index is not None:
                _move(state, index, state.backlog.move_up(index))

        case MoveItemDown():
            index = state.current_index
            if index is not None:
                _move(state, index, state.backlog.move_down(index))

        case PendKey(key=key):
            state.pending_key = key

        case ClearPending():
            pass

        case DeleteItem():
            index = state.current_index
            if index is not None:
                _delete(state, index)

        case RequestDelete():
            index = state.current_index
            if index is not None:
                state.mode = ConfirmDelete(index)

        case AcceptDelete():
            if isinstance(state.mode, ConfirmDelete):
                _delete(state, state.mode.index)
            state.mode = Normal()

        case DeclineDelete():
            state.mode = Normal()

        case ToggleHideCompleted():
            _toggle_hide_completed(state)

        case Quit():
            state.finished = True
            state.result = None

        case Select():
            item = state.current_item
            if item is not None:
                state.finished = True
                state.result = item.text

        case BufferInsert(text=text):
            if state.editing:
                caret = state.caret
                state.buffer = state.buffer[:caret] + text + state.buffer[caret:]
                state.caret = caret + len(text)

        case BufferBackspace():
            if state.editing and state.caret > 0:
                caret = state.caret
                state.buffer = state.buffer[: caret - 1] + state.buffer[caret:]
                state.caret = caret - 1

        case BufferDelete():
            if state.editing and state.caret < len(state.buffer):
                caret = state.caret
                state.buffer = state.buffer[:caret] + state.buffer[caret + 1 :]

        case BufferMove(to=to):
            if state.editing:
                state.caret = _caret_target(state, to)

        case Commit():
            _commit(state)

        case Cancel():
            _close_buffer(state)

    state.rescroll()


def _page(state: "EditorState", direction: int) -> None:
    layout = state.layout()
    if not len(layout):
        return
    state.scroll = viewport.page(state.scroll, direction, state.height, layout.total)
    state.cursor = viewport.cursor_after_page(
        layout, state.cursor, state.scroll, state.height
    )


def _open_buffer(state: "EditorState", mode: Mode, text: str) -> None:
    state.mode = mode
    state.buffer = text
    state.caret = len(text)


def _close_buffer(state: "EditorState") -> None:
    state.mode = Normal()
    state.buffer = ""
    state.caret = 0


def _caret_target(state: "EditorState", to: str) -> int:
    if to == "left":
        return max(state.caret - 1, 0)
    if to == "right":
        return min(state.caret + 1, len(state.buffer))
    if to == "home":
        return 0
    return len(state.buffer)


def _commit(state: "EditorState") -> None:
    """Apply the buffer. A blank buffer changes nothing."""
    text = state.buffer
    match state.mode:
        case InsertNew():
            if text.strip():
                index = state.backlog.append(text)
                state.dirty = True
                state.focus(index)
        case EditExisting(index=index):
            if text.strip() and text != state.backlog.get(index).text:
                state.backlog.set_text(index, text)
                state.dirty = True
        case _:
            return
    _close_buffer(state)


def _move(state: "EditorState", old: int, new: int) -> None:
    if new == old:
        return
    state.dirty = True
    state.focus(new)


def _delete(state: "EditorState", index: int) -> None:
    state.backlog.remove_at(index)
    state.dirty = True
    state.clamp_cursor()


def _toggle_hide_completed(state: "EditorState") -> None:
    index = state.current_index
    state.hide_completed = not state.hide_completed
    if index is None:
        state.cursor = 0
        return
    # Stay on the same item, or the first visible one after it.
    state.cursor = sum(1 for row in state.rows if row < index)
    state.clamp_cursor()


# =============================================================================
# Editor State
# =============================================================================

PREFIX_TEMPLATE = ". [x] "


@dataclass
class EditorState:
    """
    Everything the editor needs between two key presses.

    The backlog is owned by the session for its whole lifetime; nothing
    else mutates it while the editor runs.
    """

    backlog: Backlog = field(default_factory=Backlog)
    mode: Mode = field(default_factory=Normal)

    # Selection and scrolling
    cursor: int = 0
    scroll: int = 0

    # Input box
    buffer: str = ""
    caret: int = 0

    # First half of a two-key command ("d" of "dd")
    pending_key: Optional[str] = None

    hide_completed: bool = False

    # List area in terminal cells
    width: int = 80
    height: int = 20

    # Set by the session
    warning: Optional[str] = None
    dirty: bool = False
    finished: bool = False
    result: Optional[str] = None

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def dispatch(self, action: Action) -> None:
        """Apply an action to update state."""
        reduce(self, action)

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> list[int]:
        """Backlog indices shown in the list, top to bottom."""
        if not self.hide_completed:
            return list(range(len(self.backlog)))
        return [i for i, item in enumerate(self.backlog) if not item.done]

    @property
    def current_index(self) -> Optional[int]:
        """Backlog index under the cursor, if any row is visible."""
        rows = self.rows
        if not rows:
            return None
        return rows[min(self.cursor, len(rows) - 1)]

    @property
    def current_item(self) -> Optional[Item]:
        index = self.current_index
        if index is None:
            return None
        return self.backlog.get(index)

    @property
    def editing(self) -> bool:
        return isinstance(self.mode, (InsertNew, EditExisting))

    @property
    def number_width(self) -> int:
        return len(str(max(len(self.backlog), 1)))

    @property
    def prefix_width(self) -> int:
        return self.number_width + len(PREFIX_TEMPLATE)

    @property
    def text_width(self) -> int:
        return self.width - self.prefix_width

    # -------------------------------------------------------------------------
    # Layout and viewport
    # -------------------------------------------------------------------------

    def layout(self) -> Layout:
        texts = [self.backlog.get(i).text for i in self.rows]
        try:
            return build_layout(texts, self.text_width)
        except InvalidLayoutWidth as e:
            logging.warning("%s; clamping to 1", e)
            return build_layout(texts, 1)

    def focus(self, index: int) -> None:
        """Put the cursor on a backlog index (which must be visible)."""
        self.cursor = self.rows.index(index)

    def clamp_cursor(self) -> None:
        count = len(self.rows)
        self.cursor = min(max(self.cursor, 0), max(count - 1, 0))

    def rescroll(self) -> None:
        """Re-establish the cursor and window invariants after any change."""
        self.clamp_cursor()
        layout = self.layout()
        if not len(layout):
            self.scroll = 0
            return
        self.scroll = viewport.follow(
            self.scroll, layout.span(self.cursor), self.height, layout.total
        )

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = max(height, 0)
        self.rescroll()
