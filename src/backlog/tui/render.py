"""Frame description of the editor: a pure function of EditorState.

render() reads the state and never writes to it, so calling it twice on
the same state gives equal frames. Turning a frame into widgets is the
view's job (views/backlog.py).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from backlog.tui.state import (
    ConfirmDelete,
    EditExisting,
    EditorState,
    InsertNew,
    Normal,
)

HINTS = {
    "normal": "a:add  j/k:nav  x:toggle  e:edit  dd:del  K/J:move  h:hide done  Enter:select  q:quit",
    "pending": "d:delete item  any other key:cancel",
    "buffer": "Enter:confirm  Esc:cancel",
    "confirm": "Delete item? y/Enter:yes  any other key:cancel",
}

EMPTY_MESSAGE = "Backlog is empty. Press 'a' to add an item."
ALL_HIDDEN_MESSAGE = "All items are done. Press 'h' to show them."

_SPACES = str.maketrans({"\t": " ", "\n": " ", "\r": " ", "\f": " ", "\v": " "})


@dataclass(frozen=True)
class FrameLine:
    """One terminal row of the list."""
    text: str
    selected: bool = False
    done: bool = False


@dataclass(frozen=True)
class InputBox:
    """Editable line; `at` is the cell under the text cursor."""
    title: str
    before: str
    at: str
    after: str


@dataclass(frozen=True)
class Frame:
    title: str
    lines: tuple[FrameLine, ...]
    hints: str
    input_box: Optional[InputBox] = None
    prompt: Optional[str] = None
    warning: Optional[str] = None
    placeholder: Optional[str] = None


def row_prefix(number: int, done: bool, digits: int) -> str:
    marker = "[x]" if done else "[ ]"
    return f"{number:>{digits}}. {marker} "


def display_text(line: str) -> str:
    """What a wrapped line looks like on screen (no hanging whitespace)."""
    return line.rstrip().translate(_SPACES)


def _list_lines(state: EditorState) -> tuple[FrameLine, ...]:
    layout = state.layout()
    rows = state.rows
    digits = state.number_width
    indent = " " * state.prefix_width

    lines = []
    end = min(state.scroll + state.height, layout.total)
    for line_no in range(state.scroll, end):
        row = layout.row_at(line_no)
        offset = line_no - layout.starts[row]
        index = rows[row]
        item = state.backlog.get(index)

        prefix = row_prefix(index + 1, item.done, digits) if offset == 0 else indent
        lines.append(
            FrameLine(
                text=prefix + display_text(layout.lines[row][offset]),
                selected=row == state.cursor,
                done=item.done,
            )
        )
    return tuple(lines)


def _input_box(state: EditorState) -> Optional[InputBox]:
    match state.mode:
        case InsertNew():
            title = "Add"
        case EditExisting(index=index):
            title = f"Edit item {index + 1}"
        case _:
            return None

    buffer = state.buffer
    caret = state.caret
    return InputBox(
        title=title,
        before=buffer[:caret],
        at=buffer[caret : caret + 1] or " ",
        after=buffer[caret + 1 :],
    )


def _prompt(state: EditorState) -> Optional[str]:
    match state.mode:
        case ConfirmDelete(index=index):
            text = display_text(state.backlog.get(index).text)
            return f"Delete item {index + 1}: {text}?"
    return None


def _hints(state: EditorState) -> str:
    match state.mode:
        case Normal():
            return HINTS["pending"] if state.pending_key else HINTS["normal"]
        case InsertNew() | EditExisting():
            return HINTS["buffer"]
        case ConfirmDelete():
            return HINTS["confirm"]
    return ""


def _placeholder(state: EditorState) -> Optional[str]:
    if state.rows:
        return None
    if len(state.backlog):
        return ALL_HIDDEN_MESSAGE
    return EMPTY_MESSAGE


def render(state: EditorState) -> Frame:
    title = "Backlog (hiding completed)" if state.hide_completed else "Backlog"
    return Frame(
        title=title,
        lines=_list_lines(state),
        hints=_hints(state),
        input_box=_input_box(state),
        prompt=_prompt(state),
        warning=state.warning,
        placeholder=_placeholder(state),
    )
