from rich.text import Text
from textual.containers import Vertical
from textual.widgets import Static

from backlog.tui.layout import measure
from backlog.tui.render import Frame, render
from backlog.tui.state import EditorState
from backlog.tui.views.base import View

# Rows taken by each bordered box around the list.
LIST_BORDER = 2
HINT_HEIGHT = 3
INPUT_HEIGHT = 5
WARNING_HEIGHT = 1


class BacklogView(View):
    name = "backlog"

    def viewport(self, width: int, height: int, state: EditorState) -> tuple[int, int]:
        chrome = LIST_BORDER + HINT_HEIGHT
        if state.editing:
            chrome += INPUT_HEIGHT
        if state.warning:
            chrome += WARNING_HEIGHT
        return max(width - LIST_BORDER, 1), max(height - chrome, 1)

    def _list_text(self, frame: Frame, width: int) -> Text:
        if frame.placeholder:
            return Text(frame.placeholder, style="dim")

        text = Text(no_wrap=True, overflow="crop")
        for i, line in enumerate(frame.lines):
            if i:
                text.append("\n")
            style = "dim" if line.done else ""
            if line.selected:
                style = f"{style} reverse".strip()
            padding = " " * max(width - measure(line.text), 0)
            text.append(line.text + padding, style=style or None)
        return text

    def _input_text(self, frame: Frame) -> Text:
        box = frame.input_box
        text = Text(box.before)
        text.append(box.at, style="black on white")
        text.append(box.after)
        return text

    def render(self, state: EditorState):
        frame = render(state)

        listing = Static(self._list_text(frame, state.width), id="list")
        listing.border_title = frame.title
        children = [listing]

        if frame.input_box is not None:
            box = Static(self._input_text(frame), id="input")
            box.border_title = frame.input_box.title
            children.append(box)

        if frame.warning:
            children.append(Static(Text(frame.warning, style="bold yellow"), id="warning"))

        if frame.prompt is not None:
            hint = Static(Text(f"{frame.prompt}  {frame.hints}", style="red"), id="hint-bar")
            hint.add_class("confirm")
        else:
            hint = Static(Text(frame.hints, style="dim"), id="hint-bar")
        children.append(hint)

        return [Vertical(*children, id="backlog-layout")]
