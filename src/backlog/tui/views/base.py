from abc import ABC, abstractmethod
from typing import Iterable

from textual.widget import Widget

from backlog.tui.state import EditorState


class View(ABC):
    name: str

    @abstractmethod
    def render(self, state: EditorState) -> Iterable[Widget]: ...

    def viewport(self, width: int, height: int, state: EditorState) -> tuple[int, int]:
        """Cells left for the list once the view's chrome is drawn."""
        return width, height
