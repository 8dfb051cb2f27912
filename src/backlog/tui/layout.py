"""Word wrapping and row <-> visual line mapping.

wrap() never drops a character: joining its lines gives back the input.
Whitespace at a break point hangs off the end of the line it follows, so
a line's visible part (without trailing whitespace) fits the width while
the text stays intact. Widths are terminal cells, not code points.
"""

from __future__ import annotations

import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Sequence

from rich.cells import cell_len

from backlog.errors import InvalidLayoutWidth

_TOKENS = re.compile(r"\s+|\S+")


def char_cells(ch: str) -> int:
    # Tabs and newlines are drawn as a single space.
    if ch.isspace():
        return 1
    return cell_len(ch)


def measure(text: str) -> int:
    if text.isprintable():
        return cell_len(text)
    return sum(char_cells(ch) for ch in text)


def visible_width(line: str) -> int:
    return measure(line.rstrip())


def wrap(text: str, width: int) -> list[str]:
    """Break text into lines of at most `width` visible cells."""
    if width < 1:
        raise InvalidLayoutWidth(width)

    lines: list[str] = []
    line = ""
    used = 0

    for token in _TOKENS.findall(text):
        size = measure(token)

        if token[0].isspace():
            line += token
            used += size
            continue

        if used + size <= width:
            line += token
            used += size
            continue

        if line:
            lines.append(line)
            line, used = "", 0

        if size <= width:
            line, used = token, size
            continue

        # Word wider than a whole line: hard break at the column boundary.
        for ch in token:
            cells = char_cells(ch)
            if used and used + cells > width:
                lines.append(line)
                line, used = "", 0
            line += ch
            used += cells

    lines.append(line)
    return lines


@dataclass(frozen=True)
class Layout:
    """Wrapped rows laid out top to bottom as one column of visual lines."""

    width: int
    lines: tuple[tuple[str, ...], ...]
    starts: tuple[int, ...]
    total: int

    def __len__(self) -> int:
        return len(self.lines)

    def line_count(self, row: int) -> int:
        return len(self.lines[row])

    def span(self, row: int) -> tuple[int, int]:
        """Visual lines of a row as a half-open range."""
        start = self.starts[row]
        return start, start + len(self.lines[row])

    def row_at(self, line: int) -> int:
        """Row that owns a visual line (clamped to the first/last row)."""
        if not self.starts:
            return 0
        row = bisect_right(self.starts, line) - 1
        return min(max(row, 0), len(self.starts) - 1)


def build_layout(texts: Sequence[str], width: int) -> Layout:
    if width < 1:
        raise InvalidLayoutWidth(width)

    lines = []
    starts = []
    total = 0
    for text in texts:
        wrapped = tuple(wrap(text, width))
        starts.append(total)
        lines.append(wrapped)
        total += len(wrapped)

    return Layout(width=width, lines=tuple(lines), starts=tuple(starts), total=total)
