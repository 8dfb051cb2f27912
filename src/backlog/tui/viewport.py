"""Scroll offset bookkeeping.

The window is the half-open range [scroll, scroll + height) of visual
lines. Everything here is a pure function of integers and a Layout.
"""

from __future__ import annotations

from backlog.tui.layout import Layout


def max_scroll(height: int, total: int) -> int:
    return max(0, total - height)


def clamp_scroll(scroll: int, height: int, total: int) -> int:
    return min(max(scroll, 0), max_scroll(height, total))


def follow(scroll: int, span: tuple[int, int], height: int, total: int) -> int:
    """Smallest scroll change that shows the whole span.

    A span taller than the window is pinned to its first line.
    """
    start, end = span
    if height < 1:
        return clamp_scroll(start, height, total)
    if start < scroll or end - start > height:
        scroll = start
    elif end > scroll + height:
        scroll = end - height
    return clamp_scroll(scroll, height, total)


def page(scroll: int, direction: int, height: int, total: int) -> int:
    """Move one window up (direction < 0) or down (direction > 0)."""
    step = max(height, 1)
    return clamp_scroll(scroll + step * direction, height, total)


def intersects(span: tuple[int, int], scroll: int, height: int) -> bool:
    start, end = span
    return start < scroll + height and end > scroll


def cursor_after_page(layout: Layout, cursor: int, scroll: int, height: int) -> int:
    """Keep the cursor if it is still on screen, else pull it into the window."""
    if not len(layout):
        return 0
    if intersects(layout.span(cursor), scroll, height):
        return cursor

    bottom = scroll + height
    if layout.span(cursor)[1] <= scroll:
        # Window moved down past the cursor: first row that starts inside it.
        row = layout.row_at(scroll)
        if layout.starts[row] < scroll and row + 1 < len(layout):
            if layout.starts[row + 1] < bottom:
                row += 1
        return row

    # Window moved up past the cursor: last row that ends inside it.
    row = layout.row_at(bottom - 1)
    if layout.span(row)[1] > bottom and row > 0 and layout.span(row - 1)[1] > scroll:
        row -= 1
    return row
