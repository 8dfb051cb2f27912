"""Scroll offset rules, independent of the editor."""

from backlog.tui import viewport
from backlog.tui.layout import build_layout


class TestFollow:
    def test_visible_span_leaves_scroll_alone(self):
        assert viewport.follow(3, (4, 6), height=5, total=20) == 3

    def test_span_above_window_scrolls_to_its_first_line(self):
        assert viewport.follow(10, (4, 6), height=5, total=20) == 4

    def test_span_below_window_scrolls_to_its_last_line(self):
        assert viewport.follow(0, (6, 9), height=5, total=20) == 4

    def test_span_taller_than_window_pins_first_line(self):
        assert viewport.follow(0, (6, 14), height=5, total=20) == 6

    def test_never_scrolls_past_the_end(self):
        assert viewport.follow(0, (19, 20), height=5, total=20) == 15
        assert viewport.follow(0, (0, 1), height=5, total=3) == 0


class TestPaging:
    def test_page_moves_by_height_and_clamps(self):
        assert viewport.page(0, 1, height=5, total=20) == 5
        assert viewport.page(13, 1, height=5, total=20) == 15
        assert viewport.page(3, -1, height=5, total=20) == 0

    def test_clamp_scroll(self):
        assert viewport.clamp_scroll(50, height=5, total=20) == 15
        assert viewport.clamp_scroll(-2, height=5, total=20) == 0
        assert viewport.clamp_scroll(4, height=10, total=3) == 0

    def test_cursor_pulled_down_after_page_down(self):
        layout = build_layout([f"item {i}" for i in range(20)], 40)
        assert viewport.cursor_after_page(layout, 0, scroll=5, height=5) == 5

    def test_cursor_pulled_up_after_page_up(self):
        layout = build_layout([f"item {i}" for i in range(20)], 40)
        assert viewport.cursor_after_page(layout, 12, scroll=5, height=5) == 9

    def test_cursor_kept_when_still_visible(self):
        layout = build_layout([f"item {i}" for i in range(20)], 40)
        assert viewport.cursor_after_page(layout, 7, scroll=5, height=5) == 7

    def test_partially_visible_row_is_skipped_on_page_down(self):
        # Row 1 spans lines 1-3; a window starting at line 2 cuts it.
        layout = build_layout(["a", "bbb ccc ddd", "e"], 3)
        assert layout.span(1) == (1, 4)
        assert viewport.cursor_after_page(layout, 0, scroll=2, height=3) == 2

    def test_partially_visible_row_is_skipped_on_page_up(self):
        layout = build_layout(["a", "bbb ccc ddd", "e"], 3)
        assert viewport.cursor_after_page(layout, 2, scroll=0, height=3) == 0
