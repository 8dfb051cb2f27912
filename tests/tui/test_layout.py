"""Wrapping and row/line mapping."""

import pytest

from backlog.errors import InvalidLayoutWidth
from backlog.tui.layout import build_layout, measure, visible_width, wrap

SAMPLES = [
    "",
    "x",
    "buy milk",
    "hello world",
    "a fairly long backlog item that needs several lines to fit",
    "supercalifragilisticexpialidocious",
    "two  spaces   and\ttabs",
    "  leading and trailing  ",
    "short then averyveryverylongword then short",
    "日本語のテキストを折り返す",
]


class TestWrap:
    @pytest.mark.parametrize("text", SAMPLES)
    @pytest.mark.parametrize("width", [1, 3, 7, 12, 80])
    def test_joining_lines_gives_back_the_text(self, text, width):
        assert "".join(wrap(text, width)) == text

    @pytest.mark.parametrize("text", SAMPLES[:-1])
    @pytest.mark.parametrize("width", [1, 3, 7, 12, 80])
    def test_no_line_is_wider_than_width(self, text, width):
        assert all(visible_width(line) <= width for line in wrap(text, width))

    def test_breaks_at_whitespace(self):
        assert wrap("hello world", 5) == ["hello ", "world"]
        assert wrap("buy milk and eggs", 9) == ["buy milk ", "and eggs"]

    def test_long_word_is_hard_broken(self):
        assert wrap("abcdefgh", 3) == ["abc", "def", "gh"]

    def test_long_word_starts_on_its_own_line(self):
        assert wrap("go abcdefgh", 4) == ["go ", "abcd", "efgh"]

    def test_empty_text_takes_one_line(self):
        assert wrap("", 10) == [""]

    def test_wide_characters_count_as_two_cells(self):
        lines = wrap("日本語", 4)
        assert lines == ["日本", "語"]
        assert all(measure(line) <= 4 for line in lines)

    @pytest.mark.parametrize("width", [0, -3])
    def test_width_below_one_is_rejected(self, width):
        with pytest.raises(InvalidLayoutWidth):
            wrap("text", width)


class TestBuildLayout:
    def test_counts_and_starts(self):
        layout = build_layout(["one", "two words here", ""], 5)
        assert [layout.line_count(r) for r in range(3)] == [1, 3, 1]
        assert layout.starts == (0, 1, 4)
        assert layout.total == 5

    def test_span_and_row_at(self):
        layout = build_layout(["aa", "bbbbbb", "c"], 2)
        assert layout.span(1) == (1, 4)
        assert [layout.row_at(line) for line in range(5)] == [0, 1, 1, 1, 2]

    def test_row_at_clamps(self):
        layout = build_layout(["a", "b"], 5)
        assert layout.row_at(99) == 1
        assert layout.row_at(-1) == 0

    def test_empty_backlog(self):
        layout = build_layout([], 10)
        assert len(layout) == 0
        assert layout.total == 0
        assert layout.row_at(0) == 0

    def test_rejects_bad_width(self):
        with pytest.raises(InvalidLayoutWidth):
            build_layout(["a"], 0)
