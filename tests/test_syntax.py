"""Tests for filetype selection and the syntax highlighter."""

from mini.rows import Row, RowStore, expand_tabs
from mini.syntax import (
    Highlight,
    highlight_row,
    is_separator,
    select_syntax,
    update_highlights,
)

C = select_syntax("main.c")
PY = select_syntax("script.py")


def _row(text: str) -> Row:
    return Row(text, render=expand_tabs(text, 8))


class TestSelectSyntax:
    """Filename to profile resolution."""

    def test_extension_match(self):
        assert select_syntax("main.c").filetype == "c"
        assert select_syntax("main.h").filetype == "c"
        assert select_syntax("x.go").filetype == "go"
        assert select_syntax("app.js").filetype == "javascript"
        assert select_syntax("script.py").filetype == "python"

    def test_substring_match(self):
        assert select_syntax("widget.cpp").filetype == "c"

    def test_extension_must_be_exact(self):
        assert select_syntax("notes.python") is None
        assert select_syntax("archive.js.bak") is None

    def test_no_match(self):
        assert select_syntax("README") is None
        assert select_syntax("") is None
        assert select_syntax(None) is None


class TestSeparators:
    def test_separators(self):
        for ch in " \t,.()+-/*=~%<>[]{}:;":
            assert is_separator(ch)

    def test_non_separators(self):
        for ch in "a_Z9\"'":
            assert not is_separator(ch)


class TestRowHighlight:
    """Single-row categorization."""

    def test_no_profile_is_normal(self):
        row = _row("int x = 1; // c")
        highlight_row(row, None, False)
        assert set(row.highlights) == {Highlight.NORMAL}

    def test_keyword_sets(self):
        row = _row("if (x) return;")
        highlight_row(row, C, False)
        assert row.highlights[0:2] == [Highlight.KEYWORD1] * 2
        assert row.highlights[7:13] == [Highlight.KEYWORD1] * 6
        row = _row("int x;")
        highlight_row(row, C, False)
        assert row.highlights[0:3] == [Highlight.KEYWORD2] * 3
        assert row.highlights[3] == Highlight.NORMAL

    def test_keyword_prefix_of_identifier_is_not_keyword(self):
        row = _row("iffy interval")
        highlight_row(row, C, False)
        assert set(row.highlights) == {Highlight.NORMAL}

    def test_keyword_inside_identifier_is_not_keyword(self):
        row = _row("xint = 1")
        highlight_row(row, C, False)
        assert row.highlights[0:4] == [Highlight.NORMAL] * 4

    def test_keyword_followed_by_separator(self):
        row = _row("return(x);")
        highlight_row(row, C, False)
        assert row.highlights[0:6] == [Highlight.KEYWORD1] * 6

    def test_numbers(self):
        row = _row("x = 42.5;")
        highlight_row(row, C, False)
        assert row.highlights[4:8] == [Highlight.NUMBER] * 4
        assert row.highlights[8] == Highlight.NORMAL

    def test_digits_in_identifier_are_not_numbers(self):
        row = _row("x2 = 1")
        highlight_row(row, C, False)
        assert row.highlights[1] == Highlight.NORMAL
        assert row.highlights[5] == Highlight.NUMBER

    def test_non_decimal_digits_are_not_numbers(self):
        row = _row("x = ² ①")
        highlight_row(row, C, False)
        assert row.highlights[4] == Highlight.NORMAL
        assert row.highlights[6] == Highlight.NORMAL

    def test_string_with_escape(self):
        row = _row('s = "a\\"b";')
        highlight_row(row, C, False)
        assert row.highlights[4:10] == [Highlight.STRING] * 6
        assert row.highlights[10] == Highlight.NORMAL

    def test_single_line_comment(self):
        row = _row("x; // if 1")
        highlight_row(row, C, False)
        assert row.highlights[3:] == [Highlight.COMMENT] * 7

    def test_comment_marker_inside_string(self):
        row = _row('"//" x')
        highlight_row(row, C, False)
        assert row.highlights[0:4] == [Highlight.STRING] * 4
        assert row.highlights[5] == Highlight.NORMAL

    def test_multiline_comment_within_row(self):
        row = _row("a /* b */ int")
        highlight_row(row, C, False)
        assert row.highlights[2:9] == [Highlight.MLCOMMENT] * 7
        assert row.highlights[10:13] == [Highlight.KEYWORD2] * 3
        assert row.open_comment is False

    def test_seeded_open_comment(self):
        row = _row("int x;")
        highlight_row(row, C, True)
        assert set(row.highlights) == {Highlight.MLCOMMENT}
        assert row.open_comment is True

    def test_idempotent(self):
        row = _row('int main() { /* x */ return "s" + 10; // done')
        highlight_row(row, C, False)
        first = list(row.highlights)
        changed = highlight_row(row, C, False)
        assert row.highlights == first
        assert changed is False

    def test_python_profile(self):
        row = _row("def f(): return None  # note")
        highlight_row(row, PY, False)
        assert row.highlights[0:3] == [Highlight.KEYWORD1] * 3
        assert row.highlights[9:15] == [Highlight.KEYWORD2] * 6
        assert row.highlights[16:20] == [Highlight.KEYWORD1] * 4
        assert row.highlights[22] == Highlight.COMMENT


class TestCrossLinePropagation:
    """Multi-line comment state flows from row to row."""

    def test_opening_marker_colors_following_row(self):
        store = RowStore(["/*", "int x;"], syntax=C)
        assert store[0].open_comment is True
        assert set(store[1].highlights) == {Highlight.MLCOMMENT}

    def test_removing_marker_flips_following_row_back(self):
        store = RowStore(["/*", "int x;"], syntax=C)
        store.delete_char(0, 0)
        assert store[0].open_comment is False
        assert store[1].highlights[0:3] == [Highlight.KEYWORD2] * 3

    def test_typing_marker_reaches_every_row(self):
        store = RowStore(["a", "int x;", "b"], syntax=C)
        store.insert_char(0, 0, "/")
        store.insert_char(0, 1, "*")
        for y in (1, 2):
            assert set(store[y].highlights) == {Highlight.MLCOMMENT}

    def test_closing_marker_ends_comment(self):
        store = RowStore(["/*", "x", "*/ int"], syntax=C)
        assert store[2].highlights[0:2] == [Highlight.MLCOMMENT] * 2
        assert store[2].highlights[3:6] == [Highlight.KEYWORD2] * 3
        assert store[2].open_comment is False

    def test_python_triple_quotes(self):
        store = RowStore(['"""', "if x", '"""', "if y"], syntax=PY)
        assert set(store[1].highlights) == {Highlight.MLCOMMENT}
        assert store[3].highlights[0:2] == [Highlight.KEYWORD2] * 2

    def test_deleting_opening_row_rehighlights_successor(self):
        store = RowStore(["/*", "int x;"], syntax=C)
        store.delete_row(0)
        assert store[0].highlights[0:3] == [Highlight.KEYWORD2] * 3

    def test_merging_rows_rehighlights_successor(self):
        store = RowStore(["a", "/*", "int"], syntax=C)
        store.set_row(1, "")
        store.merge_with_previous(1)
        assert store.lines() == ["a", "int"]
        assert store[1].highlights == [Highlight.KEYWORD2] * 3

    def test_inserted_row_inside_comment(self):
        store = RowStore(["/*", "x", "*/"], syntax=C)
        store.insert_row(1, "int")
        assert set(store[1].highlights) == {Highlight.MLCOMMENT}
        assert store[3].open_comment is False

    def test_long_file_propagation(self):
        store = RowStore(["x"] * 5000, syntax=C)
        store.insert_char(0, 0, "/")
        store.insert_char(0, 1, "*")
        assert store[4999].highlights == [Highlight.MLCOMMENT]
        store.delete_char(0, 0)
        assert store[4999].highlights == [Highlight.NORMAL]

    def test_update_stops_when_state_unchanged(self):
        store = RowStore(["a", "b", "c"], syntax=C)
        assert update_highlights(store.rows, 0, C) == 1

    def test_update_counts_propagated_rows(self):
        store = RowStore(["a", "b", "c"], syntax=C)
        store.rows[0].content = store.rows[0].render = "/*"
        assert update_highlights(store.rows, 0, C) == 3
