"""Tests for cursor motions, clamping and scrolling."""

from types import SimpleNamespace

from mini.editor import Editor


def _press(editor: Editor, *keys: str) -> None:
    for key in keys:
        char = key if len(key) == 1 else None
        editor.process_key(SimpleNamespace(key=key, character=char))


def _in_bounds(editor: Editor) -> bool:
    n = len(editor.store)
    if not 0 <= editor.cursor_row <= n:
        return False
    if editor.cursor_row < n:
        return 0 <= editor.cursor_col <= len(editor.store[editor.cursor_row].content)
    return True


class TestClamp:
    """The cursor always stays on the document."""

    def test_vertical_move_clamps_column(self):
        editor = Editor(["abcdef", "xy"])
        _press(editor, "$", "j")
        assert (editor.cursor_col, editor.cursor_row) == (2, 1)

    def test_cannot_move_past_last_row(self):
        editor = Editor(["a", "b"])
        _press(editor, "j", "j", "j")
        assert editor.cursor_row == 1

    def test_cannot_move_before_origin(self):
        editor = Editor(["abc"])
        _press(editor, "k", "h", "left", "up")
        assert (editor.cursor_col, editor.cursor_row) == (0, 0)

    def test_end_of_row_is_a_valid_column(self):
        editor = Editor(["abc"])
        _press(editor, "l", "l", "l", "l")
        assert editor.cursor_col == 3

    def test_empty_document(self):
        editor = Editor()
        _press(editor, "j", "l", "G", "$", "w", "b")
        assert (editor.cursor_col, editor.cursor_row) == (0, 0)

    def test_mixed_key_sequence_stays_in_bounds(self):
        editor = Editor(["one two", "", "\tthree", "four five six"])
        keys = [
            "j", "$", "j", "j", "w", "w", "b", "k", "0", "G", "A", "x", "y",
            "enter", "backspace", "backspace", "escape", "D", "D", "g", "x",
            "o", "z", "escape", "C", "pagedown", "pageup", "end", "home",
        ]
        for key in keys:
            _press(editor, key)
            assert _in_bounds(editor), key


class TestMotions:
    """Line, document and word motions."""

    def test_line_start_and_end(self):
        editor = Editor(["hello"])
        _press(editor, "$")
        assert editor.cursor_col == 5
        _press(editor, "0")
        assert editor.cursor_col == 0

    def test_home_end(self):
        editor = Editor(["hello"])
        _press(editor, "end")
        assert editor.cursor_col == 5
        _press(editor, "home")
        assert editor.cursor_col == 0

    def test_first_and_last_row(self):
        editor = Editor(["a", "b", "c"])
        _press(editor, "G")
        assert editor.cursor_row == 2
        _press(editor, "g")
        assert editor.cursor_row == 0

    def test_enter_goes_to_first_non_blank_of_next_row(self):
        editor = Editor(["abc", "   def"])
        _press(editor, "enter")
        assert (editor.cursor_col, editor.cursor_row) == (3, 1)

    def test_word_forward_three_times(self):
        editor = Editor(["the quick fox"])
        _press(editor, "w", "w", "w")
        assert (editor.cursor_col, editor.cursor_row) == (10, 0)

    def test_word_forward_crosses_rows(self):
        editor = Editor(["ab", "  cd"])
        _press(editor, "w")
        assert (editor.cursor_col, editor.cursor_row) == (2, 1)

    def test_word_forward_skips_tabs(self):
        editor = Editor(["a\t\tb"])
        _press(editor, "w")
        assert editor.cursor_col == 3

    def test_word_backward(self):
        editor = Editor(["the quick fox"])
        _press(editor, "$", "b")
        assert editor.cursor_col == 10
        _press(editor, "b")
        assert editor.cursor_col == 4

    def test_word_backward_crosses_rows(self):
        editor = Editor(["ab cd", "ef"])
        _press(editor, "j", "b")
        assert (editor.cursor_col, editor.cursor_row) == (3, 0)

    def test_word_backward_at_origin(self):
        editor = Editor(["abc"])
        _press(editor, "b")
        assert (editor.cursor_col, editor.cursor_row) == (0, 0)


class TestPaging:
    """Page up and page down."""

    def test_page_down_then_up(self):
        editor = Editor([str(i) for i in range(100)], screen_rows=10)
        _press(editor, "pagedown")
        assert editor.cursor_row == 19
        editor.scroll()
        assert editor.row_offset == 10
        _press(editor, "pageup")
        assert editor.cursor_row == 0

    def test_page_down_stops_at_last_row(self):
        editor = Editor(["a", "b", "c"], screen_rows=10)
        _press(editor, "pagedown")
        assert editor.cursor_row == 2


class TestScroll:
    """Offsets follow the cursor by the minimum amount."""

    def test_render_column_expands_tabs(self):
        editor = Editor(["\tx"])
        _press(editor, "l")
        editor.scroll()
        assert editor.render_col == 8

    def test_scroll_down(self):
        editor = Editor([str(i) for i in range(50)], screen_rows=10)
        editor.cursor_row = 25
        editor.scroll()
        assert editor.row_offset == 16

    def test_scroll_up(self):
        editor = Editor([str(i) for i in range(50)], screen_rows=10)
        editor.row_offset = 30
        editor.cursor_row = 12
        editor.scroll()
        assert editor.row_offset == 12

    def test_no_scroll_inside_window(self):
        editor = Editor([str(i) for i in range(50)], screen_rows=10)
        editor.row_offset = 5
        editor.cursor_row = 9
        editor.scroll()
        assert editor.row_offset == 5

    def test_horizontal_scroll(self):
        editor = Editor(["abcdefghij"], screen_cols=5)
        editor.cursor_col = 9
        editor.scroll()
        assert editor.col_offset == 5
        editor.cursor_col = 2
        editor.scroll()
        assert editor.col_offset == 2

    def test_cursor_inside_window_after_scroll(self):
        editor = Editor(["\t" * 20 + "x"] * 40, screen_rows=7, screen_cols=13)
        for key in ["$", "G", "k", "0", "w", "$", "g"]:
            _press(editor, key)
            editor.scroll()
            assert editor.row_offset <= editor.cursor_row < editor.row_offset + 7
            assert editor.col_offset <= editor.render_col < editor.col_offset + 13
