"""Cursor and viewport mixin for Editor."""

from __future__ import annotations

from typing import Callable

from mini.rows import char_width


def _is_blank(ch: str) -> bool:
    return ch == " " or ch == "\t"


class CursorMixin:
    """Cursor clamping, motions and scroll-offset arithmetic for Editor."""

    # -- Clamping ----------------------------------------------------------

    def clamp_y(self) -> None:
        n = len(self.store)
        if self.cursor_row < 0 or n == 0:
            self.cursor_row = 0
        elif self.cursor_row >= n:
            self.cursor_row = n - 1

    def clamp_x(self) -> None:
        if self.cursor_col < 0 or self.cursor_row >= len(self.store):
            self.cursor_col = 0
            return
        line_len = len(self.store[self.cursor_row].content)
        if self.cursor_col > line_len:
            self.cursor_col = line_len

    def clamp_cursor(self) -> None:
        self.clamp_y()
        self.clamp_x()

    # -- Absolute / relative positioning -----------------------------------

    def set_pos_y(self, y: int) -> None:
        self.cursor_row = y
        self.clamp_cursor()

    def set_pos_x(self, x: int) -> None:
        self.cursor_col = x
        self.clamp_x()

    def move_y(self, dy: int) -> None:
        self.set_pos_y(self.cursor_row + dy)

    def move_x(self, dx: int) -> None:
        self.set_pos_x(self.cursor_col + dx)

    def set_pos_max_y(self) -> None:
        self.set_pos_y(len(self.store))

    def set_pos_max_x(self) -> None:
        self.clamp_y()
        if self.cursor_row < len(self.store):
            self.cursor_col = len(self.store[self.cursor_row].content)

    def page(self, direction: int) -> None:
        """Jump to the screen edge, then move one screen in *direction*."""
        if direction < 0:
            self.cursor_row = self.row_offset
        else:
            self.cursor_row = min(
                self.row_offset + self.screen_rows - 1, len(self.store)
            )
        for _ in range(self.screen_rows):
            self.move_y(direction)

    # -- Scrolling ---------------------------------------------------------

    def scroll(self) -> None:
        """Bring ``(cursor_row, render_col)`` into the visible window."""
        self.render_col = 0
        if self.cursor_row < len(self.store):
            self.render_col = self.store.cx_to_rx(self.cursor_row, self.cursor_col)

        if self.cursor_row < self.row_offset:
            self.row_offset = self.cursor_row
        if self.cursor_row >= self.row_offset + self.screen_rows:
            self.row_offset = self.cursor_row - self.screen_rows + 1
        if self.render_col < self.col_offset:
            self.col_offset = self.render_col
        # a wide character under the cursor needs both of its cells on screen
        width = 1
        if self.cursor_row < len(self.store):
            content = self.store[self.cursor_row].content
            if self.cursor_col < len(content):
                width = char_width(content[self.cursor_col])
        if self.render_col + width > self.col_offset + self.screen_cols:
            self.col_offset = self.render_col + width - self.screen_cols

    # -- Row scanning ------------------------------------------------------

    def find_left(self, pred: Callable[[str], bool]) -> tuple[int, bool]:
        """Nearest index left of the cursor whose char satisfies *pred*."""
        if self.cursor_row >= len(self.store):
            return 0, False
        content = self.store[self.cursor_row].content
        for i in range(min(self.cursor_col, len(content)) - 1, -1, -1):
            if pred(content[i]):
                return i, True
        return 0, False

    def find_right(self, pred: Callable[[str], bool]) -> tuple[int, bool]:
        """First index at or right of the cursor whose char satisfies *pred*."""
        if self.cursor_row >= len(self.store):
            return 0, False
        content = self.store[self.cursor_row].content
        for i in range(self.cursor_col, len(content)):
            if pred(content[i]):
                return i, True
        return len(content), False

    # -- Word motions ------------------------------------------------------

    def move_word_forward(self) -> None:
        if self.cursor_row >= len(self.store):
            return
        blank, found = self.find_right(_is_blank)
        if found:
            content = self.store[self.cursor_row].content
            col = blank
            while col < len(content) and _is_blank(content[col]):
                col += 1
            if col < len(content):
                self.cursor_col = col
                return
        # No further word on this row: first word of the next row, if any.
        if self.cursor_row + 1 < len(self.store):
            self.cursor_row += 1
            nline = self.store[self.cursor_row].content
            self.cursor_col = len(nline) - len(nline.lstrip(" \t"))

    def move_word_backward(self) -> None:
        if self.cursor_row >= len(self.store):
            return
        if self.cursor_col == 0:
            if self.cursor_row == 0:
                return
            self.cursor_row -= 1
            self.cursor_col = len(self.store[self.cursor_row].content)
        content = self.store[self.cursor_row].content
        col = min(self.cursor_col, len(content))
        while col > 0 and _is_blank(content[col - 1]):
            col -= 1
        while col > 0 and not _is_blank(content[col - 1]):
            col -= 1
        self.cursor_col = col

    def first_non_blank(self) -> int:
        if self.cursor_row >= len(self.store):
            return 0
        line = self.store[self.cursor_row].content
        return len(line) - len(line.lstrip(" \t"))
