"""Row store: the document as an ordered list of rows."""

from __future__ import annotations

import logging
import unicodedata
from dataclasses import dataclass, field

from mini.syntax import Highlight, SyntaxProfile, highlight_row, update_highlights

logger = logging.getLogger(__name__)


@dataclass
class Row:
    content: str
    render: str = ""
    highlights: list[Highlight] = field(default_factory=list)
    # True when a multi-line comment is still open at the end of this row.
    open_comment: bool = False

    def __len__(self) -> int:
        return len(self.content)


_WIDTH_CACHE: dict[str, int] = {}


def char_width(ch: str) -> int:
    """Return display width of a character (2 for fullwidth/wide)."""
    if ch < "\u0100":
        return 1
    w = _WIDTH_CACHE.get(ch)
    if w is None:
        w = 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1
        _WIDTH_CACHE[ch] = w
    return w


def expand_tabs(content: str, tab_stop: int) -> str:
    """Expand tabs to the next tab stop, counting screen cells."""
    out: list[str] = []
    col = 0
    for ch in content:
        if ch == "\t":
            # A tab always advances at least one column.
            out.append(" ")
            col += 1
            while col % tab_stop:
                out.append(" ")
                col += 1
        else:
            out.append(ch)
            col += char_width(ch)
    return "".join(out)


class RowStore:
    """Owns the rows of one document and keeps their derived state fresh.

    Every content change recomputes the row's ``render`` and ``highlights``
    (and, through the highlighter, any following rows whose multi-line
    comment seed changed). Row identity is its list position; no row
    stores its own index.

    Out-of-range positions are ignored so that key handlers never crash.
    """

    def __init__(
        self,
        lines: list[str] | None = None,
        *,
        tab_stop: int = 8,
        syntax: SyntaxProfile | None = None,
    ) -> None:
        self.tab_stop: int = tab_stop
        self.syntax: SyntaxProfile | None = syntax
        self.rows: list[Row] = []
        self.dirty: int = 0
        for line in lines or []:
            self.rows.append(Row(line))
        self._rebuild()

    def __len__(self) -> int:
        return len(self.rows)

    def __getitem__(self, y: int) -> Row:
        return self.rows[y]

    def __iter__(self):
        return iter(self.rows)

    def lines(self) -> list[str]:
        return [row.content for row in self.rows]

    def load(self, lines: list[str]) -> None:
        """Replace the whole document; the result is not dirty."""
        self.rows = [Row(line) for line in lines]
        self._rebuild()
        self.dirty = 0

    def set_syntax(self, syntax: SyntaxProfile | None) -> None:
        self.syntax = syntax
        self._rebuild()

    def _rebuild(self) -> None:
        open_before = False
        for row in self.rows:
            row.render = expand_tabs(row.content, self.tab_stop)
            highlight_row(row, self.syntax, open_before)
            open_before = row.open_comment

    def _update_row(self, y: int) -> None:
        row = self.rows[y]
        row.render = expand_tabs(row.content, self.tab_stop)
        update_highlights(self.rows, y, self.syntax)

    # -- Coordinates -------------------------------------------------------

    def cx_to_rx(self, y: int, cx: int) -> int:
        """Screen cell of content index *cx* in row *y*."""
        if not 0 <= y < len(self.rows):
            return 0
        rx = 0
        for ch in self.rows[y].content[:cx]:
            if ch == "\t":
                rx += self.tab_stop - (rx % self.tab_stop)
            else:
                rx += char_width(ch)
        return rx

    def render_index(self, y: int, cx: int) -> int:
        """Index into ``render`` (and ``highlights``) of content index *cx*."""
        if not 0 <= y < len(self.rows):
            return 0
        return len(expand_tabs(self.rows[y].content[:cx], self.tab_stop))

    # -- Structural edits --------------------------------------------------

    def insert_row(self, at: int, content: str) -> None:
        if not 0 <= at <= len(self.rows):
            logger.debug("insert_row(%d) out of range", at)
            return
        row = Row(content)
        # Seed with the predecessor's state so an unchanged end state
        # does not force the following rows to be recomputed.
        if at > 0:
            row.open_comment = self.rows[at - 1].open_comment
        self.rows.insert(at, row)
        self._update_row(at)
        self.dirty += 1

    def delete_row(self, at: int) -> None:
        if not 0 <= at < len(self.rows):
            logger.debug("delete_row(%d) out of range", at)
            return
        del self.rows[at]
        # The row now at *at* has a new predecessor.
        if at < len(self.rows):
            update_highlights(self.rows, at, self.syntax)
        self.dirty += 1

    def set_row(self, at: int, content: str) -> None:
        if not 0 <= at < len(self.rows):
            logger.debug("set_row(%d) out of range", at)
            return
        self.rows[at].content = content
        self._update_row(at)
        self.dirty += 1

    def split_row(self, y: int, x: int) -> None:
        """Break row *y* at content index *x* (newline insertion)."""
        if y == len(self.rows):
            self.insert_row(y, "")
            return
        if not 0 <= y < len(self.rows):
            return
        row = self.rows[y]
        x = max(0, min(x, len(row.content)))
        if x == 0:
            self.insert_row(y, "")
            return
        tail = row.content[x:]
        self.insert_row(y + 1, tail)
        self.rows[y].content = row.content[:x]
        self._update_row(y)

    def merge_with_previous(self, y: int) -> int:
        """Append row *y* to row *y-1* and delete it.

        Returns the length of the previous row before the merge (the
        cursor column of the join point), or -1 if nothing happened.
        """
        if not 0 < y < len(self.rows):
            return -1
        prev = self.rows[y - 1]
        join_at = len(prev.content)
        prev.content += self.rows[y].content
        del self.rows[y]
        self._update_row(y - 1)
        if y < len(self.rows):
            update_highlights(self.rows, y, self.syntax)
        self.dirty += 1
        return join_at

    # -- Character edits ---------------------------------------------------

    def insert_char(self, y: int, x: int, c: str) -> None:
        if not 0 <= y < len(self.rows):
            return
        row = self.rows[y]
        x = max(0, min(x, len(row.content)))
        row.content = row.content[:x] + c + row.content[x:]
        self._update_row(y)
        self.dirty += 1

    def delete_char(self, y: int, x: int) -> None:
        if not 0 <= y < len(self.rows):
            return
        row = self.rows[y]
        if not 0 <= x < len(row.content):
            return
        row.content = row.content[:x] + row.content[x + 1 :]
        self._update_row(y)
        self.dirty += 1

    def delete_range(self, y: int, start: int, end: int) -> None:
        if not 0 <= y < len(self.rows):
            return
        row = self.rows[y]
        start = max(0, start)
        end = min(end, len(row.content))
        if start >= end:
            return
        row.content = row.content[:start] + row.content[end:]
        self._update_row(y)
        self.dirty += 1
