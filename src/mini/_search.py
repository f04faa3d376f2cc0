"""Search mixin for Editor."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from mini.keymap import PromptStatus
from mini.rows import RowStore
from mini.syntax import Highlight

logger = logging.getLogger(__name__)


def find_substring(text: str, query: str) -> int:
    """Leftmost index of *query* in *text*, or -1.

    An empty query matches at 0.
    """
    for i in range(len(text) - len(query) + 1):
        for j, q in enumerate(query):
            if text[i + j] != q:
                break
        else:
            return i
    return -1


@dataclass
class SearchSession:
    """State of one interactive search, discarded when it ends."""

    saved_row: int
    saved_col: int
    saved_row_offset: int
    saved_col_offset: int
    query: str = ""
    last_match: int = -1
    direction: int = 1
    # Row whose highlights carry the match overlay, and its baseline copy.
    overlay_row: int = -1
    overlay_saved: list[Highlight] = field(default_factory=list)

    def restore_highlight(self, store: RowStore) -> None:
        if 0 <= self.overlay_row < len(store):
            store[self.overlay_row].highlights = self.overlay_saved
        self.overlay_row = -1
        self.overlay_saved = []

    def overlay(self, store: RowStore, y: int, start: int, end: int) -> None:
        """Mark render columns ``[start, end)`` of row *y* as a match."""
        row = store[y]
        self.overlay_row = y
        self.overlay_saved = row.highlights
        hl = row.highlights[:]
        for i in range(start, min(end, len(hl))):
            hl[i] = Highlight.MATCH
        row.highlights = hl


class SearchMixin:
    """Static and incremental search for Editor."""

    # -- Static search -----------------------------------------------------

    def find_static(self, query: str) -> bool:
        """Move to the next occurrence of *query* after the cursor.

        Scans the rest of the current row, then the following rows. Does
        not wrap past the end of the document.
        """
        store = self.store
        if not query:
            return False
        for y in range(self.cursor_row, len(store)):
            content = store[y].content
            start = self.cursor_col + 1 if y == self.cursor_row else 0
            if start > len(content):
                continue
            idx = find_substring(content[start:], query)
            if idx != -1:
                self.cursor_row = y
                self.cursor_col = start + idx
                return True
        self.set_status_message("Pattern not found: %s", query)
        return False

    def static_search_prompt(self) -> None:
        self.prompt("/%s", self._on_static_search_done)

    def _on_static_search_done(self, status: PromptStatus, query: str) -> None:
        if status is PromptStatus.CANCELED or not query:
            return
        self._last_query = query
        self.find_static(query)

    def repeat_search(self) -> None:
        if not self._last_query:
            self.set_status_message("No previous search")
            return
        self.find_static(self._last_query)

    # -- Incremental search ------------------------------------------------

    def find(self) -> None:
        """Start an interactive search at the cursor."""
        self._search = SearchSession(
            saved_row=self.cursor_row,
            saved_col=self.cursor_col,
            saved_row_offset=self.row_offset,
            saved_col_offset=self.col_offset,
        )
        self.prompt(
            "Search: %s (Use ESC/Arrows/Enter)",
            self._on_search_done,
            on_key=self._on_search_key,
        )

    def _on_search_key(self, query: str, event) -> None:
        session = self._search
        if session is None:
            return
        key = event.key
        if key in ("down", "right"):
            session.direction = 1
        elif key in ("up", "left"):
            session.direction = -1
        elif query != session.query:
            session.query = query
            session.last_match = -1
            session.direction = 1
        else:
            return
        self._search_step(session)

    def _search_step(self, session: SearchSession) -> None:
        store = self.store
        session.restore_highlight(store)
        n = len(store)
        if not session.query or n == 0:
            return

        if session.last_match == -1:
            # From scratch: the origin row is examined first.
            current = min(session.saved_row, n - 1) - 1
            session.direction = 1
        else:
            current = session.last_match

        for _ in range(n):
            current = (current + session.direction) % n
            idx = find_substring(store[current].content, session.query)
            if idx == -1:
                continue
            session.last_match = current
            self.cursor_row = current
            self.cursor_col = idx
            start = store.render_index(current, idx)
            end = store.render_index(current, idx + len(session.query))
            session.overlay(store, current, start, end)
            # Scroll up from past the end so the match lands on the top row.
            self.row_offset = n
            return

    def _on_search_done(self, status: PromptStatus, query: str) -> None:
        session = self._search
        self._search = None
        if session is None:
            return
        session.restore_highlight(self.store)
        if status is PromptStatus.CANCELED:
            self.cursor_row = session.saved_row
            self.cursor_col = session.saved_col
            self.row_offset = session.saved_row_offset
            self.col_offset = session.saved_col_offset
            logger.debug("search canceled")
            return
        if query:
            self._last_query = query
        logger.debug("search committed at (%d, %d)", self.cursor_col, self.cursor_row)
