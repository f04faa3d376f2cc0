"""Modal editor core: document, cursor, mode and key dispatch."""

from __future__ import annotations

import logging
import time
from typing import Callable

from mini._cursor import CursorMixin
from mini._search import SearchMixin, SearchSession
from mini.config import EditorConfig
from mini.fileio import read_lines, write_lines
from mini.keymap import (
    CommandKeymap,
    Dispatcher,
    EditorMode,
    GlobalKeymap,
    InsertKeymap,
    KeyHandler,
    PromptHandler,
    PromptStatus,
)
from mini.rows import RowStore
from mini.syntax import SyntaxProfile, select_syntax

logger = logging.getLogger(__name__)


class QuitEditor(Exception):
    """Raised by the quit action; the host shuts down on it."""


class Editor(CursorMixin, SearchMixin):
    """A modal text editor, independent of any terminal.

    The host feeds key events to :meth:`process_key` and draws the state
    with :func:`mini.render.render_frame`.
    """

    # Position of the mode key-map in the dispatch chain.
    MODE_SLOT = 1

    def __init__(
        self,
        lines: list[str] | None = None,
        *,
        filename: str | None = None,
        config: EditorConfig | None = None,
        screen_rows: int = 24,
        screen_cols: int = 80,
    ) -> None:
        self.config: EditorConfig = config or EditorConfig()
        self.filename: str | None = filename
        self.syntax: SyntaxProfile | None = select_syntax(filename)
        self.store = RowStore(lines, tab_stop=self.config.tab_stop, syntax=self.syntax)
        self.cursor_row: int = 0
        self.cursor_col: int = 0
        self.render_col: int = 0
        self.row_offset: int = 0
        self.col_offset: int = 0
        self.screen_rows: int = max(1, screen_rows)
        self.screen_cols: int = max(1, screen_cols)
        self.status_msg: str = ""
        self.status_time: float = 0.0
        self._quit_counter: int = 0
        # Search state
        self._search: SearchSession | None = None
        self._last_query: str = ""

        self._keymaps: dict[EditorMode, KeyHandler] = {
            EditorMode.COMMAND: CommandKeymap(),
            EditorMode.INSERT: InsertKeymap(),
        }
        self._mode: EditorMode = EditorMode.COMMAND
        self.dispatcher = Dispatcher(
            [GlobalKeymap(), self._keymaps[EditorMode.COMMAND]]
        )

    # -- State -------------------------------------------------------------

    @property
    def mode(self) -> EditorMode:
        if self.dispatcher.overridden:
            return EditorMode.PROMPT
        return self._mode

    @property
    def dirty(self) -> bool:
        return self.store.dirty > 0

    def set_mode(self, mode: EditorMode) -> None:
        if mode is EditorMode.PROMPT:
            raise ValueError("prompt mode is entered through prompt()")
        if mode is EditorMode.INSERT and self._check_readonly():
            return
        if mode is self._mode:
            return
        logger.debug("mode %s -> %s", self._mode.name, mode.name)
        self._mode = mode
        self.dispatcher.set_slot(self.MODE_SLOT, self._keymaps[mode])

    def set_screen_size(self, rows: int, cols: int) -> None:
        self.screen_rows = max(1, rows)
        self.screen_cols = max(1, cols)

    def set_status_message(self, fmt: str, *args: object) -> None:
        self.status_msg = fmt % args if args else fmt
        self.status_time = time.monotonic()

    def visible_status_message(self) -> str:
        if not self.status_msg:
            return ""
        if time.monotonic() - self.status_time >= self.config.message_timeout:
            return ""
        return self.status_msg

    def _check_readonly(self) -> bool:
        """Set the status and return True if the buffer is read-only."""
        if self.config.read_only:
            self.set_status_message("[readonly]")
        return self.config.read_only

    # -- Key processing ----------------------------------------------------

    def process_key(self, event) -> bool:
        """Dispatch one key event; returns True if a key-map consumed it."""
        handled = self.dispatcher.dispatch(self, event)
        if event.key != "ctrl+q":
            self._quit_counter = 0
        self.clamp_cursor()
        return handled

    def prompt(
        self,
        template: str,
        on_done: Callable[[PromptStatus, str], None],
        on_key: Callable[[str, object], None] | None = None,
    ) -> None:
        """Read a line in the message bar, overriding the active key-maps."""
        logger.debug("prompt %r started", template)
        self.dispatcher.push_override(PromptHandler(template, on_done, on_key))
        self.set_status_message(template, "")

    def quit(self) -> None:
        if self.dirty and self._quit_counter < self.config.quit_times:
            self.set_status_message(
                "WARNING!!! File has unsaved changes. "
                "Press Ctrl-Q %d more times to quit.",
                self.config.quit_times - self._quit_counter,
            )
            self._quit_counter += 1
            return
        raise QuitEditor()

    # -- Files -------------------------------------------------------------

    def open_file(self, filename: str) -> bool:
        """Load *filename*; a missing file starts an empty, modified buffer."""
        try:
            lines = read_lines(filename)
            missing = False
        except FileNotFoundError:
            lines = []
            missing = True
        except (OSError, UnicodeError) as exc:
            logger.error("cannot open %s: %s", filename, exc)
            self.set_status_message("Can't open! %s", exc)
            return False

        self.filename = filename
        self.syntax = select_syntax(filename)
        self.store.syntax = self.syntax
        self.store.load(lines)
        if missing:
            self.store.dirty = 1
            self.set_status_message("New file: %s", filename)
        logger.info("opened %s (%d lines, new=%s)", filename, len(lines), missing)
        self.cursor_row = 0
        self.cursor_col = 0
        self.row_offset = 0
        self.col_offset = 0
        return True

    def open_prompt(self) -> None:
        if self.dirty:
            self.set_status_message("Unsaved changes! Save with Ctrl-S first.")
            return
        self.prompt("Open: %s (ESC to cancel)", self._on_open_done)

    def _on_open_done(self, status: PromptStatus, filename: str) -> None:
        if status is PromptStatus.CANCELED:
            self.set_status_message("Open aborted")
            return
        if not filename.strip():
            self.set_status_message("Open aborted: empty filename")
            return
        self.open_file(filename.strip())

    def save(self) -> None:
        if self._check_readonly():
            return
        if not self.filename:
            self.prompt("Save as: %s (ESC to cancel)", self._on_save_as_done)
            return
        self._write()

    def _on_save_as_done(self, status: PromptStatus, filename: str) -> None:
        if status is PromptStatus.CANCELED or not filename.strip():
            self.set_status_message("Save aborted")
            return
        self.filename = filename.strip()
        self.syntax = select_syntax(self.filename)
        self.store.set_syntax(self.syntax)
        self._write()

    def _write(self) -> None:
        try:
            written = write_lines(self.filename, self.store.lines())
        except OSError as exc:
            logger.error("cannot save %s: %s", self.filename, exc)
            self.set_status_message("Can't save! I/O error: %s", exc)
            return
        self.store.dirty = 0
        logger.info("saved %s (%d bytes)", self.filename, written)
        self.set_status_message("%d bytes written to disk", written)

    # -- Editing at the cursor ---------------------------------------------

    def insert_char(self, c: str) -> None:
        if self._check_readonly():
            return
        if self.cursor_row >= len(self.store):
            self.store.insert_row(len(self.store), "")
        self.store.insert_char(self.cursor_row, self.cursor_col, c)
        self.cursor_col += 1

    def insert_newline(self) -> None:
        if self._check_readonly():
            return
        if self.cursor_row >= len(self.store):
            self.store.insert_row(len(self.store), "")
        self.store.split_row(self.cursor_row, self.cursor_col)
        self.cursor_row += 1
        self.cursor_col = 0

    def delete_char(self) -> None:
        """Delete the character before the cursor, joining rows at column 0."""
        if self._check_readonly():
            return
        if self.cursor_row >= len(self.store):
            return
        if self.cursor_col == 0 and self.cursor_row == 0:
            return
        if self.cursor_col > 0:
            self.store.delete_char(self.cursor_row, self.cursor_col - 1)
            self.cursor_col -= 1
        else:
            join_at = self.store.merge_with_previous(self.cursor_row)
            self.cursor_row -= 1
            self.cursor_col = join_at

    def delete_under_cursor(self) -> None:
        if self._check_readonly():
            return
        self.store.delete_char(self.cursor_row, self.cursor_col)

    def delete_word_backward(self) -> None:
        """Delete from just after the previous space up to the cursor."""
        if self._check_readonly():
            return
        if self.cursor_row >= len(self.store) or self.cursor_col == 0:
            return
        content = self.store[self.cursor_row].content
        end = min(self.cursor_col, len(content))
        # Trailing spaces before the cursor belong to the deleted word.
        self.cursor_col = len(content[:end].rstrip(" "))
        space, found = self.find_left(lambda ch: ch == " ")
        begin = space + 1 if found else 0
        self.store.delete_range(self.cursor_row, begin, end)
        self.cursor_col = begin

    def open_row(self, below: bool = True) -> None:
        """Insert an empty row below or above the cursor and enter Insert mode."""
        if self._check_readonly():
            return
        at = self.cursor_row + 1 if below and len(self.store) else self.cursor_row
        self.store.insert_row(min(at, len(self.store)), "")
        self.cursor_row = min(at, len(self.store) - 1)
        self.cursor_col = 0
        self.set_mode(EditorMode.INSERT)

    def delete_current_row(self) -> None:
        if self._check_readonly():
            return
        self.store.delete_row(self.cursor_row)
        self.clamp_cursor()

    def clear_current_row(self) -> None:
        if self._check_readonly():
            return
        if self.cursor_row < len(self.store):
            self.store.set_row(self.cursor_row, "")
        self.cursor_col = 0
