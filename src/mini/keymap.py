"""Key-map chain and the per-mode key handlers.

A key event is any object with ``key`` (Textual's symbolic key name) and
``character`` (the printable character, or None).
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from mini.editor import Editor

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    COMMAND = auto()
    INSERT = auto()
    PROMPT = auto()


class PromptStatus(Enum):
    CONFIRMED = auto()
    CANCELED = auto()


def is_printable(char: str | None) -> bool:
    return bool(char) and len(char) == 1 and char.isprintable()


class KeyHandler:
    """One entry of the dispatch chain."""

    name = ""

    def handle(self, editor: Editor, event) -> bool:
        """Return True if the key was consumed."""
        raise NotImplementedError


class Dispatcher:
    """Ordered chain of key handlers owned by one editor.

    The first handler that claims a key wins. A prompt replaces the whole
    chain with a single handler until it finishes.
    """

    def __init__(self, chain: list[KeyHandler]) -> None:
        self._chain: list[KeyHandler] = list(chain)
        self._saved: list[list[KeyHandler]] = []

    @property
    def chain(self) -> tuple[KeyHandler, ...]:
        return tuple(self._chain)

    @property
    def overridden(self) -> bool:
        return bool(self._saved)

    def dispatch(self, editor: Editor, event) -> bool:
        for handler in self._chain:
            if handler.handle(editor, event):
                logger.debug("%s handled %s", handler.name, event.key)
                return True
        return False

    def set_slot(self, index: int, handler: KeyHandler) -> None:
        self._chain[index] = handler

    def push_override(self, handler: KeyHandler) -> None:
        self._saved.append(self._chain)
        self._chain = [handler]

    def pop_override(self) -> None:
        if not self._saved:
            raise RuntimeError("no key-map override to pop")
        self._chain = self._saved.pop()


# -- Mode key-maps ---------------------------------------------------------


class GlobalKeymap(KeyHandler):
    """Keys that behave the same in Command and Insert mode."""

    name = "global"

    def handle(self, editor: Editor, event) -> bool:
        key = event.key

        if key == "ctrl+q":
            editor.quit()
        elif key == "ctrl+s":
            editor.save()
        elif key == "ctrl+o":
            editor.open_prompt()
        elif key == "ctrl+f":
            editor.find()
        elif key in ("ctrl+c", "escape"):
            editor.set_mode(EditorMode.COMMAND)
        elif key == "ctrl+l":
            pass
        elif key == "ctrl+w":
            editor.delete_word_backward()
        elif key == "delete":
            editor.delete_under_cursor()
        elif key == "up":
            editor.move_y(-1)
        elif key == "down":
            editor.move_y(1)
        elif key == "left":
            editor.move_x(-1)
        elif key == "right":
            editor.move_x(1)
        elif key == "home":
            editor.set_pos_x(0)
        elif key == "end":
            editor.set_pos_max_x()
        elif key == "pageup":
            editor.page(-1)
        elif key == "pagedown":
            editor.page(1)
        else:
            return False
        return True


class CommandKeymap(KeyHandler):
    """Vi-style movement and editing commands."""

    name = "command"

    def handle(self, editor: Editor, event) -> bool:
        key = event.key
        char = event.character or ""

        # movement
        if char == "h" or key == "backspace":
            editor.move_x(-1)
        elif char == "j":
            editor.move_y(1)
        elif char == "k":
            editor.move_y(-1)
        elif char == "l":
            editor.move_x(1)
        elif key == "enter":
            editor.move_y(1)
            editor.set_pos_x(editor.first_non_blank())
        elif char == "0":
            editor.set_pos_x(0)
        elif char == "$":
            editor.set_pos_max_x()
        elif char == "G":
            editor.set_pos_max_y()
        elif char == "g":
            editor.set_pos_y(0)
        elif char == "w":
            editor.move_word_forward()
        elif char == "b":
            editor.move_word_backward()

        # enter insert mode
        elif char == "i":
            editor.set_mode(EditorMode.INSERT)
        elif char == "I":
            editor.set_pos_x(editor.first_non_blank())
            editor.set_mode(EditorMode.INSERT)
        elif char == "a":
            editor.move_x(1)
            editor.set_mode(EditorMode.INSERT)
        elif char == "A":
            editor.set_pos_max_x()
            editor.set_mode(EditorMode.INSERT)
        elif char == "o":
            editor.open_row(below=True)
        elif char == "O":
            editor.open_row(below=False)

        # single-key edits
        elif char == "x":
            editor.delete_under_cursor()
        elif char == "D":
            editor.delete_current_row()
        elif char == "C":
            editor.clear_current_row()

        # search
        elif char == "/":
            editor.static_search_prompt()
        elif char == "n":
            editor.repeat_search()

        # Unbound keys are swallowed rather than passed on.
        return True


class InsertKeymap(KeyHandler):
    """Text entry."""

    name = "insert"

    def handle(self, editor: Editor, event) -> bool:
        key = event.key
        char = event.character

        if key == "enter":
            editor.insert_newline()
        elif key in ("backspace", "ctrl+h"):
            editor.delete_char()
        elif key == "tab":
            editor.insert_char("\t")
        elif is_printable(char):
            editor.insert_char(char)
        else:
            return False
        return True


# -- Prompt ----------------------------------------------------------------


class PromptHandler(KeyHandler):
    """Reads a line of input in the message bar.

    *template* is a %-format string receiving the text typed so far.
    *on_key* sees every key after the text has been updated; *on_done*
    receives the outcome once escape or enter ends the prompt, after the
    previous key-map chain has been restored.
    """

    name = "prompt"

    def __init__(
        self,
        template: str,
        on_done: Callable[[PromptStatus, str], None],
        on_key: Callable[[str, object], None] | None = None,
    ) -> None:
        self.template = template
        self.text = ""
        self._on_done = on_done
        self._on_key = on_key

    def handle(self, editor: Editor, event) -> bool:
        key = event.key
        char = event.character

        if key == "escape":
            self._finish(editor, PromptStatus.CANCELED)
            return True
        if key == "enter":
            self._finish(editor, PromptStatus.CONFIRMED)
            return True

        if key in ("backspace", "delete", "ctrl+h"):
            self.text = self.text[:-1]
        elif is_printable(char):
            self.text += char

        editor.set_status_message(self.template, self.text)
        if self._on_key is not None:
            self._on_key(self.text, event)
        return True

    def _finish(self, editor: Editor, status: PromptStatus) -> None:
        logger.debug("prompt %r finished: %s", self.template, status.name)
        editor.dispatcher.pop_override()
        editor.set_status_message("")
        self._on_done(status, self.text)
