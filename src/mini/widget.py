"""Textual widget hosting the editor core."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text
from textual import events
from textual.message import Message
from textual.widget import Widget

from mini.config import EditorConfig
from mini.editor import Editor, QuitEditor
from mini.render import render_frame

# Status bar and message bar.
RESERVED_ROWS = 2


class MiniEditor(Widget, can_focus=True):
    """Feeds key events to an :class:`Editor` and draws its frame."""

    DEFAULT_CSS = """
    MiniEditor {
        height: 1fr;
        background: $surface;
    }
    """

    @dataclass
    class Quit(Message):
        pass

    def __init__(
        self,
        filename: str = "",
        *,
        config: EditorConfig | None = None,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self.editor = Editor(config=config)
        if filename:
            self.editor.open_file(filename)

    def render(self) -> Text:
        width = self.content_region.width
        height = self.content_region.height
        if height <= RESERVED_ROWS or width < 1:
            return Text("(too small)")
        self.editor.set_screen_size(height - RESERVED_ROWS, width)
        return render_frame(self.editor)

    def _expire_message_later(self) -> None:
        """Repaint once the current status message has timed out."""
        if self.editor.status_msg:
            self.set_timer(self.editor.config.message_timeout, self.refresh)

    def on_mount(self) -> None:
        self._expire_message_later()

    def on_key(self, event: events.Key) -> None:
        event.prevent_default()
        event.stop()
        shown = self.editor.status_time
        try:
            self.editor.process_key(event)
        except QuitEditor:
            self.post_message(self.Quit())
            return
        if self.editor.status_time != shown:
            self._expire_message_later()
        self.refresh()
