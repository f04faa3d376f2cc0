"""Assemble one screen frame from editor state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.cells import cell_len
from rich.text import Text

from mini.config import VERSION
from mini.keymap import EditorMode
from mini.rows import char_width
from mini.syntax import HIGHLIGHT_STYLE

if TYPE_CHECKING:
    from mini.editor import Editor

WELCOME = f"Mini editor -- version {VERSION}"

MODE_STYLE = {
    EditorMode.COMMAND: "bold white on dark_green",
    EditorMode.INSERT: "bold white on dark_blue",
    EditorMode.PROMPT: "bold white on dark_magenta",
}


def control_symbol(ch: str) -> str:
    """Printable stand-in for a non-printable character."""
    code = ord(ch)
    if code < 26:
        return chr(ord("@") + code)
    return "?"


def _with_cursor(style: str) -> str:
    if not style or style == "reverse":
        return "reverse"
    return f"{style} reverse"


def _draw_row(editor: Editor, y: int, cursor_rx: int = -1) -> Text:
    """Draw the cells ``[col_offset, col_offset + screen_cols)`` of row *y*.

    A wide character split by either edge of the window becomes blank
    cells so the line never overflows the screen.
    """
    row = editor.store[y]
    left = editor.col_offset
    right = left + editor.screen_cols
    line = Text()
    cell = 0
    cursor_drawn = False
    for ch, hl in zip(row.render, row.highlights):
        start = cell
        cell += char_width(ch)
        if start >= right:
            break
        if cell <= left:
            continue
        if start < left or cell > right:
            line.append(" " * (min(cell, right) - max(start, left)))
            continue
        if not ch.isprintable():
            text, style = control_symbol(ch), "reverse"
        else:
            text, style = ch, HIGHLIGHT_STYLE[hl]
        if start == cursor_rx:
            style = _with_cursor(style)
            cursor_drawn = True
        line.append(text, style=style)
    if not cursor_drawn and left <= cursor_rx < right:
        line.append(" " * (cursor_rx - left - line.cell_len))
        line.append(" ", style="reverse")
    return line


def _draw_welcome(width: int) -> Text:
    msg = WELCOME[:width]
    padding = (width - len(msg)) // 2
    line = Text()
    if padding:
        line.append("~", style="dim blue")
        padding -= 1
    line.append(" " * padding + msg)
    return line


def draw_rows(editor: Editor, cursor_rx: int = -1) -> list[Text]:
    """Draw the text area; *cursor_rx* marks the cursor cell on its row."""
    lines: list[Text] = []
    numrows = len(editor.store)
    for screen_y in range(editor.screen_rows):
        y = screen_y + editor.row_offset
        if y < numrows:
            rx = cursor_rx if y == editor.cursor_row else -1
            lines.append(_draw_row(editor, y, rx))
            continue
        if numrows == 0 and screen_y == editor.screen_rows // 3:
            line = _draw_welcome(editor.screen_cols)
        else:
            line = Text("~", style="dim blue")
        if y == editor.cursor_row and cursor_rx == editor.col_offset:
            line.stylize("reverse", 0, 1)
        lines.append(line)
    return lines


def draw_status_bar(editor: Editor) -> Text:
    width = editor.screen_cols
    mode = editor.mode
    mode_label = f" {mode.name} "
    numrows = len(editor.store)
    name = (editor.filename or "[No Name]")[:20]
    left = f" {name} - {numrows} lines"
    if editor.dirty:
        left += " (modified)"
    filetype = editor.syntax.filetype if editor.syntax else "no ft"
    right = f"{filetype} | {editor.cursor_row + 1}/{numrows} "

    bar = Text()
    bar.append(mode_label, style=MODE_STYLE[mode])
    bar.append(left, style="reverse")
    spacer = width - cell_len(mode_label) - cell_len(left) - cell_len(right)
    if spacer > 0:
        bar.append(" " * spacer, style="reverse")
    bar.append(right, style="reverse")
    bar.truncate(width)
    return bar


def draw_message_bar(editor: Editor) -> Text:
    message = Text(editor.visible_status_message())
    message.truncate(editor.screen_cols)
    return message


def render_frame(editor: Editor) -> Text:
    """Scroll the cursor into view and draw the text area and both bars."""
    editor.scroll()
    prompting = editor.mode is EditorMode.PROMPT
    lines = draw_rows(editor, -1 if prompting else editor.render_col)
    message = draw_message_bar(editor)
    if prompting and message.cell_len < editor.screen_cols:
        message.append(" ", style="reverse")
    return Text("\n").join(lines + [draw_status_bar(editor), message])
