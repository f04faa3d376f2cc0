"""Filetype profiles and the incremental, cross-line syntax highlighter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mini.rows import Row


class Highlight(Enum):
    NORMAL = auto()
    COMMENT = auto()
    MLCOMMENT = auto()
    KEYWORD1 = auto()
    KEYWORD2 = auto()
    STRING = auto()
    NUMBER = auto()
    MATCH = auto()


HIGHLIGHT_STYLE = {
    Highlight.NORMAL: "",
    Highlight.COMMENT: "bright_black",
    Highlight.MLCOMMENT: "bright_black",
    Highlight.KEYWORD1: "bright_blue",
    Highlight.KEYWORD2: "bright_cyan",
    Highlight.STRING: "cyan",
    Highlight.NUMBER: "yellow",
    Highlight.MATCH: "green",
}


@dataclass(frozen=True)
class SyntaxProfile:
    """Highlighting rules for one filetype.

    Empty comment markers disable the corresponding rule.
    """

    filetype: str
    filematch: tuple[str, ...]
    keywords: frozenset[str]
    keywords2: frozenset[str]
    singleline_comment: str = ""
    multiline_start: str = ""
    multiline_end: str = ""
    highlight_strings: bool = True
    highlight_numbers: bool = True


HLDB: tuple[SyntaxProfile, ...] = (
    SyntaxProfile(
        filetype="c",
        filematch=(".c", ".h", "cpp", ".cc"),
        keywords=frozenset({
            "switch", "if", "while", "for", "break", "continue", "return",
            "else", "struct", "union", "typedef", "static", "enum", "class",
            "case",
        }),
        keywords2=frozenset({
            "int", "long", "double", "float", "char", "unsigned", "signed",
            "void",
        }),
        singleline_comment="//",
        multiline_start="/*",
        multiline_end="*/",
    ),
    SyntaxProfile(
        filetype="go",
        filematch=(".go",),
        keywords=frozenset({
            "break", "default", "func", "interface", "select", "case", "defer",
            "go", "map", "struct", "chan", "else", "goto", "package", "switch",
            "const", "fallthrough", "if", "range", "type", "continue", "for",
            "import", "return", "var",
        }),
        keywords2=frozenset({
            "append", "bool", "byte", "cap", "close", "complex", "complex64",
            "complex128", "error", "uint16", "copy", "false", "float32",
            "float64", "imag", "int", "int8", "int16", "uint32", "int32",
            "int64", "iota", "len", "make", "new", "nil", "panic", "uint64",
            "print", "println", "real", "recover", "rune", "string", "true",
            "uint", "uint8", "uintptr",
        }),
        singleline_comment="//",
        multiline_start="/*",
        multiline_end="*/",
    ),
    SyntaxProfile(
        filetype="javascript",
        filematch=(".js",),
        keywords=frozenset({
            "abstract", "arguments", "await", "boolean", "break", "char",
            "debugger", "do", "double", "export", "final", "finally", "goto",
            "import", "in", "let", "null", "public", "super", "throw", "try",
            "volatile", "byte", "class", "else", "extends", "float", "if",
            "instanceof", "long",
        }),
        keywords2=frozenset({
            "package", "return", "switch", "throws", "typeof", "case", "const",
            "default", "enum", "for", "implements", "of", "native", "private",
            "short", "synchronized", "transient", "var", "while", "catch",
            "continue", "delete", "eval", "false", "function", "int", "this",
            "true", "yield", "interface", "new", "protected", "static", "void",
            "with",
        }),
        singleline_comment="//",
        multiline_start="/*",
        multiline_end="*/",
    ),
    SyntaxProfile(
        filetype="python",
        filematch=(".py",),
        keywords=frozenset({
            "False", "None", "True", "and", "as", "assert", "break", "class",
            "continue", "pass", "def", "yield", "del", "elif", "else",
            "except", "finally", "for", "from", "print",
        }),
        keywords2=frozenset({
            "if", "import", "in", "is", "lambda", "nonlocal", "not", "or",
            "global", "raise", "return", "try", "while", "with",
        }),
        singleline_comment="#",
        multiline_start='"""',
        multiline_end='"""',
    ),
)

_SEPARATORS = frozenset(",.()+-/*=~%<>[]{}:;")


def is_separator(ch: str) -> bool:
    return ch.isspace() or ch in _SEPARATORS


def select_syntax(filename: str | None) -> SyntaxProfile | None:
    """Return the first profile whose patterns match *filename*.

    Patterns starting with ``.`` must equal the file extension, any other
    pattern matches as a substring of the name.
    """
    if not filename:
        return None
    ext = os.path.splitext(filename)[1]
    for profile in HLDB:
        for pattern in profile.filematch:
            if pattern.startswith("."):
                if pattern == ext:
                    return profile
            elif pattern in filename:
                return profile
    return None


def _match_keyword(text: str, idx: int, keywords: frozenset[str]) -> int:
    """Length of the keyword that is a whole token at *idx*, or 0."""
    best = 0
    for kw in keywords:
        end = idx + len(kw)
        if not text.startswith(kw, idx):
            continue
        if end < len(text) and not is_separator(text[end]):
            continue
        best = max(best, len(kw))
    return best


def highlight_row(row: Row, profile: SyntaxProfile | None, open_before: bool) -> bool:
    """Recompute ``row.highlights`` in a single pass over ``row.render``.

    *open_before* is the previous row's ``open_comment``. Returns True if
    the row's own ``open_comment`` changed, meaning the next row's seed
    is stale.
    """
    text = row.render
    n = len(text)
    hl = [Highlight.NORMAL] * n
    row.highlights = hl

    in_comment = False
    if profile is not None:
        scs = profile.singleline_comment
        mcs = profile.multiline_start
        mce = profile.multiline_end

        prev_sep = True
        quote = ""
        in_comment = open_before

        idx = 0
        while idx < n:
            ch = text[idx]
            prev_hl = hl[idx - 1] if idx > 0 else Highlight.NORMAL

            if scs and not quote and not in_comment and text.startswith(scs, idx):
                for j in range(idx, n):
                    hl[j] = Highlight.COMMENT
                break

            if mcs and mce and not quote:
                if in_comment:
                    if text.startswith(mce, idx):
                        for j in range(idx, min(idx + len(mce), n)):
                            hl[j] = Highlight.MLCOMMENT
                        idx += len(mce)
                        in_comment = False
                        prev_sep = True
                    else:
                        hl[idx] = Highlight.MLCOMMENT
                        idx += 1
                    continue
                if text.startswith(mcs, idx):
                    for j in range(idx, min(idx + len(mcs), n)):
                        hl[j] = Highlight.MLCOMMENT
                    idx += len(mcs)
                    in_comment = True
                    continue

            if profile.highlight_strings:
                if quote:
                    hl[idx] = Highlight.STRING
                    if ch == "\\" and idx + 1 < n:
                        hl[idx + 1] = Highlight.STRING
                        idx += 2
                        continue
                    if ch == quote:
                        quote = ""
                    idx += 1
                    prev_sep = True
                    continue
                if ch in ("'", '"'):
                    quote = ch
                    hl[idx] = Highlight.STRING
                    idx += 1
                    continue

            if profile.highlight_numbers:
                if (ch.isdecimal() and (prev_sep or prev_hl == Highlight.NUMBER)) or (
                    ch == "." and prev_hl == Highlight.NUMBER
                ):
                    hl[idx] = Highlight.NUMBER
                    idx += 1
                    prev_sep = False
                    continue

            if prev_sep:
                matched = False
                for keywords, mark in (
                    (profile.keywords, Highlight.KEYWORD1),
                    (profile.keywords2, Highlight.KEYWORD2),
                ):
                    klen = _match_keyword(text, idx, keywords)
                    if klen:
                        for j in range(idx, idx + klen):
                            hl[j] = mark
                        idx += klen
                        matched = True
                        break
                if matched:
                    prev_sep = False
                    continue

            prev_sep = is_separator(ch)
            idx += 1

    changed = row.open_comment != in_comment
    row.open_comment = in_comment
    return changed


def update_highlights(
    rows: list[Row], start: int, profile: SyntaxProfile | None
) -> int:
    """Re-highlight ``rows[start]`` and every following row whose seed changed.

    Works as a loop rather than recursion so long files cannot exhaust the
    stack. Returns the number of rows recomputed.
    """
    y = start
    count = 0
    while 0 <= y < len(rows):
        open_before = y > 0 and rows[y - 1].open_comment
        changed = highlight_row(rows[y], profile, open_before)
        count += 1
        if not changed:
            break
        y += 1
    return count
