"""Plain-text file load/save."""

from __future__ import annotations

from pathlib import Path


def read_lines(path: str | Path) -> list[str]:
    """Return the lines of *path* without their line terminators.

    Raises FileNotFoundError if *path* does not exist.
    """
    text = Path(path).read_bytes().decode("utf-8", errors="surrogateescape")
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def write_lines(path: str | Path, lines: list[str]) -> int:
    """Write every line newline-terminated; return the number of bytes written."""
    data = "".join(f"{line}\n" for line in lines).encode(
        "utf-8", errors="surrogateescape"
    )
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return len(data)
