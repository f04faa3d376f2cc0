"""Editor configuration."""

from __future__ import annotations

from dataclasses import dataclass

VERSION = "0.1.0"


@dataclass
class EditorConfig:
    tab_stop: int = 8
    # Extra Ctrl-Q presses needed to quit with unsaved changes.
    quit_times: int = 0
    message_timeout: float = 5.0
    read_only: bool = False

    def __post_init__(self) -> None:
        if self.tab_stop < 1:
            raise ValueError(f"tab_stop must be >= 1, got {self.tab_stop}")
        if self.quit_times < 0:
            raise ValueError(f"quit_times must be >= 0, got {self.quit_times}")
