"""Terminal application entry point."""

from __future__ import annotations

import argparse
import logging

from textual.app import App, ComposeResult

from mini.config import VERSION, EditorConfig
from mini.widget import MiniEditor

logger = logging.getLogger("mini")


class MiniApp(App):
    """TUI app that wraps the MiniEditor widget."""

    TITLE = "mini"
    BINDINGS = []
    ENABLE_COMMAND_PALETTE = False

    def __init__(
        self,
        filename: str = "",
        config: EditorConfig | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.filename = filename
        self.config = config or EditorConfig()

    def compose(self) -> ComposeResult:
        yield MiniEditor(self.filename, config=self.config, id="editor")

    def on_mount(self) -> None:
        self.query_one("#editor").focus()

    def on_mini_editor_quit(self, event: MiniEditor.Quit) -> None:
        self.exit()


def _tab_stop(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"tab stop must be >= 1, got {n}")
    return n


def _non_negative(value: str) -> int:
    n = int(value)
    if n < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {n}")
    return n


def setup_logging(log_file: str | None) -> None:
    """Route the ``mini`` logger to *log_file*, or nowhere.

    The terminal belongs to the UI, so nothing is logged to the console.
    """
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.setLevel(logging.DEBUG)
    else:
        handler = logging.NullHandler()
    logger.addHandler(handler)
    logger.propagate = False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mini",
        description="Modal terminal text editor",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="",
        help="file to open",
    )
    parser.add_argument(
        "--tab-stop",
        type=_tab_stop,
        default=8,
        help="columns per tab stop (default: 8)",
    )
    parser.add_argument(
        "--quit-times",
        type=_non_negative,
        default=0,
        help="extra Ctrl-Q presses needed to quit with unsaved changes",
    )
    parser.add_argument(
        "-R", "--read-only",
        action="store_true",
        default=False,
        help="open in read-only mode",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="write debug logs to this file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_file)

    config = EditorConfig(
        tab_stop=args.tab_stop,
        quit_times=args.quit_times,
        read_only=args.read_only,
    )
    logger.info("starting mini %s (file=%r)", VERSION, args.file)
    app = MiniApp(filename=args.file, config=config)
    app.run()


if __name__ == "__main__":
    main()
