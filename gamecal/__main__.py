"""Command line entry point for launching the calendar dashboard."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from textual.logging import TextualHandler

from .config import load_calendar_config
from .ui.app import CalendarApp


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gamecal", description=__doc__)
    parser.add_argument("--config", help="JSON calendar configuration file")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging threshold (default: %(default)s)",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Launch the calendar Textual dashboard."""

    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level), handlers=[TextualHandler()]
    )
    config = load_calendar_config(args.config) if args.config else None
    CalendarApp(config=config).run()


if __name__ == "__main__":  # pragma: no cover - module entry point
    main()
