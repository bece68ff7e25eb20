"""Command-line front door for dirscout.

Parses options, loads the configuration, and runs the interactive session.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

from .config import AppConfig, load_config
from .file_model.paths import absolute_path
from .logs import initialize_logging
from .runtime.loop import AppError, LoopOutcome

logger = logging.getLogger(__name__)

GRACEFUL_EXIT_MESSAGE = "[INFO] [dirscout] => Graceful shutdown... success"
FORCED_EXIT_MESSAGE = "[WARN] [dirscout] => Forced shutdown - Not all operations could be completed"
APP_ERROR_MESSAGE = "[ERROR] - Something went wrong while running the app"


def _bounded_int(low: int, high: int) -> Callable[[str], int]:
    """argparse type for integers within ``[low, high]``."""

    def parse(value: str) -> int:
        try:
            parsed = int(value)
        except ValueError as exc:
            raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
        if not low <= parsed <= high:
            raise argparse.ArgumentTypeError(f"value must be between {low} and {high}")
        return parsed

    return parse


def _existing_file(value: str) -> Path:
    path = Path(value)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"config file not found: {value}")
    return path


def _existing_dir(value: str) -> Path:
    path = Path(value)
    if not path.is_dir():
        raise argparse.ArgumentTypeError(f"directory not found: {value}")
    return absolute_path(path)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirscout",
        description="Browse and search directories in the terminal.",
    )
    parser.add_argument("path", nargs="?", type=_existing_dir, default=None, help="Directory to open instead of the configured start dir.")
    parser.add_argument("-r", "--refresh-rate", type=_bounded_int(1, 5), default=1, help="App ticks per second (1-5, default 1).")
    parser.add_argument("-f", "--frame-rate", type=_bounded_int(1, 60), default=45, help="Frames per second (1-60, default 45).")
    parser.add_argument("-c", "--config", type=_existing_file, default=None, help="Path to a JSON config file.")
    return parser


def main(
    argv: Sequence[str] | None = None,
    run: Callable[[AppConfig, float, float], LoopOutcome] | None = None,
) -> None:
    """Parse arguments and run one interactive session.

    ``run`` replaces the terminal session in tests.
    """
    args = build_parser().parse_args(argv)
    initialize_logging()

    config = load_config(args.config)
    if args.path is not None:
        config = dataclasses.replace(config, start_dir=args.path)

    if run is None:
        from .runtime.app import run_app as run

    try:
        outcome = run(config, float(args.refresh_rate), float(args.frame_rate))
    except AppError as exc:
        logger.error("app error: %s", exc)
        print(APP_ERROR_MESSAGE, file=sys.stderr)
        print(str(exc), file=sys.stderr)
        raise SystemExit(1) from exc

    if outcome.forced_shutdown:
        logger.warning("forced shutdown")
        print(FORCED_EXIT_MESSAGE)
    else:
        logger.info("graceful shutdown")
        print(GRACEFUL_EXIT_MESSAGE)


if __name__ == "__main__":
    main()
