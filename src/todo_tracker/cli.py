from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, TextIO

from loguru import logger
from rich.console import Console

from .app import TodoApp
from .config import load_tracker_config
from .constants import DEFAULT_LOG_LEVEL, VALID_LOG_LEVELS
from .errors import StorageFailure
from .logging_setup import configure_logging
from .shell import TodoShell


def _resolve_data_dir(data_dir: Optional[str]) -> Path:
    return Path(data_dir).expanduser().resolve() if data_dir else Path.cwd().resolve()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Multi-account todo tracker")
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory holding tasks.json, accounts.json and todo_tracker.yaml (default: current working directory)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=sorted(VALID_LOG_LEVELS),
        help="Override the configured log level",
    )
    return parser


def main(
    argv: list[str] | None = None,
    *,
    stream: Optional[TextIO] = None,
    console: Optional[Console] = None,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level or DEFAULT_LOG_LEVEL)

    config, err = load_tracker_config(_resolve_data_dir(args.data_dir))
    if err:
        logger.error("Invalid config: {}", err)
        return 1
    configure_logging(args.log_level or config.log_level)

    app = TodoApp.from_config(config)
    try:
        app.load()
    except StorageFailure as exc:
        logger.error("Cannot start: {}", exc)
        return 1

    try:
        TodoShell(app, console=console, stream=stream).run()
    except StorageFailure as exc:
        logger.error("Aborting after storage failure: {}", exc)
        return 1
    finally:
        app.close()
    return 0
