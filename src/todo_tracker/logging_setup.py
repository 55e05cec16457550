from __future__ import annotations

import sys
from typing import Any

from loguru import logger

from .constants import DEFAULT_LOG_LEVEL


def configure_logging(level: str = DEFAULT_LOG_LEVEL, sink: Any = None) -> int:
    """Route tracker logs to a single sink, stderr by default.

    The default level stays at WARNING so INFO lines do not interleave with
    the interactive menu. ``diagnose`` is off: tracebacks from failed saves
    would otherwise print local variables, passwords included.

    Returns the loguru handler id.
    """
    logger.remove()
    return logger.add(
        sink if sink is not None else sys.stderr,
        level=level.upper(),
        diagnose=False,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{module}</cyan>:<cyan>{line}</cyan>\n"
            "{message}"
        ),
    )
