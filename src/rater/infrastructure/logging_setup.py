"""Log sink setup for the CLI and the HTTP service."""

from __future__ import annotations

import sys

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name} - {message}"


def configure_logging(level: str = "INFO") -> None:
    """Replace loguru's default sink with one writing to stderr at ``level``.

    The sink looks up ``sys.stderr`` on every write so redirected streams
    (test runners, click's CliRunner) keep working.
    """
    logger.remove()
    logger.add(
        lambda message: print(message, end="", file=sys.stderr),
        level=level.upper(),
        format=LOG_FORMAT,
    )
