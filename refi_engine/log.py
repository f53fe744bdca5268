"""
Logging setup using loguru.

The engine logs through `loguru.logger` directly; entry points (CLI, Streamlit
app) call `setup_logging()` once at startup to pick the level and sinks.
"""

import sys

from loguru import logger


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    fmt: str = "<level>[{level.name}]</level> {message}",
) -> None:
    """
    Configure loguru with stderr output and an optional log file.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Path to a log file. If None, only logs to stderr.
        fmt: Loguru format string for the console sink.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{line} | {message}",
            rotation="5 MB",
            retention=3,
        )
