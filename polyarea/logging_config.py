"""Logging configuration helpers.

Library modules only ever call ``logging.getLogger(__name__)``; applications
embedding the solver call :func:`setup_logging` once to attach handlers.

Usage:
    from polyarea.logging_config import setup_logging, LogContext

    logger = setup_logging("polyarea", level="DEBUG")

    with LogContext(logger, logging.WARNING):
        solver.solve()
"""

from __future__ import annotations

import logging
from pathlib import Path

__all__ = [
    "COMPACT_FORMAT",
    "DEFAULT_FORMAT",
    "DETAILED_FORMAT",
    "DATE_FORMAT",
    "LogContext",
    "get_logger",
    "setup_logging",
]

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
COMPACT_FORMAT = "%(levelname)s %(name)s: %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s [%(levelname)s] %(name)s "
    "(%(filename)s:%(lineno)d): %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_FORMATS = {
    "default": DEFAULT_FORMAT,
    "compact": COMPACT_FORMAT,
    "detailed": DETAILED_FORMAT,
}


def setup_logging(
    name: str = "polyarea",
    level: int | str = logging.INFO,
    log_file: str | Path | None = None,
    log_dir: str | Path | None = None,
    console: bool = True,
    propagate: bool = False,
    format_style: str = "default",
) -> logging.Logger:
    """Configure and return a named logger.

    Calling this twice for the same name does not stack duplicate handlers.

    Args:
        name: Logger name (usually the package name)
        level: Logging level as int or name ("DEBUG", "INFO", ...)
        log_file: Explicit log file path
        log_dir: Directory for ``<name>.log`` when ``log_file`` is not given
        console: Attach a stderr StreamHandler
        propagate: Whether records also reach ancestor loggers
        format_style: One of "default", "compact", "detailed"

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logger.setLevel(level)
    logger.propagate = propagate

    formatter = logging.Formatter(
        _FORMATS.get(format_style, DEFAULT_FORMAT), datefmt=DATE_FORMAT
    )

    if console and not any(
        type(h) is logging.StreamHandler for h in logger.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if log_file is None and log_dir is not None:
        log_file = Path(log_dir) / f"{name}.log"
    if log_file is not None:
        path = Path(log_file).resolve()
        existing = {
            Path(h.baseFilename)
            for h in logger.handlers
            if isinstance(h, logging.FileHandler)
        }
        if path not in existing:
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(path)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` without touching its handlers."""
    return logging.getLogger(name)


class LogContext:
    """Temporarily change a logger's level inside a ``with`` block."""

    def __init__(self, logger: logging.Logger, level: int):
        self.logger = logger
        self.level = level
        self._previous = logger.level

    def __enter__(self) -> logging.Logger:
        self._previous = self.logger.level
        self.logger.setLevel(self.level)
        return self.logger

    def __exit__(self, exc_type, exc, tb) -> None:
        self.logger.setLevel(self._previous)
