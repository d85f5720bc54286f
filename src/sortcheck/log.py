"""
Console logging for the benchmark CLI.

Library modules only ever call `logging.getLogger(__name__)`; handlers are
installed here, by the entry point, and only on the `sortcheck` logger so
embedding applications keep control of the root logger.

Public API (stable):
    config_console_handler(level=logging.INFO, debug_mode=False) -> RichHandler
    configure_logging(level=logging.INFO, debug_mode=False) -> logging.Logger
    parse_log_level(value) -> int
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

__all__ = ["PROJECT_LOGGER", "config_console_handler", "configure_logging", "parse_log_level"]

PROJECT_LOGGER = "sortcheck"


def config_console_handler(level: int = logging.INFO, debug_mode: bool = False) -> RichHandler:
    """
    Build a RichHandler writing to stderr.

    In debug mode the level drops to DEBUG and records carry their logger
    name and source path.
    """
    if debug_mode:
        level = logging.DEBUG

    handler = RichHandler(
        level=level,
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=debug_mode,
        show_path=debug_mode,
    )
    fmt = "%(message)s" if not debug_mode else "%(name)s: %(message)s"
    handler.setFormatter(logging.Formatter(fmt=fmt))
    return handler


def configure_logging(level: int = logging.INFO, debug_mode: bool = False) -> logging.Logger:
    """
    Attach a console handler to the project logger and return it.

    Calling this again replaces the previously installed handler instead of
    stacking a second one.
    """
    logger = logging.getLogger(PROJECT_LOGGER)
    for old in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(old)

    handler = config_console_handler(level=level, debug_mode=debug_mode)
    logger.addHandler(handler)
    logger.setLevel(handler.level)
    logger.propagate = False
    return logger


def parse_log_level(value: str) -> int:
    """Accept a level name ("debug", "WARNING") or a number; raise ValueError otherwise."""
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {value!r}")
    return level
