"""Logging setup for scripts and tools built on hobogo.

Library modules only ever call ``logging.getLogger(__name__)``; configuring
handlers is left to the application, which can use :func:`setup_logging`:

    from hobogo.logging_config import setup_logging

    logger = setup_logging("bot_match", level="DEBUG")

The default level comes from ``HOBOGO_LOG_LEVEL`` (``INFO`` if unset).
"""

from __future__ import annotations

import logging
import os
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
COMPACT_FORMAT = "%(levelname)s: %(message)s"
DETAILED_FORMAT = (
    "%(asctime)s [%(levelname)s] %(name)s (%(filename)s:%(lineno)d): %(message)s"
)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DEFAULT_LEVEL = os.environ.get("HOBOGO_LOG_LEVEL", "INFO")


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        level = DEFAULT_LEVEL
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level}")
    return resolved


def setup_logging(
    name: str,
    level: Union[int, str, None] = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Attach a stream handler to ``name`` and return the logger.

    Calling it again for the same logger only updates the level and format;
    it never stacks a second handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(_resolve_level(level))

    formatter = logging.Formatter(fmt, datefmt=DATE_FORMAT)
    for handler in logger.handlers:
        if getattr(handler, "_hobogo_handler", False):
            handler.setFormatter(formatter)
            return logger

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler._hobogo_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger under the ``hobogo`` namespace."""
    if not name:
        return logging.getLogger("hobogo")
    if name == "hobogo" or name.startswith("hobogo."):
        return logging.getLogger(name)
    return logging.getLogger(f"hobogo.{name}")
