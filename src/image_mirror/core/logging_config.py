"""Logging setup for the image mirror.

Everything the package logs goes through one configured logger,
``image-mirror``. Modules that log on their own (the error-handling helpers,
for instance) use ``component_logger``, which hands out children of that
logger so their records reach the same handler at the same level.
"""

import os
import sys
import logging
from typing import Dict, Optional

ROOT_LOGGER_NAME = "image-mirror"

LOG_FORMATS: Dict[str, str] = {
    "structured": (
        "%(asctime)s | %(name)s | %(levelname)-8s | "
        "%(filename)s:%(lineno)d | %(funcName)s() | %(message)s"
    ),
    "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


def resolve_level(level: Optional[str] = None) -> int:
    """Map an explicit level, or ``LOG_LEVEL``, to a logging constant.

    Unknown names fall back to INFO.
    """
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else logging.INFO


def build_formatter(format_type: str = "structured") -> logging.Formatter:
    """``LOG_FORMAT`` wins over ``format_type``; unknown names mean simple."""
    chosen = os.getenv("LOG_FORMAT", format_type).lower()
    if chosen == "structured":
        return logging.Formatter(LOG_FORMATS["structured"], datefmt="%Y-%m-%d %H:%M:%S")
    return logging.Formatter(LOG_FORMATS["simple"])


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: Optional[str] = None,
    format_type: str = "structured",
) -> logging.Logger:
    """
    Configure and return the named logger.

    The level is reapplied on every call; the stdout handler is attached
    once. Records are not propagated to the root logger.

    Args:
        name: Logger name (defaults to "image-mirror")
        level: Level name; falls back to ``LOG_LEVEL``, then INFO
        format_type: "structured" or "simple"; ``LOG_FORMAT`` overrides it
    """
    configured = logging.getLogger(name)
    configured.setLevel(resolve_level(level))

    if not configured.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(build_formatter(format_type))
        configured.addHandler(handler)

    configured.propagate = False
    return configured


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Shorthand for ``setup_logger(name)`` with default settings."""
    return setup_logger(name)


def component_logger(component: str) -> logging.Logger:
    """
    Return ``image-mirror.<component>``.

    The child carries no handler or level of its own, so it follows
    whatever ``setup_logger`` applied to the parent.
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{component}")


logger = setup_logger()
