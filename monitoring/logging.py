"""Logging setup shared by the command line tools."""
from __future__ import annotations

import logging
from typing import Union

LOG_FORMAT = "%(levelname)s: %(message)s"


def resolve_level(level: Union[int, str, None]) -> int:
    """Return a numeric logging level from a name like ``"debug"`` or an int."""
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    if not isinstance(value, int):
        raise ValueError("Unknown log level: %s" % level)
    return value


def setup_logging(level: Union[int, str, None] = None) -> int:
    """Configure the root logger and return the level applied."""
    numeric = resolve_level(level)
    logging.basicConfig(level=numeric, format=LOG_FORMAT, force=True)
    return numeric


__all__ = ["LOG_FORMAT", "resolve_level", "setup_logging"]
