from __future__ import annotations

import logging
import sys
from typing import Dict

__all__ = ["get_logger", "configure_logging"]

_ROOT = "style_renderer"
_loggers: Dict[str, logging.Logger] = {}


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger namespaced under the package root logger.

    Module names that already live in the package (``style_renderer.core.x``)
    are used as-is; anything else is nested under ``style_renderer``.
    """
    if name in _loggers:
        return _loggers[name]

    qualified = name if name == _ROOT or name.startswith(_ROOT + ".") else f"{_ROOT}.{name}"
    logger = logging.getLogger(qualified)
    _loggers[name] = logger
    return logger


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger (CLI use only)."""

    root_logger = logging.getLogger(_ROOT)
    level = logging.DEBUG if verbose else logging.INFO
    root_logger.setLevel(level)

    # Remove existing handlers so repeated CLI invocations don't duplicate output
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handler.setLevel(level)
    root_logger.addHandler(handler)
    return root_logger
