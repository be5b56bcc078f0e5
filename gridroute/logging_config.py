from __future__ import annotations

import logging
import os
from typing import Optional

_ENV_LEVEL = "GRIDROUTE_LOG_LEVEL"
_LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_ROOT = "gridroute"


def resolve_level(name: Optional[str] = None) -> int:
    """Level from the argument, else GRIDROUTE_LOG_LEVEL, else WARNING."""
    raw = (name or os.getenv(_ENV_LEVEL, "WARNING")).upper()
    level = logging.getLevelName(raw)
    if isinstance(level, str):  # unknown name comes back as "Level X"
        return logging.WARNING
    return level


def configure(level: Optional[str] = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger."""
    root = logging.getLogger(_ROOT)
    if not any(getattr(h, "_gridroute", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._gridroute = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(resolve_level(level))
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure", "get_logger", "resolve_level"]
