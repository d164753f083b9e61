"""Logger helpers for argv_expand.

All loggers live under the ``argv_expand`` namespace. Nothing is emitted
until ``setup_logging`` installs a handler (the CLI does this).
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO


BASE_LOGGER = "argv_expand"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a namespaced logger under 'argv_expand'."""
    if not name or name == BASE_LOGGER:
        return logging.getLogger(BASE_LOGGER)
    if name.startswith(BASE_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{BASE_LOGGER}.{name}")


def setup_logging(level: int = logging.WARNING, stream: Optional[TextIO] = None) -> logging.Logger:
    """Configure the base logger and return it.

    Replaces any handler installed by an earlier call, so the logger always
    writes to the current stderr (or *stream*).
    """
    base = logging.getLogger(BASE_LOGGER)
    base.setLevel(level)
    base.handlers.clear()
    base.propagate = False
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    base.addHandler(handler)
    return base
