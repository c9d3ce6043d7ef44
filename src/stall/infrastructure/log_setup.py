"""Console logging for the CLI entry point."""

from __future__ import annotations

import logging

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Give the ``stall`` logger exactly one console handler."""
    root = logging.getLogger("stall")
    root.setLevel(level.upper())

    for old in list(root.handlers):
        root.removeHandler(old)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)
    return root
