"""Logging setup shared by the scripts."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ``src`` logger tree.

    Safe to call more than once; an existing handler is replaced.
    """
    root = logging.getLogger("src")
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level.upper())
    root.propagate = False
