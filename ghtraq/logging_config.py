"""Logging setup."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: int | str = logging.INFO) -> None:
    """Attach a single stream handler to the ``ghtraq`` logger."""
    root = logging.getLogger("ghtraq")
    root.setLevel(level)

    # avoid duplicate handlers on reload
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
