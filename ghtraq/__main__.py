"""Run the relay: ``python -m ghtraq``."""

from __future__ import annotations

import logging
import sys

import uvicorn

from ghtraq.app import create_app
from ghtraq.config import settings
from ghtraq.errors import ConfigError
from ghtraq.logging_config import setup_logging

logger = logging.getLogger("ghtraq")


def main() -> int:
    setup_logging(settings.log_level.upper())
    try:
        app = create_app(settings)
    except ConfigError as exc:
        logger.error("refusing to start: %s", exc)
        return 1
    uvicorn.run(app, host=settings.host, port=settings.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
