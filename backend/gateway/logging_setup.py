"""Logging configuration shared by both services."""

import logging
import sys

from gateway.config import Config


def configure_logging(level: str = Config.LOG_LEVEL) -> None:
    """Send gateway logs to stderr with a short timestamp."""
    logging.basicConfig(
        level=level,
        format='[%(asctime)s] %(message)s',
        datefmt='%H:%M:%S',
        handlers=[logging.StreamHandler(sys.stderr)]
    )
