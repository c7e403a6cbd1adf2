"""Logging setup for test runs."""

import logging
import sys

from .config import LoggingSettings

NOISY_LOGGERS = ("asyncio", "urllib3")


def setup_logging(settings: LoggingSettings) -> None:
    """
    Configure root logging for the test session.

    Args:
        settings: Logging section of the loaded settings.
    """
    logging.basicConfig(
        level=getattr(logging, settings.level),
        format=settings.format,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    if settings.level != "DEBUG":
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
