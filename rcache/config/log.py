"""Logging setup for applications embedding RCache."""

import logging
import sys

from .settings import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(debug: bool = None) -> None:
    """
    Configure root logging the same way for every RCache consumer.

    The library itself only creates module loggers; nothing is
    configured on import.

    Args:
        debug: Force DEBUG level (default from settings.DEBUG)
    """
    if debug is None:
        debug = settings.DEBUG

    if debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )
