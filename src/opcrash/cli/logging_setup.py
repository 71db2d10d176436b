"""Logging configuration for the command line."""
from __future__ import annotations

import logging

logger = logging.getLogger("opcrash")


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """Configure opcrash logging.

    Args:
        verbose: Show INFO level logs (plan sizes, progress)
        debug: Show DEBUG level logs (every invocation and written file)
    """
    level = logging.WARNING
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO

    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    for handler in logger.handlers:
        handler.setLevel(level)
