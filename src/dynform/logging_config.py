"""
Logging setup for the dynform package.

Modules log through logging.getLogger(__name__); this installs a single
stream handler on the package logger so the CLI and the gateway share
one format.
"""
import logging
import sys
from typing import Optional


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure the 'dynform' logger. Safe to call more than once."""
    global _handler

    logger = logging.getLogger("dynform")
    logger.setLevel(level.upper())

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)

    return logger
