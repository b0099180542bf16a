"""Logging configuration for tblattice.

The library itself only creates module loggers (``logging.getLogger(__name__)``)
and never touches handlers on import. Scripts and notebooks call
:func:`setup_logging` to see registration events.
"""

import logging
import sys
from typing import Optional, TextIO

LOGGER_NAME = 'tblattice'


def setup_logging(level: str = "INFO",
                  format_type: str = "structured",
                  stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a stream handler to the ``tblattice`` logger.

    Parameters
    ----------
    level : str
        Level name ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL').
        Unknown names fall back to INFO.
    format_type : str
        'structured' prints timestamp and logger name, anything else
        prints only level and message.
    stream : TextIO, optional
        Output stream, default is stdout.

    Returns
    -------
    logger : logging.Logger
        The configured package logger.
    """
    level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL
    }
    log_level = level_map.get(level.upper(), logging.INFO)

    if format_type == "structured":
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
    else:
        formatter = logging.Formatter(
            '%(levelname)s - %(message)s'
        )

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(formatter)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.handlers.clear()
    logger.addHandler(handler)

    return logger
