"""
Debug hooks.

The scanner and reducer log every token push and every raised error at
DEBUG level. Nothing is printed unless debug logging is switched on, in
which case each record is prefixed with the `<file>:<line>` it came from.
"""

import logging
import sys

DEBUG_FORMAT = "%(filename)s:%(lineno)d\t|\t%(message)s"

_handler = None


def configure_debug_logging(stream=None) -> logging.Handler:
    """Send noxlang debug records to stderr (or `stream`)."""
    global _handler

    logger = logging.getLogger("noxlang")
    if _handler is not None:
        logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(logging.DEBUG)
    return _handler


def disable_debug_logging():
    """Undo configure_debug_logging."""
    global _handler

    logger = logging.getLogger("noxlang")
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)
