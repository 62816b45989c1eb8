"""
Process-wide diagnostic output.

Every module logs through logging.getLogger(__name__) under the "ratesrisk"
namespace. The package installs a NullHandler, so nothing is printed until
configure_logging() is called (typically once, from a script).
"""

import logging
import sys
from typing import Optional, TextIO, Union

ROOT_LOGGER = "ratesrisk"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(
    level: Union[int, str] = logging.INFO,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Attach a stream handler to the package logger.
    
    Calling it again replaces the previous handler rather than stacking a
    second one.
    
    Args:
        level: Logging level (name or number)
        stream: Output stream (default stderr)
    
    Returns:
        The package logger
    """
    global _handler
    
    logger = logging.getLogger(ROOT_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
    
    _handler = logging.StreamHandler(stream or sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(_handler)
    logger.setLevel(level)
    return logger


def disable_logging() -> None:
    """Detach the handler installed by configure_logging (back to silent)."""
    global _handler
    
    logger = logging.getLogger(ROOT_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)
        _handler = None
    logger.setLevel(logging.NOTSET)


__all__ = [
    "configure_logging",
    "disable_logging",
    "ROOT_LOGGER",
    "LOG_FORMAT",
]
