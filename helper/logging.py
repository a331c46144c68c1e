"""
Logging utilities for Python stackerr implementation.

Library modules log through ``logging.getLogger(__name__)``, so everything
ends up below the package logger. ``setup_logging`` attaches a handler to
that logger whose formatter prints the stack captured by a StackableError
instead of the Python traceback of the place it was logged from.
"""

import logging
import sys
from types import TracebackType
from typing import Optional, TextIO, Tuple, Type, Union

from .error import StackableError

# Name of the top-level package logger.
PACKAGE_LOGGER = __name__.split(".")[0]

ExcInfo = Union[
    Tuple[Type[BaseException], BaseException, Optional[TracebackType]],
    Tuple[None, None, None],
]


class StackFormatter(logging.Formatter):
    """
    Formatter that renders captured stacks of StackableError.
    Other exceptions keep the usual traceback.
    """

    def __init__(self, include_timestamp: bool = True):
        """
        Initialize the stack formatter.

        :param include_timestamp: Whether to include timestamps in log messages.
        """
        if include_timestamp:
            fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
        else:
            fmt = "%(levelname)s %(name)s: %(message)s"

        super().__init__(fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def formatException(self, ei: ExcInfo) -> str:
        """
        Format exception information of a record.

        :param ei: Exception info as returned by sys.exc_info().
        :returns: The captured report for a StackableError, else the traceback.
        """
        error = ei[1]
        if isinstance(error, StackableError):
            return error.full_report().rstrip("\n")
        return super().formatException(ei)


def get_logger(name: str = "") -> logging.Logger:
    """
    Get the package logger or one of its children.

    :param name: Child name below the package logger, empty for the package logger.
    :returns: The logger.
    """
    if not name:
        return logging.getLogger(PACKAGE_LOGGER)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


def setup_logging(
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    include_timestamp: bool = True,
) -> logging.Logger:
    """
    Send the package's log records to a stream.
    Calling it again replaces the handler instead of adding another one.

    :param level: Logging level of the package logger.
    :param stream: Output stream (defaults to sys.stderr).
    :param include_timestamp: Whether to include timestamps in log messages.
    :returns: The configured package logger.
    """
    logger = get_logger()
    logger.setLevel(level)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StackFormatter(include_timestamp=include_timestamp))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def log_error(
    logger: logging.Logger,
    message: str,
    error: BaseException,
    level: int = logging.ERROR,
) -> None:
    """
    Log an error together with the stack it carries.

    :param logger: Logger to write to.
    :param message: The log message.
    :param error: The error; StackableError stacks are rendered by StackFormatter.
    :param level: Logging level.
    """
    logger.log(level, message, exc_info=(type(error), error, error.__traceback__))
