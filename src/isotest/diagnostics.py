"""Logging setup and formatting of test failures."""

import logging
import traceback

from rich.console import Console
from rich.logging import RichHandler

from isotest.exceptions import TestFailure

DOMAIN_FAILURES = (TestFailure, AssertionError)


def configure_logging(level: int = logging.WARNING) -> logging.Logger:
    """Send isotest's log records to stderr through rich.

    Only the ``isotest`` logger is configured, so the logging setup of the
    program embedding the suites is left alone.
    """
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    logger = logging.getLogger("isotest")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False
    return logger


def format_failure(exc: BaseException) -> str:
    """Turn an exception raised by a test body into a result description.

    Domain failures are located at the innermost frame of their traceback:
    ``path/to/file.py:42: message``. Other exceptions keep only their message.
    """
    message = str(exc)

    if isinstance(exc, DOMAIN_FAILURES):
        frames = traceback.extract_tb(exc.__traceback__)
        if not message:
            message = type(exc).__name__
        if frames:
            frame = frames[-1]
            return f"{frame.filename}:{frame.lineno}: {message}"
        return message

    return message or type(exc).__name__
