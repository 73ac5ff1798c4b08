"""
Logging helpers.

Components receive a ``logging.Logger`` at construction time. When logging
is switched off (for example when the encoded image goes to stdout) they are
handed a silent logger instead of consulting a global flag.
"""

from typing import Optional, TextIO
import logging
import sys

from IMR_Libs.constants import SILENT_LOGGER_NAME

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


class PackageStreamHandler(logging.StreamHandler):
    """Stream handler installed on the package logger by configure_logging."""


def _silent_logger() -> logging.Logger:
    silent = logging.getLogger(SILENT_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in silent.handlers):
        silent.addHandler(logging.NullHandler())
    silent.propagate = False
    silent.disabled = True
    return silent


def get_logger(name: str, enabled: bool = True) -> logging.Logger:
    """
    Get a logger for a component.

    Args:
        name: Logger name, usually the caller's ``__name__``
        enabled: When False, return a logger that discards every record

    Returns:
        A logging.Logger instance
    """
    if not enabled:
        return _silent_logger()
    return logging.getLogger(name)


def configure_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> None:
    """
    Install a single stream handler on the package logger.

    Args:
        verbose: Log at DEBUG level instead of INFO
        stream: Destination stream (default: stderr)
    """
    package_logger = logging.getLogger("IMR_Libs")
    for handler in list(package_logger.handlers):
        if isinstance(handler, PackageStreamHandler):
            package_logger.removeHandler(handler)

    handler = PackageStreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
