"""Logging setup for inetgen.

Every module logs through ``get_logger(__name__)`` and so hangs below the
``inetgen`` logger, which carries the only handler. The handler writes to
stderr: stdout is reserved for command output such as ``inspect`` reports
and for networks streamed with ``write_to``.

The command line picks the level from its ``--verbose`` / ``--quiet`` flags
through ``configure_cli_logging``; library users call ``set_global_log_level``
or attach their own handler with ``setup_root_logger``.
"""

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "inetgen"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_ROOT_LOGGER_CONFIGURED = False


def setup_root_logger(
    level: int = logging.INFO,
    format_string: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> None:
    """Install the single handler of the ``inetgen`` logger.

    Later calls are no-ops until ``reset_logging`` runs.

    Args:
        level: Initial level (default: INFO).
        format_string: Record format; defaults to ``DEFAULT_FORMAT``.
        handler: Handler to install; defaults to a stderr StreamHandler.
    """
    global _ROOT_LOGGER_CONFIGURED

    if _ROOT_LOGGER_CONFIGURED:
        return

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.handlers.clear()

    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
    package_logger.addHandler(handler)

    # pytest's caplog listens on the root logger
    package_logger.propagate = True

    _ROOT_LOGGER_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, inheriting the package level.

    Args:
        name: Logger name, normally the calling module's ``__name__``.
    """
    setup_root_logger()
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    return logger


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger and its handlers."""
    setup_root_logger()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)


def level_for_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Map the command-line verbosity flags to a logging level.

    ``verbose`` wins when both flags are set.
    """
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.WARNING
    return logging.INFO


def configure_cli_logging(verbose: bool = False, quiet: bool = False) -> int:
    """Apply the level chosen by the verbosity flags and return it."""
    level = level_for_flags(verbose, quiet)
    set_global_log_level(level)
    return level


def reset_logging() -> None:
    """Drop the package handler so the next setup starts clean (tests)."""
    global _ROOT_LOGGER_CONFIGURED
    _ROOT_LOGGER_CONFIGURED = False

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


setup_root_logger()
