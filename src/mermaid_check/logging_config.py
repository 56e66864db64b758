"""
Logging Configuration for mermaid-check.

Provides centralized logger setup for the package logger. Console logs go to
stderr so they never mix with the report on stdout; an optional log file
receives the same records.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

PACKAGE_LOGGER_NAME = "mermaid_check"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class FlushingStreamHandler(logging.StreamHandler):
    """StreamHandler that flushes after every emit.

    ::: This is-in-layer Infrastructure-Layer.
    ::: This is a handler.
    ::: This is stateless.
    """
    def emit(self, record):
        super().emit(record)
        self.flush()


def _create_file_handler(log_path: Union[str, Path]) -> Optional[logging.FileHandler]:
    """
    Create a file handler for the specified log file.

    Args:
        log_path: Path of the log file; parent directories are created

    Returns:
        Configured FileHandler, or None if the file cannot be opened
    """
    try:
        log_path = Path(log_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        return handler
    except OSError:
        return None


def _create_stderr_handler(level: int) -> logging.StreamHandler:
    """Create a stderr handler for console output with auto-flush."""
    handler = FlushingStreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return handler


def configure_logging(
    verbose: bool = False,
    log_file: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Configure the package logger.

    Safe to call repeatedly: existing handlers are closed and replaced.

    Args:
        verbose: Log DEBUG records to stderr instead of WARNING and above
        log_file: Optional path that also receives all DEBUG records

    Returns:
        Configured package logger
    """
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)

    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)

    logger.setLevel(logging.DEBUG)
    logger.propagate = False  # Don't propagate to root logger

    stderr_level = logging.DEBUG if verbose else logging.WARNING
    logger.addHandler(_create_stderr_handler(stderr_level))

    if log_file:
        file_handler = _create_file_handler(log_file)
        if file_handler:
            logger.addHandler(file_handler)
        else:
            logger.warning("Could not open log file %s; file logging disabled", log_file)

    return logger
