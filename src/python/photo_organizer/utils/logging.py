"""
Logging utilities for photo-organizer.

Centralized logging configuration for the command-line tool. Console output
goes to stderr by default: stdout is reserved for the progress and outcome
lines the commands print while a batch runs.

Example:
    >>> from photo_organizer.utils import setup_logging
    >>> setup_logging('DEBUG')
    >>> import logging
    >>> logger = logging.getLogger(__name__)
    >>> logger.debug("Scanning started")
"""

import logging
import sys
from pathlib import Path
from typing import IO, Optional, Union

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: Union[str, int] = logging.WARNING,
    log_file: Optional[Union[str, Path]] = None,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Set up logging configuration for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file, written in addition to the console
        format_string: Custom format string for log messages
        stream: Console stream (defaults to sys.stderr)

    Example:
        >>> setup_logging('INFO', 'import.log')
        >>> setup_logging(logging.ERROR)  # Numeric level
    """
    # Convert string level to numeric if needed
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    if format_string is None:
        format_string = DEFAULT_FORMAT

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(format_string)

    console_handler = logging.StreamHandler(stream or sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Set level for third-party libraries to reduce noise
    logging.getLogger('PIL').setLevel(logging.WARNING)
    logging.getLogger('exifread').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy').setLevel(logging.WARNING)
