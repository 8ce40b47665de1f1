"""
Logging Configuration
=====================

Sets up the package logger for the launcher scripts.

Log records go to stderr so the report printed on stdout stays clean
enough to redirect to a file. An optional log file receives the same
records with timestamps.
"""

import logging
import sys
from typing import Optional, Union

CONSOLE_FORMAT = '%(levelname)s %(name)s: %(message)s'
FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_level(level: Union[int, str]) -> int:
    """Accept a logging level number or name ("debug", "WARNING", ...)."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def setup_logging(
    level: Union[int, str] = logging.WARNING,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Configure the logger for the 'src' package namespace.

    Parameters:
    ----------
    level : int or str
        Logging level for the console and the log file

    log_file : str, optional
        Path of a file to write the log to in addition to stderr.

    Returns:
    -------
    logging.Logger
        The configured package logger
    """
    level = resolve_level(level)
    logger = logging.getLogger("src")
    logger.setLevel(level)
    logger.propagate = False

    # Repeated launcher runs in one process replace the handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)

    logger.debug("Logging initialized at level %s", logging.getLevelName(level))
    return logger
