"""
Logging setup for tcpping.
Logs go to stderr so they never interleave with the ping output on stdout.
"""

import logging
import sys


def setup_logger(name: str = "tcpping", level=logging.WARNING) -> logging.Logger:
    """Configure the package logger once and return it"""
    logger = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    logger.setLevel(level)

    # Avoid duplicate handlers
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(handler)

    return logger
