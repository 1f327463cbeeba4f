"""
Logging configuration for the Zerobrew migration tool.

Console logging goes to stderr so that ``--json`` output on stdout can be
piped. Subprocess commands, exit codes and timings are logged at DEBUG and
therefore only show up with ``--verbose`` or in the log file.
"""

import logging
import sys
from typing import Optional

ROOT_LOGGER = 'zb_migrate'

CONSOLE_FORMAT = '%(levelname)s - %(message)s'
DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name of console records."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt)
        self.use_colors = use_colors

    def format(self, record):
        color = self.COLORS.get(record.levelname) if self.use_colors else None
        if color is None:
            return super().format(record)

        # The record is shared with the file handler
        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _console_handler(level: int, verbose: bool, use_colors: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(DETAILED_FORMAT if verbose else CONSOLE_FORMAT, use_colors=use_colors))
    return handler


def _file_handler(log_file: str) -> logging.Handler:
    handler = logging.FileHandler(log_file)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
    return handler


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, verbose: bool = False,
                  use_colors: bool = True) -> logging.Logger:
    """
    Configure the ``zb_migrate`` logger.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path of a log file that receives DEBUG and above
        verbose: Force DEBUG on the console with timestamps and source lines
        use_colors: Whether to color console level names

    Returns:
        The configured ``zb_migrate`` logger
    """
    console_level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.addHandler(_console_handler(console_level, verbose, use_colors))

    if log_file:
        logger.addHandler(_file_handler(log_file))
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the ``zb_migrate`` logger, e.g. ``get_logger('config')``."""
    return logging.getLogger(f'{ROOT_LOGGER}.{name}')
