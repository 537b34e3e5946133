"""Logging configuration for wtm"""
import copy
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

from wtm.constants import STORE_ROOT_DIR

DEBUG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEBUG_DATEFMT = '%Y-%m-%d %H:%M:%S'
LOG_FILE_NAME = 'wtm.log'


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name when writing to a terminal."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None,
                 stream: Optional[TextIO] = None, use_color: Optional[bool] = None):
        super().__init__(fmt=fmt, datefmt=datefmt)
        if use_color is None:
            stream = stream or sys.stderr
            use_color = hasattr(stream, 'isatty') and stream.isatty()
        self.use_color = use_color

    def format(self, record):
        color = self.COLORS.get(record.levelname)
        if not self.use_color or color is None:
            return super().format(record)
        # Other handlers share the record, so color a copy
        colored = copy.copy(record)
        colored.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(colored)


def _debug_file_handler() -> logging.Handler:
    log_dir = Path.home() / STORE_ROOT_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_dir / LOG_FILE_NAME, mode='w')  # Overwrite each run
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(fmt=DEBUG_FORMAT, datefmt=DEBUG_DATEFMT))
    return handler


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, show INFO level messages
        debug: If True, show DEBUG level messages and also write them to
            ~/.wtm/wtm.log
    """
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if debug:
        root_logger.addHandler(_debug_file_handler())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    if debug:
        formatter = ColoredFormatter(fmt=DEBUG_FORMAT, datefmt=DEBUG_DATEFMT, stream=console_handler.stream)
    else:
        formatter = ColoredFormatter(fmt='[%(name)s] %(message)s', stream=console_handler.stream)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def get_logger(name: str) -> logging.Logger:
    """Logger named after the module, without the ``wtm.``/``services.`` prefix."""
    for prefix in ('wtm.', 'services.'):
        if name.startswith(prefix):
            name = name[len(prefix):]
    return logging.getLogger(name)
