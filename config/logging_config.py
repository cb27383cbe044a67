"""Logging for Host Monitor.

Every module logs through a child of the ``hostmon`` logger obtained with
``get_logger(__name__)``. ``setup_logging`` attaches the handlers once, from
the entry script: a size-rotated file under the data directory and a colored
stderr stream.
"""
import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from config.constants import STORAGE

ROOT_LOGGER_NAME = 'hostmon'

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Library default: stay quiet until setup_logging() runs
logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class HostMonitorFormatter(logging.Formatter):
    """Colors the level name when writing to a terminal."""

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelname)
        if color and self.use_colors and sys.stderr.isatty():
            # Copy so the file handler still sees the plain level name
            record = logging.makeLogRecord(record.__dict__)
            record.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(record)


def setup_logging(
    data_dir: Optional[Path] = None,
    debug: bool = False,
    console_output: bool = True,
    log_to_file: bool = True
) -> logging.Logger:
    """Attach handlers to the ``hostmon`` logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        data_dir: Where the rotated log file lives. Defaults to ~/.host-monitor/
        debug: Log at DEBUG instead of INFO.
        console_output: Also write to stderr.
        log_to_file: Write host_monitor.log with size-based rotation.

    Returns:
        The ``hostmon`` logger.
    """
    level = logging.DEBUG if debug else logging.INFO
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if log_to_file:
        data_dir = data_dir or Path.home() / STORAGE.DATA_DIR_NAME
        data_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            data_dir / STORAGE.LOG_FILE,
            maxBytes=STORAGE.LOG_MAX_BYTES,
            backupCount=STORAGE.LOG_BACKUP_COUNT,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        root_logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(HostMonitorFormatter())
        root_logger.addHandler(console_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())

    root_logger.debug(f"Logging configured: file={log_to_file}, console={console_output}")
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Child of the ``hostmon`` logger named after the last two parts of ``name``."""
    short_name = '.'.join(name.split('.')[-2:])
    return logging.getLogger(f'{ROOT_LOGGER_NAME}.{short_name}')


def log_exception(logger: logging.Logger, message: str, exc: Exception) -> None:
    """Log ``exc`` at ERROR with its traceback."""
    logger.error(
        f"{message}: {type(exc).__name__}: {exc}",
        exc_info=True,
        extra={'exception_type': type(exc).__name__}
    )


class LogContext:
    """Logs how long the wrapped block took, or that it failed.

    Example:
        >>> with LogContext(logger, "Applying 12 observations"):
        ...     hosts.ingest(observations)
    """

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self.start_time: Optional[float] = None

    def __enter__(self):
        self.start_time = time.monotonic()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed_ms = (time.monotonic() - self.start_time) * 1000
        if exc_type:
            self.logger.error(f"{self.operation} failed after {elapsed_ms:.0f}ms: {exc_val}")
        else:
            self.logger.log(self.level, f"{self.operation} took {elapsed_ms:.0f}ms")
        return False
