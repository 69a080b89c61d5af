"""Logging for Speedy.

Everything logs under the ``speedy`` logger. ``setup_logging`` attaches a
rotating file in the data directory and, when running from a terminal, a
coloured stderr handler. Per-tick messages are DEBUG so a normal log stays
quiet; counter failures and bad settings show up as WARNING.

Usage:
    from config.logging_config import setup_logging, get_logger

    setup_logging(debug=True)          # once, in main()
    logger = get_logger(__name__)      # in every module
"""
import logging
import sys
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Optional

from config.constants import STORAGE

ROOT_LOGGER_NAME = 'speedy'
LOG_FORMAT = '%(asctime)s %(levelname)-8s [%(name)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

_loggers: Dict[str, logging.Logger] = {}
_configured = False


class SpeedyFormatter(logging.Formatter):
    """Console formatter that colours the level name on a TTY."""

    LEVEL_COLORS = {
        logging.DEBUG: '\033[2m',       # dim
        logging.INFO: '\033[32m',       # green
        logging.WARNING: '\033[33m',    # yellow
        logging.ERROR: '\033[31m',      # red
        logging.CRITICAL: '\033[1;31m',  # bold red
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno)
        if not (self.use_colors and color and sys.stderr.isatty()):
            return super().format(record)
        # The record is shared with the file handler
        tinted = logging.makeLogRecord(record.__dict__)
        tinted.levelname = f"{color}{record.levelname}{self.RESET}"
        return super().format(tinted)


def _file_handler(data_dir: Path) -> logging.Handler:
    data_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        data_dir / STORAGE.LOG_FILE,
        maxBytes=STORAGE.LOG_MAX_BYTES,
        backupCount=STORAGE.LOG_BACKUP_COUNT,
        encoding='utf-8',
    )
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def _console_handler(debug: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    handler.setFormatter(SpeedyFormatter())
    return handler


def setup_logging(
    data_dir: Optional[Path] = None,
    debug: bool = False,
    console_output: bool = True,
    log_to_file: bool = True
) -> logging.Logger:
    """Configure the ``speedy`` logger, replacing any earlier handlers.

    Args:
        data_dir: Where ``speedy.log`` goes. Defaults to ~/.speedy/
        debug: Log every tick and timer change.
        console_output: Also log to stderr (WARNING and up unless debug).
        log_to_file: Write the rotating log file.

    Returns:
        The ``speedy`` logger.
    """
    global _configured

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for old in list(root_logger.handlers):
        root_logger.removeHandler(old)
        old.close()
    root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

    if log_to_file:
        root_logger.addHandler(_file_handler(data_dir or Path.home() / STORAGE.DATA_DIR_NAME))
    if console_output:
        root_logger.addHandler(_console_handler(debug))

    _configured = True
    root_logger.info(
        "Logging ready (debug=%s, file=%s, console=%s)", debug, log_to_file, console_output
    )
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return the ``speedy.<package>.<module>`` logger for ``name``.

    Only the last two dotted parts of ``name`` are kept, so ``__name__``
    of ``app.controller`` gives ``speedy.app.controller``.
    """
    short_name = '.'.join(name.split('.')[-2:])
    logger = _loggers.get(short_name)
    if logger is None:
        if not _configured:
            # Imported without main(): tests, REPL
            logging.basicConfig(level=logging.INFO)
        logger = _loggers[short_name] = logging.getLogger(f'{ROOT_LOGGER_NAME}.{short_name}')
    return logger


class LogContext:
    """Log how long a block took, and whether it raised.

    Example:
        >>> with LogContext(logger, "Controller start"):
        ...     controller.start()
        # DEBUG: Controller start took 2ms
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
        if exc_type is None:
            self.logger.log(self.level, f"{self.operation} took {elapsed_ms:.0f}ms")
        else:
            self.logger.error(f"{self.operation} failed after {elapsed_ms:.0f}ms: {exc_val}")
        return False
