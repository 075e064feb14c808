"""
Logging configuration for rtype-maped.

Everything logs into the `rtype_maped` hierarchy and propagates to the root
logger, where a console handler and an optional rotating CSV file handler
are attached.
"""

import logging
import logging.handlers
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..settings import AppSettings, LoggingSettings

PROJECT_LOGGER = "rtype_maped"

CONSOLE_FORMAT = "%(asctime)s : %(levelname)-8s : %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"
FILE_MAX_BYTES = 10 * 1024 * 1024
FILE_BACKUP_COUNT = 5

RESET = "\033[0m"
LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}


class ColoredFormatter(logging.Formatter):
    """Console formatter that wraps the first level name in ANSI color."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = LEVEL_COLORS.get(record.levelname)
        if color is None:
            return text
        return text.replace(record.levelname, f"{color}{record.levelname}{RESET}", 1)


class CSVFormatter(logging.Formatter):
    """Semicolon separated rows: time, level, uptime, logger, line, message."""

    @staticmethod
    def quote(value: str) -> str:
        return '"' + value.replace('"', '""') + '"'

    def format(self, record: logging.LogRecord) -> str:
        fields = (
            self.quote(self.formatTime(record, self.datefmt)),
            record.levelname.ljust(8),
            self.quote(f"{int(record.relativeCreated)} ms"),
            self.quote(record.name),
            self.quote(str(record.lineno)),
            self.quote(record.getMessage()),
        )
        return ";".join(fields)


def _console_handler(options: "LoggingSettings") -> logging.Handler:
    formatter_cls = ColoredFormatter if options.console_use_colors else logging.Formatter
    handler = logging.StreamHandler()
    handler.setLevel(getattr(logging, options.console_log_level.upper(), logging.INFO))
    handler.setFormatter(formatter_cls(fmt=CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))
    return handler


def _file_handler(options: "LoggingSettings") -> Optional[logging.Handler]:
    log_path = options.log_file_path
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=FILE_MAX_BYTES,
            backupCount=FILE_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError as e:
        logging.getLogger(__name__).warning(f"Could not set up file logging at {log_path}: {e}")
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(CSVFormatter(datefmt=FILE_DATEFMT))
    return handler


def setup_logging(settings: "AppSettings") -> None:
    """
    Replace root handlers with the ones configured in settings.

    Args:
        settings: AppSettings whose `logging` subsystem drives the setup
    """
    options = settings.logging

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()
    logging.getLogger(PROJECT_LOGGER).setLevel(logging.DEBUG)

    if options.console_logging:
        root_logger.addHandler(_console_handler(options))

    file_handler = _file_handler(options) if options.file_logging else None
    if file_handler is not None:
        root_logger.addHandler(file_handler)

    # Pillow logs every PNG chunk at DEBUG
    logging.getLogger("PIL").setLevel(logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized")
    if options.console_logging:
        logger.debug(
            f"Console logging: {options.console_log_level} (colors: {options.console_use_colors})"
        )
    if file_handler is not None:
        logger.debug(f"File logging: DEBUG at {options.log_file_path.absolute()}")
