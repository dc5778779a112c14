"""Centralized logging configuration for the billing schema.

The schema itself only emits records through ``logging.getLogger(__name__)``.
Applications decide where those records go by calling ``setup_logging`` with
their ``ClinvoiceSettings`` (or ``configure_logging`` with an explicit
``LoggingConfig``) once at startup.
"""

import json
import logging
import logging.handlers
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

from clinvoice_schema.utils.logging_utils import _ContextFilter

if TYPE_CHECKING:
    from clinvoice_schema.config.settings import ClinvoiceSettings

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
VALID_FORMATS = ("standard", "json")

STANDARD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
STANDARD_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Attributes every LogRecord has; anything else came from extra= or LogContext
_RECORD_FIELDS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        """
        Format a record as JSON.

        Structured fields (from ``extra=`` or ``LogContext``) appear at the top
        level next to the standard ones. Values JSON cannot encode, such as
        ``Decimal`` or ``Money``, are rendered with ``str``.
        """
        entry: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _RECORD_FIELDS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


@dataclass(frozen=True)
class LoggingConfig:
    """
    Where log records go and how they look.

    Attributes:
        log_level: Minimum level handled (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: 'standard' text lines or 'json' objects
        log_file: Path of the rotating log file, if any
        enable_console: Whether records are written to stderr
        enable_file: Whether records are written to ``log_file``
        max_file_size: Size in bytes at which the log file rotates
        backup_count: Number of rotated files kept
    """

    log_level: str = "INFO"
    log_format: str = "standard"
    log_file: Optional[str] = None
    enable_console: bool = True
    enable_file: bool = False
    max_file_size: int = 10 * 1024 * 1024
    backup_count: int = 5

    def __post_init__(self):
        """
        Normalize the level and reject inconsistent settings.

        Raises:
            ValueError: On an unknown level or format, or file output
                enabled without a file
        """
        level = self.log_level.upper()
        if level not in VALID_LEVELS:
            raise ValueError(
                f"Invalid log level: {self.log_level}. Must be one of {', '.join(VALID_LEVELS)}"
            )
        if self.log_format not in VALID_FORMATS:
            raise ValueError(
                f"Invalid log format: {self.log_format}. Must be one of {', '.join(VALID_FORMATS)}"
            )
        if self.enable_file and not self.log_file:
            raise ValueError("log_file must be specified when enable_file is True")
        object.__setattr__(self, "log_level", level)

    @property
    def levelno(self) -> int:
        return getattr(logging, self.log_level)


def _formatter(config: LoggingConfig) -> logging.Formatter:
    if config.log_format == "json":
        return JSONFormatter()
    return logging.Formatter(fmt=STANDARD_FORMAT, datefmt=STANDARD_DATEFMT)


def _handlers(config: LoggingConfig) -> Iterator[logging.Handler]:
    if config.enable_console:
        yield logging.StreamHandler()

    if config.enable_file and config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        yield logging.handlers.RotatingFileHandler(
            filename=config.log_file,
            maxBytes=config.max_file_size,
            backupCount=config.backup_count,
        )


def configure_logging(config: LoggingConfig) -> None:
    """
    Route records to the handlers described by ``config``.

    Any handlers already on the root logger are closed and replaced. Each new
    handler adds the active ``LogContext`` fields to its records.
    """
    reset_logging()

    root_logger = logging.getLogger()
    root_logger.setLevel(config.levelno)

    formatter = _formatter(config)
    context_filter = _ContextFilter()
    for handler in _handlers(config):
        handler.setLevel(config.levelno)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)


def setup_logging(settings: Optional["ClinvoiceSettings"] = None) -> None:
    """
    Configure logging from the application settings.

    Args:
        settings: Settings to use; the global configuration if omitted
    """
    if settings is None:
        from clinvoice_schema.config.settings import get_config

        settings = get_config()
    configure_logging(settings.logging_config())


def get_logger(name: str) -> logging.Logger:
    """Get the logger for a module (pass ``__name__``)."""
    return logging.getLogger(name)


def reset_logging() -> None:
    """
    Close and remove every root handler and restore the default WARNING level.

    Useful for testing and cleanup.
    """
    root_logger = logging.getLogger()

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(logging.WARNING)
