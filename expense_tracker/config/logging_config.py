"""Logging setup shared by the API server and the CLI.

Two output formats are supported: a single human-readable line per record
(``standard``) and one JSON object per line (``json``) for log shippers.
Records pass through the context filter from ``expense_tracker.utils``,
so the correlation id and user id of the current request show up in both.
"""

import json
import logging
import logging.handlers
import os
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from expense_tracker.config.settings import TrackerConfig

STANDARD_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024

# Libraries that log every statement or request at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "uvicorn.access", "multipart")

_BASE_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").strip().lower() in {
        "1",
        "true",
        "yes",
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    Fields passed through ``extra=`` or bound with ``LogContext`` are
    copied to the top level of the object.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _BASE_RECORD_ATTRS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class LoggingConfig:
    """
    Where and how log records are written.

    Attributes:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: 'standard' or 'json'
        log_file: Path of the rotating log file, if any
        enable_console: Write to stderr
        enable_file: Write to ``log_file``
        max_file_size: Rotation threshold in bytes
        backup_count: Rotated files to keep
    """

    VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    VALID_FORMATS = {"standard", "json"}

    def __init__(
        self,
        log_level: str = "INFO",
        log_format: str = "standard",
        log_file: Optional[str] = None,
        enable_console: bool = True,
        enable_file: bool = False,
        max_file_size: int = DEFAULT_MAX_BYTES,
        backup_count: int = 5,
    ):
        level = log_level.upper()
        if level not in self.VALID_LEVELS:
            raise ValueError(
                f"Invalid log level: {log_level}. "
                f"Must be one of {', '.join(sorted(self.VALID_LEVELS))}"
            )
        if log_format not in self.VALID_FORMATS:
            raise ValueError(
                f"Invalid log format: {log_format}. "
                f"Must be one of {', '.join(sorted(self.VALID_FORMATS))}"
            )
        if enable_file and not log_file:
            raise ValueError("log_file must be specified when enable_file is True")

        self.log_level = level
        self.log_format = log_format
        self.log_file = log_file
        self.enable_console = enable_console
        self.enable_file = enable_file
        self.max_file_size = max_file_size
        self.backup_count = backup_count

    @property
    def level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(cls, settings: Optional["TrackerConfig"] = None) -> "LoggingConfig":
        """
        Build the configuration from LOG_* environment variables.

        LOG_LEVEL falls back to the application settings, then to INFO.
        The other variables are LOG_FORMAT, LOG_FILE, LOG_CONSOLE,
        LOG_FILE_ENABLED, LOG_MAX_FILE_SIZE and LOG_BACKUP_COUNT.
        """
        default_level = settings.log_level if settings is not None else "INFO"
        return cls(
            log_level=os.getenv("LOG_LEVEL", default_level),
            log_format=os.getenv("LOG_FORMAT", "standard"),
            log_file=os.getenv("LOG_FILE"),
            enable_console=_env_flag("LOG_CONSOLE", True),
            enable_file=_env_flag("LOG_FILE_ENABLED", False),
            max_file_size=int(os.getenv("LOG_MAX_FILE_SIZE", str(DEFAULT_MAX_BYTES))),
            backup_count=int(os.getenv("LOG_BACKUP_COUNT", "5")),
        )


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = []
    if config.enable_console:
        handlers.append(logging.StreamHandler())
    if config.enable_file and config.log_file:
        Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                filename=config.log_file,
                maxBytes=config.max_file_size,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )
    return handlers


def _clear_root_handlers(root_logger: logging.Logger) -> None:
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()


def configure_logging(config: LoggingConfig) -> None:
    """
    Install handlers on the root logger, replacing any existing ones.

    Args:
        config: LoggingConfig instance
    """
    from expense_tracker.utils.logging_utils import _ContextFilter

    root_logger = logging.getLogger()
    _clear_root_handlers(root_logger)
    root_logger.setLevel(config.level)

    if config.log_format == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(fmt=STANDARD_FORMAT, datefmt=DATE_FORMAT)

    context_filter = _ContextFilter()
    for handler in _build_handlers(config):
        handler.setLevel(config.level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    if config.level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module; pass ``__name__``."""
    return logging.getLogger(name)


def reset_logging() -> None:
    """Remove all root handlers and restore the WARNING level (used by tests)."""
    _clear_root_handlers(logging.getLogger())
    logging.getLogger().setLevel(logging.WARNING)
