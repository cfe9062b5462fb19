"""Logging infrastructure with CSV source context."""
import logging
import os
import sys
import threading
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


DEFAULT_MAX_BYTES = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT = 30


class SourceContextFilter(logging.Filter):
    """Add the CSV source being processed to log records."""

    def __init__(self):
        super().__init__()
        # Worker threads each process their own file
        self._local = threading.local()

    @property
    def source(self) -> Optional[str]:
        return getattr(self._local, "source", None)

    @source.setter
    def source(self, value: Optional[str]):
        self._local.source = value

    def filter(self, record):
        """Add source to record."""
        record.source = self.source or "-"
        return True


def default_log_dir() -> Path:
    """Directory for the rotating log file, overridable via SMSKPI_LOG_DIR."""
    env_dir = os.getenv("SMSKPI_LOG_DIR")
    if env_dir:
        return Path(env_dir)
    return Path.home() / ".smskpi" / "logs"


class SmsKpiLogger:
    """Centralized logging manager."""

    def __init__(
        self,
        log_level: str = "INFO",
        max_bytes: int = DEFAULT_MAX_BYTES,
        backup_count: int = DEFAULT_BACKUP_COUNT,
        log_dir: Optional[Path] = None
    ):
        self.log_dir = log_dir or default_log_dir()
        self.log_file = self.log_dir / "smskpi.log"
        self.source_filter = SourceContextFilter()

        self.logger = logging.getLogger("smskpi")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.propagate = False

        # Remove existing handlers
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [source:%(source)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        # stdout is reserved for report output
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.source_filter)
        self.logger.addHandler(console_handler)

        file_error = None
        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8"
            )
        except OSError as e:
            file_error = e
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.source_filter)
            self.logger.addHandler(file_handler)

        if file_error is not None:
            self.logger.warning(f"File logging disabled ({self.log_file}): {file_error}")

    def set_source_context(self, source: Optional[str]):
        """Set the CSV source for log records emitted by the current thread."""
        self.source_filter.source = source

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[SmsKpiLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = SmsKpiLogger(log_level)
    return _logger_instance.get_logger()


def configure_logger(
    log_level: str = "INFO",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    log_dir: Optional[Path] = None
) -> logging.Logger:
    """Rebuild the global logger, e.g. after settings have been loaded."""
    global _logger_instance
    _logger_instance = SmsKpiLogger(log_level, max_bytes, backup_count, log_dir)
    return _logger_instance.get_logger()


def set_source_context(source: Optional[str]):
    """Set source context for logging."""
    if _logger_instance:
        _logger_instance.set_source_context(source)
