"""Utility modules."""
from .logger import get_logger, configure_logger, set_source_context
from .exceptions import (
    SmsKpiError,
    ConfigError,
    SourceError,
    ValidationError,
    NoValidDataError
)

__all__ = [
    "get_logger",
    "configure_logger",
    "set_source_context",
    "SmsKpiError",
    "ConfigError",
    "SourceError",
    "ValidationError",
    "NoValidDataError"
]
