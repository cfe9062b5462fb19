"""Custom exception classes for smskpi."""


class SmsKpiError(Exception):
    """Base exception for smskpi."""
    pass


class ConfigError(SmsKpiError):
    """Configuration-related errors."""
    pass


class SourceError(SmsKpiError):
    """CSV source could not be opened or decoded."""
    pass


class ValidationError(SmsKpiError):
    """Data validation errors."""
    pass


class NoValidDataError(ValidationError):
    """No spend transaction survived parsing and filtering."""

    def __init__(self, message: str = "No valid rows found in CSV."):
        super().__init__(message)
