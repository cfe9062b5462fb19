"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass

from smskpi.utils.exceptions import ConfigError


DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int

    # CSV parsing
    csv_encoding: str
    csv_date_format: str
    csv_default_label: str
    csv_excluded_labels: List[str]

    # Processing
    max_workers: int

    # Report
    currency_symbol: str
    default_timeframe: str

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppSettings":
        """
        Load settings from YAML file.

        Args:
            config_path: Explicit file; falls back to $SMSKPI_CONFIG, then
                the config.yaml bundled with the package

        Returns:
            AppSettings instance

        Raises:
            ConfigError: If the file is missing, unreadable or incomplete
        """
        if config_path is None:
            env_path = os.getenv("SMSKPI_CONFIG")
            config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read configuration {config_path}: {e}")

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration {config_path} is not a mapping")

        try:
            settings = cls(
                app_name=config["app"]["name"],
                app_version=str(config["app"]["version"]),
                log_level=config["logging"]["level"],
                log_max_file_size_mb=int(config["logging"]["max_file_size_mb"]),
                log_backup_count=int(config["logging"]["backup_count"]),
                csv_encoding=config["csv"]["encoding"],
                csv_date_format=config["csv"]["date_format"],
                csv_default_label=config["csv"]["default_label"],
                csv_excluded_labels=[str(label) for label in config["csv"]["excluded_labels"]],
                max_workers=int(config["processing"]["max_workers"]),
                currency_symbol=config["report"]["currency_symbol"],
                default_timeframe=str(config["report"]["default_timeframe"])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration {config_path}: missing or bad value {e}")

        settings.validate()
        return settings

    def validate(self) -> None:
        """Check value ranges that YAML typing cannot express."""
        if self.max_workers < 1:
            raise ConfigError("processing.max_workers must be at least 1")
        if self.log_max_file_size_mb < 1:
            raise ConfigError("logging.max_file_size_mb must be at least 1")
        if self.log_backup_count < 0:
            raise ConfigError("logging.backup_count must not be negative")
        if not self.csv_default_label.strip():
            raise ConfigError("csv.default_label must not be blank")
        if self.default_timeframe.lower() not in ("3", "6", "12", "all"):
            raise ConfigError("report.default_timeframe must be one of 3, 6, 12, all")

    @property
    def log_max_bytes(self) -> int:
        return self.log_max_file_size_mb * 1024 * 1024


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings(config_path: Optional[Path] = None) -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None or config_path is not None:
        _settings = AppSettings.load(config_path)
    return _settings


def reset_settings() -> None:
    """Drop the cached settings instance."""
    global _settings
    _settings = None
