"""
Configuration management for the billing schema.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clinvoice_schema.config.logging_config import LoggingConfig
from clinvoice_schema.models.money import Currency


class ClinvoiceSettings(BaseSettings):
    """Configuration settings for the billing schema."""

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Logging Configuration
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="standard", alias="LOG_FORMAT")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_console: bool = Field(default=True, alias="LOG_CONSOLE")
    log_max_file_size: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_FILE_SIZE", gt=0)
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT", ge=0)

    # Currency Configuration
    default_currency: Currency = Field(default=Currency.USD, alias="DEFAULT_CURRENCY")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ["standard", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("default_currency", mode="before")
    @classmethod
    def normalize_currency(cls, v):
        """Accept currency codes in any case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    def logging_config(self) -> LoggingConfig:
        """Build the logging configuration described by these settings."""
        return LoggingConfig(
            log_level="DEBUG" if self.debug else self.log_level,
            log_format=self.log_format,
            log_file=self.log_file,
            enable_console=self.log_console,
            enable_file=self.log_file is not None,
            max_file_size=self.log_max_file_size,
            backup_count=self.log_backup_count,
        )


def load_config(env_file: Optional[str] = None) -> ClinvoiceSettings:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return ClinvoiceSettings()


# Global configuration instance
_config: Optional[ClinvoiceSettings] = None


def get_config() -> ClinvoiceSettings:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> ClinvoiceSettings:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
