"""
Configuration settings for the flight quote service
"""

import logging
from pathlib import Path
from typing import List, Optional, Dict, Any, Union
from enum import Enum
from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings

from flightchecker.models.requests import Arguments


class Environment(str, Enum):
    """Supported environment types"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class LogLevel(str, Enum):
    """Supported log levels"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with validation"""

    # API Configuration
    API_TITLE: str = Field(default="Flight Checker API", description="API title")
    API_VERSION: str = Field(default="1.0.0", description="API version")

    # CORS Configuration (stored as string, parsed to list)
    CORS_ORIGINS_STR: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origins (comma-separated)",
        alias="CORS_ORIGINS"
    )

    # Pricing provider
    RAPIDAPI_HOST: str = Field(
        default="skyscanner-skyscanner-flight-search-v1.p.rapidapi.com",
        description="RapidAPI host for the Skyscanner pricing API"
    )
    RAPIDAPI_KEY: str = Field(
        default="",
        description="RapidAPI key for the Skyscanner pricing API"
    )

    # Polling
    POLL_MAX_ATTEMPTS: int = Field(
        default=6,
        ge=1,
        le=60,
        description="Maximum number of result polls per search session"
    )
    POLL_INTERVAL_SECONDS: float = Field(
        default=10,
        ge=0,
        le=300,
        description="Seconds to wait between result polls"
    )

    # Request Configuration
    REQUEST_TIMEOUT: int = Field(
        default=30,
        ge=1,
        le=300,
        description="Provider request timeout in seconds"
    )
    RATE_LIMIT_PER_MINUTE: int = Field(
        default=30,
        ge=1,
        le=10000,
        description="Maximum provider requests per minute per host"
    )

    # Static data
    AIRPORTS_DATA_DIR: str = Field(
        default="data/airports",
        description="Directory holding countries.csv, regions.csv and airports.csv"
    )
    ARGUMENTS_FILE: str = Field(
        default="arguments.json",
        description="JSON file of quote arguments used by the command line runner"
    )

    # Logging Configuration
    LOG_LEVEL: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level"
    )

    # Environment Configuration
    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment"
    )

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Get CORS origins as a list"""
        return [origin.strip() for origin in self.CORS_ORIGINS_STR.split(',') if origin.strip()]

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def validate_log_level(cls, v) -> str:
        """Validate and normalize log level"""
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode='after')
    def validate_environment_specific_settings(self) -> 'Settings':
        """Validate environment-specific configuration"""
        if self.ENVIRONMENT == Environment.PRODUCTION:
            if self.LOG_LEVEL == LogLevel.DEBUG:
                logging.warning(
                    "DEBUG log level detected in production environment. "
                    "Consider using INFO or WARNING for production."
                )

        return self

    def validate_required_settings(self) -> None:
        """Validate that all settings needed to run quotes are present"""
        errors = []

        if not self.RAPIDAPI_KEY:
            errors.append("RAPIDAPI_KEY is required")

        if not self.RAPIDAPI_HOST:
            errors.append("RAPIDAPI_HOST is required")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

    def get_polling_config(self) -> Dict[str, Any]:
        """Get result polling configuration"""
        return {
            'max_attempts': self.POLL_MAX_ATTEMPTS,
            'poll_interval': self.POLL_INTERVAL_SECONDS,
        }

    def get_client_config(self) -> Dict[str, Any]:
        """Get provider HTTP client configuration"""
        return {
            'timeout': self.REQUEST_TIMEOUT,
            'requests_per_minute': self.RATE_LIMIT_PER_MINUTE,
        }

    def mask_sensitive_data(self) -> Dict[str, Any]:
        """Get configuration with sensitive data masked for logging"""
        config = self.model_dump()

        if config.get('RAPIDAPI_KEY'):
            config['RAPIDAPI_KEY'] = f"{config['RAPIDAPI_KEY'][:4]}***"

        return config

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
        "validate_assignment": True,
        "use_enum_values": True,
        "env_parse_none_str": "None",
        "extra": "ignore",
    }


def load_arguments(filename: Union[str, Path]) -> Arguments:
    """
    Load quote arguments from a JSON file.

    Accepts both the snake_case field names and the PascalCase keys
    (``Origin``, ``OutboundDate``, ``APIKey``...) used by existing arguments.json files.

    Raises:
        ValueError: if the file is not valid JSON or does not describe valid arguments
    """
    path = Path(filename)
    try:
        return Arguments.model_validate_json(path.read_text(encoding="utf-8"))
    except ValidationError as e:
        raise ValueError(f"Invalid arguments in {path}: {e}") from e


def get_settings() -> Settings:
    """Get validated settings instance"""
    settings = Settings()
    settings.validate_required_settings()
    return settings


# Global settings instance - will be initialized when first accessed
settings: Optional[Settings] = None


def get_global_settings() -> Settings:
    """Get or create global settings instance"""
    global settings
    if settings is None:
        settings = get_settings()
    return settings
