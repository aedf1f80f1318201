"""Configuration management for the rotation planner with safe test defaults."""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment types."""
    TEST = "TEST"
    DEV = "DEV"
    PROD = "PROD"


class LogFormat(str, Enum):
    """Supported log renderers."""
    JSON = "json"
    TEXT = "text"
    STRUCTURED = "structured"


class AppSettings(BaseSettings):
    """Application settings with safe test defaults and dotenv support.

    Environment variables can be set directly or via .env file.
    The scheduling engine itself never reads these; they only seed the
    explicit ``ScheduleOptions`` built by the CLI.
    """

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_nested_delimiter='__',
        case_sensitive=False,
        extra='ignore'  # Ignore extra fields for flexibility
    )

    # ===================
    # Environment
    # ===================
    ENV: Environment = Field(
        default=Environment.TEST,
        description='Application environment: TEST, DEV, or PROD'
    )

    # ===================
    # Logging
    # ===================
    LOG_LEVEL: str = Field(default='INFO', description='Logging level')
    LOG_FORMAT: LogFormat = Field(default=LogFormat.TEXT, description='Log format: json, text, or structured')
    LOG_FILE: Optional[Path] = Field(default=None, description='Log file path')

    # ===================
    # Match defaults
    # ===================
    DEFAULT_HALF_LENGTH_MINUTES: int = Field(
        default=30,
        gt=0,
        description='Length of each half in minutes'
    )
    DEFAULT_ROTATION_INTERVAL_MINUTES: int = Field(
        default=10,
        gt=0,
        description='Minutes between planned rotations'
    )
    DEFAULT_MAX_PLAYERS_ON_FIELD: int = Field(
        default=7,
        gt=0,
        description='Number of field slots in the formation'
    )

    # ===================
    # Rotation heuristics
    # ===================
    MIN_PLAYERS_PER_GROUP: int = Field(
        default=3,
        gt=0,
        description='Baseline substitutions per rotation = ceil(field size / this value)'
    )
    MUST_ON_SHARE: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description='Share of a player\'s availability window they must be able to reach'
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")
        return v_upper

    @field_validator('LOG_FORMAT', mode='before')
    @classmethod
    def validate_log_format(cls, v) -> LogFormat:
        """Accept log format names case-insensitively."""
        if isinstance(v, str):
            return LogFormat(v.strip().lower())
        return v

    @field_validator('ENV', mode='before')
    @classmethod
    def validate_env(cls, v) -> Environment:
        """Validate and normalize environment value."""
        if isinstance(v, Environment):
            return v
        if isinstance(v, str):
            v_upper = v.upper()
            # Map common variations to standard values
            if v_upper in ('TEST', 'TESTING'):
                return Environment.TEST
            elif v_upper in ('DEV', 'DEVELOPMENT', 'LOCAL'):
                return Environment.DEV
            elif v_upper in ('PROD', 'PRODUCTION'):
                return Environment.PROD
        raise ValueError(f"ENV must be TEST, DEV, or PROD (got: {v})")


@lru_cache()
def get_settings() -> AppSettings:
    """Get cached application settings.

    Loads settings from:
    1. Environment variables
    2. .env file (if exists)
    3. Default values

    Returns:
        AppSettings: Cached settings instance
    """
    return AppSettings()
