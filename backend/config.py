"""
Depreciation Engine - Configuration Management

Centralized configuration for environment variables and engine defaults.
This module ensures:
- Environment-specific settings (dev/staging/prod)
- Projection defaults live in one place
- Statutory rates stay in code, not in the environment
"""

from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings
from functools import lru_cache
import logging

logger = logging.getLogger(__name__)


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Uses pydantic-settings for validation and type coercion.
    """

    # ==================== ENVIRONMENT ====================
    ENVIRONMENT: str = Field(
        default="development",
        description="Runtime environment: development, staging, production"
    )
    SERVICE_NAME: str = Field(
        default="depreciation-engine",
        description="Service name reported in structured logs"
    )

    # ==================== OBSERVABILITY ====================
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR"
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Emit JSON log lines (enable for log aggregation)"
    )

    # ==================== PROJECTION ====================
    PROJECTION_HORIZON_YEARS: int = Field(
        default=10,
        ge=0,
        description="Years projected past the current financial year when no range is given"
    )
    EXTRACTION_DISCREPANCY_THRESHOLD: float = Field(
        default=0.10,
        ge=0,
        description="Relative difference at which an extracted deduction is flagged"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True

    # ==================== COMPUTED PROPERTIES ====================

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    def validate_config(self) -> List[str]:
        """
        Validate configuration values that pydantic cannot check on its own.
        Returns list of validation errors.
        """
        errors = []

        if self.LOG_LEVEL.upper() not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")

        if self.is_production and self.LOG_LEVEL.upper() == "DEBUG":
            errors.append("LOG_LEVEL should not be DEBUG in production")

        return errors


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Settings are loaded once and cached for the application lifetime.
    """
    settings = Settings()

    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Projection horizon: {settings.PROJECTION_HORIZON_YEARS} years")

    errors = settings.validate_config()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        if settings.is_production:
            raise ValueError(f"Production configuration invalid: {', '.join(errors)}")

    return settings
