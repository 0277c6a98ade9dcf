"""Environment-aware configuration with validation.

This module provides centralized configuration management using Pydantic Settings.
All environment variables are validated when the settings are first loaded so a
misconfigured function fails before any MediaConvert call is made.
"""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Function settings loaded from environment variables.

    The instance is immutable and shared by the submitter and the poller
    for the lifetime of the process.

    Example:
        >>> settings = get_settings()
        >>> print(settings.output_bucket)
        'transcode-output-dev'
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        populate_by_name=True,
    )

    # Scope of every MediaConvert call
    account_id: str = Field(
        alias="ACCOUNT_ID",
        pattern=r"^\d{12}$",
        description="AWS account that owns the MediaConvert jobs",
    )
    transcoder_region: str = Field(
        min_length=1,
        validation_alias=AliasChoices(
            "transcoder_region", "TRANSCODER_REGION", "AWS_REGION"
        ),
        description="Region where MediaConvert jobs are created",
    )

    # S3 Configuration
    output_bucket: str = Field(
        alias="OUTPUT_BUCKET",
        min_length=3,
        max_length=63,
        description="S3 bucket for transcoded assets",
    )

    # MediaConvert Configuration
    mediaconvert_endpoint: str = Field(
        default="",
        alias="MEDIACONVERT_ENDPOINT",
        description="Account-specific MediaConvert API endpoint URL",
    )
    mediaconvert_role_arn: str = Field(
        alias="MEDIACONVERT_ROLE_ARN",
        description="IAM role ARN MediaConvert assumes to read and write S3",
    )
    mediaconvert_queue_arn: str = Field(
        default="",
        alias="MEDIACONVERT_QUEUE_ARN",
        description="MediaConvert queue ARN (defaults to the region's Default queue)",
    )

    # Polling
    max_wait_seconds: float = Field(
        default=840.0,
        ge=1.0,
        le=3600.0,
        alias="MAX_WAIT_SECONDS",
        description="Upper bound on how long a single invocation polls a job",
    )
    shutdown_margin_seconds: float = Field(
        default=35.0,
        ge=0.0,
        le=60.0,
        alias="SHUTDOWN_MARGIN_SECONDS",
        description=(
            "Time reserved before the Lambda deadline to report the outcome; "
            "covers one in-flight get_job attempt (5 s connect + 30 s read)"
        ),
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )

    @field_validator("mediaconvert_endpoint", mode="before")
    @classmethod
    def validate_mediaconvert_endpoint(cls, v: str) -> str:
        """Ensure MediaConvert endpoint is a valid URL."""
        if v and not v.startswith("https://"):
            raise ValueError("MediaConvert endpoint must start with https://")
        return v

    @field_validator("mediaconvert_role_arn", "mediaconvert_queue_arn", mode="before")
    @classmethod
    def validate_arn_format(cls, v: str) -> str:
        """Validate ARN format."""
        if v and not v.startswith("arn:aws:"):
            raise ValueError("Invalid ARN format - must start with 'arn:aws:'")
        return v

    @field_validator("mediaconvert_role_arn")
    @classmethod
    def require_role_arn(cls, v: str) -> str:
        if not v:
            raise ValueError("MediaConvert role ARN is required")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached function settings.

    Settings are loaded once and cached for the lifetime of the process.
    A warm Lambda container reuses the same environment, so the cached
    instance stays valid across invocations.

    Returns:
        Validated Settings instance

    Raises:
        ConfigurationError: If required environment variables are missing or invalid
    """
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid function configuration",
            details={
                "errors": [
                    {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                    for err in e.errors()
                ],
            },
        ) from e


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing when environment variables change.
    """
    get_settings.cache_clear()
