"""AWS client factory.

This module provides centralized MediaConvert client management with:
- One client per warm container
- Account-specific endpoint support
- Consistent timeout and retry configuration
"""

from functools import lru_cache
from typing import Any

import boto3
from botocore.config import Config

from .config import get_settings

# Transient-error retries are left to botocore; the function adds none of its own
AWS_CONFIG = Config(
    retries={
        "max_attempts": 3,
        "mode": "adaptive",
    },
    connect_timeout=5,
    read_timeout=30,
)


@lru_cache(maxsize=1)
def get_mediaconvert_client() -> Any:
    """Get cached MediaConvert client.

    Older accounts require a custom endpoint URL; when none is configured
    boto3 resolves the regional endpoint itself.

    Returns:
        boto3 MediaConvert client for the configured region
    """
    settings = get_settings()

    if not settings.mediaconvert_endpoint:
        return boto3.client(
            "mediaconvert",
            region_name=settings.transcoder_region,
            config=AWS_CONFIG,
        )

    return boto3.client(
        "mediaconvert",
        region_name=settings.transcoder_region,
        endpoint_url=settings.mediaconvert_endpoint,
        config=AWS_CONFIG,
    )


def clear_client_cache() -> None:
    """Clear the cached client.

    Useful for testing when settings change between tests.
    """
    get_mediaconvert_client.cache_clear()
