"""Shared utilities for the storage-triggered transcode function."""

from .config import Settings, clear_settings_cache, get_settings
from .exceptions import (
    TranscodeFunctionError,
    ConfigurationError,
    EventValidationError,
    JobSubmissionError,
    JobPollingError,
    PollingCancelledError,
    JobTimeoutError,
)
from .models import (
    StorageEvent,
    TranscodeJobRequest,
    TranscodeJobStatus,
    TranscodeJob,
    PollResult,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Exceptions
    "TranscodeFunctionError",
    "ConfigurationError",
    "EventValidationError",
    "JobSubmissionError",
    "JobPollingError",
    "PollingCancelledError",
    "JobTimeoutError",
    # Models
    "StorageEvent",
    "TranscodeJobRequest",
    "TranscodeJobStatus",
    "TranscodeJob",
    "PollResult",
]
