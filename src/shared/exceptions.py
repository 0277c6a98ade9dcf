"""Custom exception hierarchy for the transcode function.

All function-specific exceptions inherit from TranscodeFunctionError,
enabling consistent error handling and structured log output.

Exception hierarchy:
    TranscodeFunctionError (base)
    ├── ConfigurationError
    ├── EventValidationError
    ├── JobSubmissionError
    ├── JobPollingError
    │   └── PollingCancelledError
    └── JobTimeoutError
"""

from typing import Any


class TranscodeFunctionError(Exception):
    """Base exception for all function errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for metrics/filtering
        details: Additional context as key-value pairs
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize function error.

        Args:
            message: Human-readable error description
            error_code: Machine-readable error code (e.g., 'JOB_SUBMISSION_ERROR')
            details: Additional context for debugging
        """
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON serialization.

        Returns:
            Dictionary with error_code, error_message, and details.
            Note: Uses 'error_message' instead of 'message' to avoid conflicts
            with Python's logging module which reserves 'message' internally.
        """
        return {
            "error_code": self.error_code,
            "error_message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.error_code!r}, {self.message!r})"


class ConfigurationError(TranscodeFunctionError):
    """Raised when environment configuration is missing or malformed."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "CONFIGURATION_ERROR", details)


class EventValidationError(TranscodeFunctionError):
    """Raised when the inbound storage event cannot be used.

    This covers:
    - Payloads without a bucket or object name
    - S3 notifications carrying zero or several records
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, "EVENT_VALIDATION_ERROR", details)


def _describe_cause(
    details: dict[str, Any] | None, original_error: Exception | None
) -> dict[str, Any]:
    error_details = details or {}
    if original_error:
        error_details["original_error"] = str(original_error)
        error_details["original_error_type"] = type(original_error).__name__
    return error_details


class JobSubmissionError(TranscodeFunctionError):
    """Raised when MediaConvert job creation fails.

    This covers:
    - API errors from MediaConvert (quota, permissions, invalid preset)
    - Malformed input or output URIs rejected by the service
    - Responses without a usable job identifier
    """

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message, "JOB_SUBMISSION_ERROR", _describe_cause(details, original_error)
        )
        self.original_error = original_error


class JobPollingError(TranscodeFunctionError):
    """Raised when a job status check fails.

    Ends the poll loop; the job itself may still be running on the service.
    """

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message, "JOB_POLLING_ERROR", _describe_cause(details, original_error)
        )
        self.original_error = original_error


class PollingCancelledError(JobPollingError):
    """Raised when the poller is cancelled before the job finished."""

    def __init__(self, job_id: str, polls: int) -> None:
        super().__init__(
            f"Polling of job {job_id} was cancelled",
            details={"job_id": job_id, "polls": polls},
        )
        # Override error code for more specific metrics
        self.error_code = "POLLING_CANCELLED"


class JobTimeoutError(TranscodeFunctionError):
    """Raised when a job does not reach a terminal state before the deadline."""

    def __init__(
        self,
        job_id: str,
        last_status: str,
        waited_seconds: float,
        max_wait_seconds: float,
    ) -> None:
        """Initialize job timeout error.

        Args:
            job_id: MediaConvert job ID being polled
            last_status: Last status reported by the service
            waited_seconds: Time spent polling so far
            max_wait_seconds: Configured deadline
        """
        details = {
            "job_id": job_id,
            "last_status": last_status,
            "waited_seconds": round(waited_seconds, 3),
            "max_wait_seconds": max_wait_seconds,
        }
        message = (
            f"Job {job_id} still {last_status} after {waited_seconds:.1f}s "
            f"(limit {max_wait_seconds}s)"
        )
        super().__init__(message, "JOB_TIMEOUT_ERROR", details)
