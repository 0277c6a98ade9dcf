"""Pydantic models for data validation and serialization.

This module defines the request-scoped values that flow through one invocation:
- StorageEvent (the uploaded object that triggered the function)
- TranscodeJobRequest (what is submitted to MediaConvert)
- TranscodeJob / PollResult (read-only views of the remote job)

All models use Pydantic v2 for validation and serialization.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StorageEvent(BaseModel):
    """An object-created notification for a single S3 object."""

    model_config = ConfigDict(frozen=True)

    bucket: str = Field(
        min_length=1,
        description="Bucket the object was uploaded to",
    )
    name: str = Field(
        min_length=1,
        description="Object key (URL-decoded)",
    )

    @property
    def uri(self) -> str:
        """Return the S3 URI of the uploaded object."""
        return f"s3://{self.bucket}/{self.name}"


class TranscodeJobRequest(BaseModel):
    """Request to create a MediaConvert job from a fixed preset."""

    model_config = ConfigDict(frozen=True)

    parent: str = Field(
        pattern=r"^arn:aws:mediaconvert:[a-z0-9-]+:\d{12}$",
        description="Account/region scope the job is created in",
    )
    input_uri: str = Field(
        pattern=r"(?s)^s3://[^/]+/.+$",
        description="Full S3 URI of the uploaded source file",
    )
    output_uri: str = Field(
        pattern=r"(?s)^s3://[^/]+/.+/$",
        description="S3 prefix the transcoded output is written under",
    )
    template_id: str = Field(
        min_length=1,
        description="MediaConvert output preset name",
    )
    output_token: str = Field(
        min_length=32,
        max_length=64,
        description="Unique per-request token used in the output path",
    )
    source: StorageEvent = Field(
        description="Event the request was derived from",
    )


class TranscodeJobStatus(str, Enum):
    """MediaConvert job status values."""

    SUBMITTED = "SUBMITTED"
    PROGRESSING = "PROGRESSING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"
    CANCELED = "CANCELED"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATUSES

    @property
    def is_success(self) -> bool:
        return self is TranscodeJobStatus.COMPLETE


_TERMINAL_STATUSES = frozenset(
    {TranscodeJobStatus.COMPLETE, TranscodeJobStatus.ERROR, TranscodeJobStatus.CANCELED}
)


class TranscodeJob(BaseModel):
    """Read-only view of a MediaConvert job.

    Built from the ``Job`` object of a ``create_job`` or ``get_job`` response.
    Statuses the service adds in the future are kept as plain strings and
    treated as non-terminal.
    """

    model_config = ConfigDict(frozen=True)

    job_id: str = Field(
        min_length=1,
        description="Trailing segment of the job ARN",
    )
    name: str = Field(
        min_length=1,
        description="Fully-qualified job ARN",
    )
    status: TranscodeJobStatus | str = Field(
        description="Lifecycle status reported by MediaConvert",
    )
    error_code: int | None = Field(
        default=None,
        description="MediaConvert error code if the job failed",
    )
    error_message: str | None = Field(
        default=None,
        description="MediaConvert error message if the job failed",
    )
    percent_complete: int | None = Field(
        default=None,
        description="Progress reported while the job is running",
    )
    raw: dict[str, Any] = Field(
        default_factory=dict,
        description="Full job record as returned by the API",
    )

    @classmethod
    def from_api(cls, job: dict[str, Any]) -> "TranscodeJob":
        """Build a job view from a MediaConvert ``Job`` dictionary."""
        name = job.get("Arn") or job.get("Id") or ""
        status_value = job.get("Status", "")
        try:
            status: TranscodeJobStatus | str = TranscodeJobStatus(status_value)
        except ValueError:
            status = status_value

        return cls(
            job_id=name.rsplit("/", 1)[-1],
            name=name,
            status=status,
            error_code=job.get("ErrorCode"),
            error_message=job.get("ErrorMessage"),
            percent_complete=job.get("JobPercentComplete"),
            raw=job,
        )

    @property
    def known_status(self) -> TranscodeJobStatus | None:
        """Return the status as an enum member, or None if unrecognized."""
        try:
            return TranscodeJobStatus(self.status)
        except ValueError:
            return None

    @property
    def status_name(self) -> str:
        known = self.known_status
        return known.value if known else str(self.status)

    @property
    def is_terminal(self) -> bool:
        known = self.known_status
        return known is not None and known.is_terminal

    @property
    def is_success(self) -> bool:
        known = self.known_status
        return known is not None and known.is_success


class PollResult(BaseModel):
    """Terminal outcome of polling a job."""

    model_config = ConfigDict(frozen=True)

    job: TranscodeJob = Field(
        description="Job as last reported by MediaConvert",
    )
    polls: int = Field(
        ge=1,
        description="Number of get_job calls issued",
    )
    elapsed_seconds: float = Field(
        ge=0,
        description="Time spent polling",
    )

    @property
    def succeeded(self) -> bool:
        """Check if the job completed successfully."""
        return self.job.is_success
