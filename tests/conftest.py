"""Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for Settings
- A stand-in Lambda context
- Fake MediaConvert clients and job records
- Sample storage events
"""

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Generator
from unittest.mock import MagicMock

import pytest

# Set dummy AWS credentials BEFORE importing any application code
os.environ["AWS_ACCESS_KEY_ID"] = "testing"
os.environ["AWS_SECRET_ACCESS_KEY"] = "testing"
os.environ["AWS_SECURITY_TOKEN"] = "testing"
os.environ["AWS_SESSION_TOKEN"] = "testing"
os.environ["AWS_DEFAULT_REGION"] = "us-east-1"

# Set function environment variables
os.environ["ACCOUNT_ID"] = "123456789012"
os.environ["TRANSCODER_REGION"] = "us-east-1"
os.environ["OUTPUT_BUCKET"] = "test-output-bucket"
os.environ["MEDIACONVERT_ROLE_ARN"] = "arn:aws:iam::123456789012:role/MediaConvertRole"
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["POWERTOOLS_TRACE_DISABLED"] = "true"
os.environ["POWERTOOLS_METRICS_NAMESPACE"] = "StorageTranscode"

from src.shared.aws_clients import clear_client_cache  # noqa: E402
from src.shared.config import Settings, clear_settings_cache  # noqa: E402

JOB_ID = "1700000000000-abc123"
JOB_ARN = f"arn:aws:mediaconvert:us-east-1:123456789012:jobs/{JOB_ID}"


@pytest.fixture(autouse=True)
def reset_caches() -> Generator[None, None, None]:
    """Make every test load settings and clients from its own environment."""
    clear_settings_cache()
    clear_client_cache()
    yield
    clear_settings_cache()
    clear_client_cache()


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture
def mock_environment(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up complete function environment."""
    env_vars = {
        "ACCOUNT_ID": "123456789012",
        "TRANSCODER_REGION": "us-east-1",
        "OUTPUT_BUCKET": "test-output-bucket",
        "MEDIACONVERT_ENDPOINT": "https://abcd1234.mediaconvert.us-east-1.amazonaws.com",
        "MEDIACONVERT_ROLE_ARN": "arn:aws:iam::123456789012:role/MediaConvertRole",
        "MEDIACONVERT_QUEUE_ARN": "arn:aws:mediaconvert:us-east-1:123456789012:queues/Transcode",
        "MAX_WAIT_SECONDS": "600",
        "SHUTDOWN_MARGIN_SECONDS": "35",
        "LOG_LEVEL": "DEBUG",
    }

    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    clear_settings_cache()
    return env_vars


@pytest.fixture
def settings() -> Settings:
    """Settings built from the base test environment."""
    return Settings()


# =============================================================================
# Lambda Fixtures
# =============================================================================


@dataclass
class FakeLambdaContext:
    function_name: str = "transcode-submitter"
    memory_limit_in_mb: int = 512
    invoked_function_arn: str = (
        "arn:aws:lambda:us-east-1:123456789012:function:transcode-submitter"
    )
    aws_request_id: str = "52fdfc07-2182-454f-963f-5f0f9a621d72"
    remaining_time_ms: int = 900_000

    def get_remaining_time_in_millis(self) -> int:
        return self.remaining_time_ms


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Lambda context with 15 minutes remaining."""
    return FakeLambdaContext()


# =============================================================================
# MediaConvert Fixtures
# =============================================================================


@pytest.fixture
def make_job() -> Callable[..., dict[str, Any]]:
    """Factory for MediaConvert ``Job`` records."""

    def _make_job(status: str, job_id: str = JOB_ID, **extra: Any) -> dict[str, Any]:
        job = {
            "Id": job_id,
            "Arn": f"arn:aws:mediaconvert:us-east-1:123456789012:jobs/{job_id}",
            "Status": status,
            "Role": "arn:aws:iam::123456789012:role/MediaConvertRole",
            "Queue": "arn:aws:mediaconvert:us-east-1:123456789012:queues/Default",
            "Settings": {},
            "CreatedAt": datetime(2024, 1, 15, 10, 0, 0, tzinfo=timezone.utc),
        }
        job.update(extra)
        return job

    return _make_job


@pytest.fixture
def mediaconvert_client(make_job: Callable[..., dict[str, Any]]) -> MagicMock:
    """MediaConvert client whose job completes on the first status check."""
    client = MagicMock()
    client.create_job.return_value = {"Job": make_job("SUBMITTED")}
    client.get_job.return_value = {"Job": make_job("COMPLETE", JobPercentComplete=100)}
    return client


# =============================================================================
# Storage Event Fixtures
# =============================================================================


@pytest.fixture
def s3_put_event() -> dict:
    """Sample S3 ObjectCreated notification for a video upload."""
    return {
        "Records": [
            {
                "eventVersion": "2.1",
                "eventSource": "aws:s3",
                "awsRegion": "us-east-1",
                "eventTime": "2024-01-15T10:00:00.000Z",
                "eventName": "ObjectCreated:Put",
                "s3": {
                    "s3SchemaVersion": "1.0",
                    "bucket": {
                        "name": "test-input-bucket",
                        "arn": "arn:aws:s3:::test-input-bucket",
                    },
                    "object": {
                        "key": "uploads/holiday+clip%282024%29.mov",
                        "size": 52428800,
                        "eTag": "d41d8cd98f00b204e9800998ecf8427e",
                    },
                },
            }
        ]
    }


@pytest.fixture
def flat_event() -> dict:
    """Flat bucket/name payload."""
    return {
        "bucket": "test-input-bucket",
        "name": "uploads/clip.mp4",
        "contentType": "video/mp4",
        "size": "1048576",
    }
