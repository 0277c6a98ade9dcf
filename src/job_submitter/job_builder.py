"""MediaConvert job request builder.

Derives the input/output locations for an uploaded object and turns them into
``create_job`` parameters. Encoding settings come entirely from the preset:
one input, one file output group, one output.
"""

from typing import Any, Callable
from uuid import uuid4

from ..shared.config import Settings
from ..shared.exceptions import JobSubmissionError
from ..shared.models import StorageEvent, TranscodeJobRequest

# MediaConvert system preset: 1080p H.264/AAC MP4 for web playback
WEB_HD_PRESET = "System-Generic_Hd_Mp4_Avc_Aac_16x9_1920x1080p_24Hz_6Mbps"


def location_path(account_id: str, region: str) -> str:
    """Build the account/region scope jobs are created in.

    Example:
        >>> location_path("123456789012", "us-east-1")
        'arn:aws:mediaconvert:us-east-1:123456789012'
    """
    return f"arn:aws:mediaconvert:{region}:{account_id}"


def job_path(account_id: str, region: str, job_id: str) -> str:
    """Build the fully-qualified job ARN for a job ID."""
    return f"{location_path(account_id, region)}:jobs/{job_id}"


def default_queue_path(account_id: str, region: str) -> str:
    """Build the ARN of the region's on-demand Default queue."""
    return f"{location_path(account_id, region)}:queues/Default"


def extract_job_id(name: str) -> str:
    """Return the trailing path segment of a fully-qualified job name.

    Args:
        name: Job ARN such as ``arn:aws:mediaconvert:...:jobs/abc123``

    Returns:
        The job ID (``abc123``)

    Raises:
        JobSubmissionError: If the name has no trailing segment
    """
    job_id = name[name.rfind("/") + 1:]
    if not job_id:
        raise JobSubmissionError(
            "Job name has no identifier segment",
            details={"job_name": name},
        )
    return job_id


def build_job_request(
    event: StorageEvent,
    settings: Settings,
    token_factory: Callable[[], Any] = uuid4,
) -> TranscodeJobRequest:
    """Derive the job request for an uploaded object.

    The output prefix contains a fresh token, so two uploads of the same file
    never write to the same location.

    Args:
        event: Uploaded object
        settings: Function settings
        token_factory: Source of unique tokens (``uuid4`` by default)

    Returns:
        Immutable TranscodeJobRequest
    """
    token = token_factory()
    output_token = token.hex if hasattr(token, "hex") else str(token)

    return TranscodeJobRequest(
        parent=location_path(settings.account_id, settings.transcoder_region),
        input_uri=f"s3://{event.bucket}/{event.name}",
        output_uri=f"s3://{settings.output_bucket}/{output_token}/",
        template_id=WEB_HD_PRESET,
        output_token=output_token,
        source=event,
    )


def build_create_job_params(
    request: TranscodeJobRequest,
    settings: Settings,
) -> dict[str, Any]:
    """Build keyword arguments for ``mediaconvert.create_job``.

    Args:
        request: Job request from build_job_request
        settings: Function settings (role and queue)

    Returns:
        Dictionary passed as ``create_job(**params)``
    """
    queue_arn = settings.mediaconvert_queue_arn or default_queue_path(
        settings.account_id, settings.transcoder_region
    )

    return {
        "Role": settings.mediaconvert_role_arn,
        "Queue": queue_arn,
        "ClientRequestToken": request.output_token,
        "UserMetadata": {
            "source_bucket": request.source.bucket,
            # UserMetadata values are capped at 256 characters
            "source_key": request.source.name[-256:],
            "output_token": request.output_token,
        },
        "Settings": {
            "TimecodeConfig": {
                "Source": "ZEROBASED",
            },
            "Inputs": [
                {
                    "FileInput": request.input_uri,
                    "AudioSelectors": {
                        "Audio Selector 1": {
                            "DefaultSelection": "DEFAULT",
                        },
                    },
                    "VideoSelector": {},
                    "TimecodeSource": "ZEROBASED",
                },
            ],
            "OutputGroups": [
                {
                    "Name": "File Group",
                    "OutputGroupSettings": {
                        "Type": "FILE_GROUP_SETTINGS",
                        "FileGroupSettings": {
                            "Destination": request.output_uri,
                        },
                    },
                    "Outputs": [
                        {
                            "Preset": request.template_id,
                        },
                    ],
                },
            ],
        },
    }
