"""MediaConvert job submission.

Issues exactly one ``create_job`` call per request. Failures are converted to
JobSubmissionError and propagated; transient-error retries are left to the
botocore client configuration.
"""

from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from ..shared.config import Settings
from ..shared.exceptions import JobSubmissionError
from ..shared.models import TranscodeJob, TranscodeJobRequest
from .job_builder import build_create_job_params, extract_job_id, job_path

logger = Logger(service="transcode-submitter")


def submit_job(
    client: Any,
    request: TranscodeJobRequest,
    settings: Settings,
) -> TranscodeJob:
    """Create a MediaConvert job for the request.

    Args:
        client: boto3 MediaConvert client
        request: Job request from build_job_request
        settings: Function settings

    Returns:
        The created job; ``job_id`` is the trailing segment of its ARN

    Raises:
        JobSubmissionError: If the API call fails or returns no job name
    """
    params = build_create_job_params(request, settings)

    logger.debug(
        "Submitting MediaConvert job",
        extra={
            "parent": request.parent,
            "input_uri": request.input_uri,
            "output_uri": request.output_uri,
            "template_id": request.template_id,
            "queue": params["Queue"],
        },
    )

    try:
        response = client.create_job(**params)
    except ClientError as e:
        error = e.response.get("Error", {})
        raise JobSubmissionError(
            f"MediaConvert rejected job for {request.input_uri}: "
            f"{error.get('Message', str(e))}",
            original_error=e,
            details={
                "aws_error_code": error.get("Code"),
                "input_uri": request.input_uri,
                "output_uri": request.output_uri,
            },
        ) from e
    except BotoCoreError as e:
        raise JobSubmissionError(
            f"Could not reach MediaConvert: {e}",
            original_error=e,
            details={"input_uri": request.input_uri},
        ) from e

    job_record = response.get("Job") or {}
    job_name = job_record.get("Arn", "")
    if not job_name and job_record.get("Id"):
        job_name = job_path(settings.account_id, settings.transcoder_region, job_record["Id"])
    if not job_name:
        raise JobSubmissionError(
            "MediaConvert response did not include a job ARN",
            details={"input_uri": request.input_uri, "response_keys": sorted(response)},
        )

    job = TranscodeJob.from_api(job_record).model_copy(
        update={"job_id": extract_job_id(job_name), "name": job_name}
    )

    logger.info(
        f"Job {job.name} created",
        extra={
            "job_id": job.job_id,
            "job_name": job.name,
            "status": job.status_name,
            "output_uri": request.output_uri,
        },
    )

    return job
