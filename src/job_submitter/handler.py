"""Lambda handler that transcodes newly uploaded objects.

Triggered by S3 ObjectCreated notifications on the input bucket.

Flow:
1. Log the inbound event and derive the uploaded object
2. Build the job request (input URI, unique output prefix, web-HD preset)
3. Submit one MediaConvert job
4. Poll the job until it completes or fails, then return its outcome

The invocation does not return until polling has finished, so the Lambda
timeout must exceed MAX_WAIT_SECONDS plus SHUTDOWN_MARGIN_SECONDS.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from ..job_poller import JobPoller
from ..shared.aws_clients import get_mediaconvert_client
from ..shared.config import Settings, get_settings
from ..shared.exceptions import (
    ConfigurationError,
    EventValidationError,
    JobPollingError,
    JobSubmissionError,
    JobTimeoutError,
)
from .events import parse_storage_event
from .job_builder import build_job_request
from .submitter import submit_job

logger = Logger(service="transcode-submitter")
tracer = Tracer(service="transcode-submitter")
metrics = Metrics(service="transcode-submitter", namespace="StorageTranscode")


@logger.inject_lambda_context(log_event=True)
@tracer.capture_lambda_handler
@metrics.log_metrics(capture_cold_start_metric=True)
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Submit a transcode job for an uploaded object and wait for it.

    Args:
        event: S3 event notification, or {"bucket": ..., "name": ...}
        context: Lambda context

    Returns:
        Outcome of the job

    Raises:
        ConfigurationError: If the environment is misconfigured
        EventValidationError: If the event does not name exactly one object
        JobSubmissionError: If MediaConvert rejects the job
        JobPollingError: If a status check fails
        JobTimeoutError: If the job outlives the polling deadline

    Output structure:
        {
            "job_id": "1700000000000-abc123",
            "job_name": "arn:aws:mediaconvert:...:jobs/1700000000000-abc123",
            "input_uri": "s3://input-bucket/uploads/video.mov",
            "output_uri": "s3://output-bucket/<token>/",
            "status": "COMPLETE",
            "succeeded": true,
            "polls": 12,
            "elapsed_seconds": 16.6
        }
    """
    try:
        settings = get_settings()
    except ConfigurationError as e:
        logger.error("Invalid function configuration", extra={"error": e.to_dict()})
        metrics.add_metric(name="ConfigurationErrors", unit=MetricUnit.Count, value=1)
        raise

    logger.setLevel(settings.log_level)

    try:
        storage_event = parse_storage_event(event)
    except EventValidationError as e:
        logger.error("Rejected storage event", extra={"error": e.to_dict()})
        metrics.add_metric(name="InvalidEvents", unit=MetricUnit.Count, value=1)
        raise

    logger.info(
        f"Processing file: {storage_event.uri}",
        extra={"bucket": storage_event.bucket, "key": storage_event.name},
    )

    client = get_mediaconvert_client()
    request = build_job_request(storage_event, settings)

    try:
        with tracer.provider.in_subsegment("create_job"):
            job = submit_job(client, request, settings)
    except JobSubmissionError as e:
        logger.error(
            "Job submission failed",
            extra={"error": e.to_dict(), "input_uri": request.input_uri},
        )
        metrics.add_metric(name="JobSubmissionErrors", unit=MetricUnit.Count, value=1)
        raise

    metrics.add_metric(name="JobsSubmitted", unit=MetricUnit.Count, value=1)
    metrics.add_metadata(key="job_id", value=job.job_id)

    max_wait = _polling_deadline(settings, context)
    poller = JobPoller(client, settings)

    try:
        with tracer.provider.in_subsegment("wait_for_job"):
            result = poller.poll(job.job_id, max_wait_seconds=max_wait)
    except JobTimeoutError as e:
        logger.error("Job did not finish in time", extra={"error": e.to_dict()})
        metrics.add_metric(name="JobTimeouts", unit=MetricUnit.Count, value=1)
        raise
    except JobPollingError as e:
        logger.error("Job status polling failed", extra={"error": e.to_dict()})
        metrics.add_metric(name="JobPollingErrors", unit=MetricUnit.Count, value=1)
        raise

    metrics.add_metric(name="StatusPolls", unit=MetricUnit.Count, value=result.polls)
    if result.succeeded:
        metrics.add_metric(name="JobsSucceeded", unit=MetricUnit.Count, value=1)
    else:
        # Job-reported failure ends the invocation normally
        logger.warning(
            "Transcode job did not succeed",
            extra={
                "job_id": job.job_id,
                "status": result.job.status_name,
                "error_code": result.job.error_code,
                "error_message": result.job.error_message,
            },
        )
        metrics.add_metric(name="JobsFailed", unit=MetricUnit.Count, value=1)

    return {
        "job_id": job.job_id,
        "job_name": job.name,
        "input_uri": request.input_uri,
        "output_uri": request.output_uri,
        "status": result.job.status_name,
        "succeeded": result.succeeded,
        "polls": result.polls,
        "elapsed_seconds": round(result.elapsed_seconds, 3),
    }


def _polling_deadline(settings: Settings, context: LambdaContext) -> float:
    """Cap the configured wait to the time this invocation has left.

    Args:
        settings: Function settings
        context: Lambda context

    Returns:
        Seconds the poller may spend, never negative
    """
    max_wait = settings.max_wait_seconds
    remaining_ms = getattr(context, "get_remaining_time_in_millis", None)
    if remaining_ms is not None:
        remaining = remaining_ms() / 1000.0 - settings.shutdown_margin_seconds
        max_wait = min(max_wait, remaining)
    return max(max_wait, 0.0)
