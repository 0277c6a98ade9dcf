"""MediaConvert job status poller.

Queries ``get_job`` on a fixed interval until the job reports a terminal
status. Calls are strictly sequential: the next status check is only issued
after the previous one returned and the interval elapsed.

Outcomes:
- COMPLETE / ERROR / CANCELED: returned as a PollResult (a failed job is
  not a poller error)
- get_job failure or malformed response: JobPollingError
- deadline exceeded: JobTimeoutError
- cancel() called: PollingCancelledError
"""

import json
import threading
import time
from typing import Any, Callable

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from ..shared.config import Settings
from ..shared.exceptions import JobPollingError, JobTimeoutError, PollingCancelledError
from ..shared.models import PollResult, TranscodeJob

logger = Logger(service="transcode-submitter")

# Fixed delay between status checks
POLL_INTERVAL_SECONDS = 1.5


class JobPoller:
    """Polls one MediaConvert job until it reaches a terminal status.

    Args:
        client: boto3 MediaConvert client
        settings: Function settings (default deadline)
        clock: Monotonic time source
        sleep: Waits for the given seconds and returns True if polling was
            cancelled meanwhile. Defaults to a cancellable event wait.
    """

    def __init__(
        self,
        client: Any,
        settings: Settings,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], bool] | None = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._clock = clock
        self._cancelled = threading.Event()
        self._sleep = sleep or self._cancelled.wait

    def cancel(self) -> None:
        """Stop polling at the next wait.

        For callers that embed the poller, e.g. a signal handler or another
        thread. The Lambda handler never cancels; it bounds polling with
        ``max_wait_seconds`` instead.
        """
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def poll(self, job_id: str, max_wait_seconds: float | None = None) -> PollResult:
        """Poll a job until it completes, fails or the deadline passes.

        Args:
            job_id: MediaConvert job ID returned by the submitter
            max_wait_seconds: Deadline for this poll (defaults to settings)

        Returns:
            PollResult with the terminal job record

        Raises:
            JobPollingError: If a status check fails
            JobTimeoutError: If the job is still running at the deadline
            PollingCancelledError: If cancel() was called
        """
        if not job_id:
            raise ValueError("job_id must be a non-empty string")

        max_wait = (
            self._settings.max_wait_seconds if max_wait_seconds is None else max_wait_seconds
        )
        started = self._clock()
        polls = 0
        slowest_call = 0.0

        while True:
            if self.cancelled:
                raise PollingCancelledError(job_id, polls)

            call_started = self._clock()
            job = self._fetch(job_id, polls)
            slowest_call = max(slowest_call, self._clock() - call_started)
            polls += 1

            logger.info(
                f"Job {job_id} status is {job.status_name}",
                extra={
                    "job_id": job_id,
                    "status": job.status_name,
                    "percent_complete": job.percent_complete,
                    "poll": polls,
                },
            )

            elapsed = self._clock() - started

            if job.is_terminal:
                logger.info(
                    f"Job {job_id} result is:\n {json.dumps(job.raw, default=str)}",
                    extra={
                        "job_id": job_id,
                        "status": job.status_name,
                        "error_code": job.error_code,
                        "error_message": job.error_message,
                        "polls": polls,
                    },
                )
                return PollResult(job=job, polls=polls, elapsed_seconds=elapsed)

            # The next check must fit before the deadline, including the call itself
            if elapsed + POLL_INTERVAL_SECONDS + slowest_call > max_wait:
                raise JobTimeoutError(
                    job_id=job_id,
                    last_status=job.status_name,
                    waited_seconds=elapsed,
                    max_wait_seconds=max_wait,
                )

            if self._sleep(POLL_INTERVAL_SECONDS):
                raise PollingCancelledError(job_id, polls)

    def _fetch(self, job_id: str, polls: int) -> TranscodeJob:
        try:
            response = self._client.get_job(Id=job_id)
        except ClientError as e:
            error = e.response.get("Error", {})
            raise JobPollingError(
                f"Status check for job {job_id} failed: {error.get('Message', str(e))}",
                original_error=e,
                details={"job_id": job_id, "aws_error_code": error.get("Code"), "polls": polls},
            ) from e
        except BotoCoreError as e:
            raise JobPollingError(
                f"Status check for job {job_id} failed: {e}",
                original_error=e,
                details={"job_id": job_id, "polls": polls},
            ) from e

        job_record = response.get("Job")
        if not job_record:
            raise JobPollingError(
                f"Status response for job {job_id} did not include a job",
                details={"job_id": job_id, "polls": polls},
            )
        try:
            return TranscodeJob.from_api(job_record)
        except (AttributeError, ValidationError) as e:
            raise JobPollingError(
                f"Status response for job {job_id} was malformed",
                original_error=e,
                details={"job_id": job_id, "polls": polls},
            ) from e
