"""Job poller module for the transcode function.

Waits for a submitted MediaConvert job to reach a terminal status.
"""

from .poller import POLL_INTERVAL_SECONDS, JobPoller

__all__ = [
    "POLL_INTERVAL_SECONDS",
    "JobPoller",
]
