"""Job submitter module for the storage-triggered transcode function.

This module handles MediaConvert job creation:
- Storage event parsing
- Job request and create_job parameter builder
- Job submission
- Lambda handler
"""

from .events import parse_storage_event
from .job_builder import (
    WEB_HD_PRESET,
    build_create_job_params,
    build_job_request,
    extract_job_id,
    job_path,
    location_path,
)
from .submitter import submit_job

__all__ = [
    "parse_storage_event",
    "WEB_HD_PRESET",
    "build_create_job_params",
    "build_job_request",
    "extract_job_id",
    "job_path",
    "location_path",
    "submit_job",
]
