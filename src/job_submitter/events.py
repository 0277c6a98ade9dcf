"""Inbound event parsing.

Accepts either an S3 event notification or a flat ``{"bucket", "name"}``
payload (used by manual invocations and EventBridge input transformers).
"""

from typing import Any

from aws_lambda_powertools.utilities.data_classes import S3Event
from pydantic import ValidationError

from ..shared.exceptions import EventValidationError
from ..shared.models import StorageEvent


def parse_storage_event(event: dict[str, Any]) -> StorageEvent:
    """Extract the uploaded object from a Lambda event.

    Args:
        event: Raw Lambda event

    Returns:
        StorageEvent for the single uploaded object

    Raises:
        EventValidationError: If the payload does not name exactly one object
    """
    if not isinstance(event, dict):
        raise EventValidationError(
            "Event payload must be a JSON object",
            details={"payload_type": type(event).__name__},
        )

    if "Records" in event:
        records = list(S3Event(event).records)
        if len(records) != 1:
            # One job per invocation; S3 delivers one record per notification
            raise EventValidationError(
                f"Expected exactly one S3 record, got {len(records)}",
                details={"record_count": len(records)},
            )
        record = records[0]
        bucket = record.s3.bucket.name
        name = record.s3.get_object.key
    else:
        bucket = event.get("bucket", "")
        name = event.get("name", "")

    try:
        return StorageEvent(bucket=bucket, name=name)
    except ValidationError as e:
        raise EventValidationError(
            "Event does not identify a bucket and object name",
            details={"bucket": bucket, "name": name, "errors": e.errors(include_url=False)},
        ) from e
