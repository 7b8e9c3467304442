"""
Decode push deliveries into job descriptors and map outcomes to HTTP statuses.

Push body: {"message": {"data": <base64>}, ...}; decoded data: {"name": <raw object key>}.
"""

from __future__ import annotations

import base64
import binascii
import json
from typing import Any

from pydantic import ValidationError

from transcode_shared import (
    JobDescriptor,
    JobOutcome,
    OutcomeKind,
    PushEnvelope,
    StorageObjectNotification,
    validate_object_key,
)

_STATUS_BY_KIND = {
    OutcomeKind.SUCCESS: 200,
    OutcomeKind.ALREADY_PUBLISHED: 200,
    OutcomeKind.VALIDATION_FAILURE: 400,
    OutcomeKind.TRANSCODE_FAILURE: 500,
    OutcomeKind.FETCH_FAILURE: 500,
    OutcomeKind.PUBLISH_FAILURE: 500,
}


class IngressError(ValueError):
    """The inbound delivery could not be decoded into a job."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


def _load_json(raw: str | bytes, what: str) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise IngressError(f"Bad Request: {what} is not valid JSON.") from e


def parse_push_body(body: str | bytes) -> JobDescriptor:
    """
    Decode a push delivery body into a JobDescriptor.

    Raises:
        IngressError: body or data not JSON, envelope malformed, data not base64,
            or the name field missing, empty or not a usable key.
    """
    envelope_data = _load_json(body, "request body")
    try:
        envelope = PushEnvelope.model_validate(envelope_data)
    except ValidationError as e:
        raise IngressError("Bad Request: missing message data.") from e

    try:
        decoded = base64.b64decode(envelope.message.data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise IngressError("Bad Request: message data is not valid base64.") from e

    data = _load_json(decoded, "message data")
    if not isinstance(data, dict):
        raise IngressError("Bad Request: message data must be a JSON object.")
    try:
        notification = StorageObjectNotification.model_validate(data)
    except ValidationError as e:
        raise IngressError(_notification_error(e)) from e
    if not notification.name:
        raise IngressError("Bad Request: missing filename.")

    descriptor = JobDescriptor.for_source_key(notification.name)
    for key in (descriptor.source_key, descriptor.derived_key):
        reason = validate_object_key(key)
        if reason is not None:
            raise IngressError(f"Bad Request: invalid filename: {reason}.")
    return descriptor


def _notification_error(e: ValidationError) -> str:
    error = e.errors()[0]
    field = error["loc"][0] if error["loc"] else None
    if field == "name":
        if error["type"] == "missing" or error.get("input") is None:
            return "Bad Request: missing filename."
        return "Bad Request: invalid filename: key must be a string."
    return f"Bad Request: invalid {field}: {error['msg']}."


def decode_job(body: str | bytes) -> JobDescriptor | JobOutcome:
    """Like parse_push_body, but returns a validation-failure outcome instead of raising."""
    try:
        return parse_push_body(body)
    except IngressError as e:
        return JobOutcome.validation_failure(e.reason)


def status_for_outcome(outcome: JobOutcome) -> int:
    """Transport status for an outcome: 200 ok, 400 client error, 500 server error."""
    return _STATUS_BY_KIND[outcome.kind]


def message_for_outcome(outcome: JobOutcome) -> str:
    """Response body text for an outcome."""
    if outcome.kind == OutcomeKind.SUCCESS:
        return "Processing finished successfully"
    if outcome.kind == OutcomeKind.ALREADY_PUBLISHED:
        return f"Already processed: {outcome.derived_key}"
    if outcome.kind == OutcomeKind.VALIDATION_FAILURE:
        return outcome.reason or "Bad Request"
    if outcome.kind == OutcomeKind.TRANSCODE_FAILURE:
        return f"Processing failed: {outcome.reason}"
    if outcome.kind == OutcomeKind.FETCH_FAILURE:
        return f"Download failed: {outcome.reason}"
    return f"Upload failed: {outcome.reason}"
