"""Jobs – checks a job event received for execution."""
from __future__ import annotations

import json
from typing import Any

from mw_eventbus.delivery import encode_event
from mw_eventbus.events import decode_binary_value, verify_event_signature
from mw_eventbus.jobs.events import SIGNATURE_FIELD
from mw_eventbus.kernel.errors import JobValidationError
from mw_eventbus.observability.logging import get_logger

logger = get_logger(__name__)

_REQUIRED_FIELDS = ("database", "type", "params")


class EventBodyValidator:
    """Validate and decode the body of a signed job event.

    Raises :class:`~mw_eventbus.kernel.errors.JobValidationError` whose
    ``status`` is the HTTP answer: 400 for a malformed event, 403 for a
    missing or wrong signature, 500 when the body or a binary parameter
    cannot be decoded.
    """

    def __init__(self, secret_key: str) -> None:
        self._secret_key = secret_key

    def validate_body(self, body: str | bytes) -> dict[str, Any]:
        try:
            event = json.loads(body)
        except ValueError as exc:
            raise JobValidationError(
                "Could not decode the event", status=500, detail={"error": str(exc)}, cause=exc
            ) from exc

        if not isinstance(event, dict):
            raise JobValidationError(
                "Invalid event received", status=400, detail={"missing_params": list(_REQUIRED_FIELDS)}
            )
        missing = [name for name in _REQUIRED_FIELDS if event.get(name) is None]
        if missing:
            raise JobValidationError("Invalid event received", status=400, detail={"missing_params": missing})

        if event.get(SIGNATURE_FIELD) is None:
            raise JobValidationError("Missing mediawiki signature", status=403)
        signature = event.pop(SIGNATURE_FIELD)
        if not verify_event_signature(encode_event(event), self._secret_key, signature):
            logger.warning("jobs.invalid_signature", job_type=event.get("type"), database=event.get("database"))
            raise JobValidationError("Invalid mediawiki signature", status=403)

        params = event["params"]
        if isinstance(params, dict):
            for key, value in params.items():
                try:
                    params[key] = decode_binary_value(value)
                except ValueError as exc:
                    raise JobValidationError(
                        "Internal Server Error",
                        status=500,
                        detail={"error": f"base64 decode failed for parameter {key}"},
                        cause=exc,
                    ) from exc
        return event


__all__ = ["EventBodyValidator"]
