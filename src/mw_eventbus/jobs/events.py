"""Jobs – turning a JobSpecification into a signed job event."""
from __future__ import annotations

import hashlib
import json
from typing import Any, Callable

from mw_eventbus.delivery import encode_event
from mw_eventbus.events import (
    EventSerializer,
    StreamNameMapper,
    replace_binary_values_recursive,
    sign_event,
    timestamp_to_dt,
)
from mw_eventbus.jobs.job import JobSpecification
from mw_eventbus.observability.correlation import RequestContext
from mw_eventbus.observability.logging import get_logger

logger = get_logger(__name__)

JOB_SCHEMA = "/mediawiki/job/1.0.0"
JOB_STREAM_PREFIX = "mediawiki.job."
SIGNATURE_FIELD = "mediawiki_signature"


def job_stream(job_type: str) -> str:
    return JOB_STREAM_PREFIX + job_type


class JobEventFactory:
    """Builds ``/mediawiki/job/1.0.0`` events signed with the wiki secret.

    *article_url* maps a page title to its full URL, for ``meta.uri``;
    *stream_names* renames the ``mediawiki.job.<type>`` streams.
    The signature covers the compact JSON encoding of the event without
    the ``mediawiki_signature`` field, so a consumer can re-encode what it
    received and check it with :func:`~mw_eventbus.events.verify_event_signature`.
    """

    def __init__(
        self,
        serializer: EventSerializer,
        secret_key: str,
        database: str,
        article_url: Callable[[str], str],
        stream_names: StreamNameMapper | None = None,
    ) -> None:
        self._serializer = serializer
        self._secret_key = secret_key
        self._database = database
        self._article_url = article_url
        self._stream_names = stream_names or StreamNameMapper()

    def create_job_event(
        self,
        job: JobSpecification,
        *,
        context: RequestContext | None = None,
    ) -> dict[str, Any] | None:
        """Return the signed event, or ``None`` when *job* cannot be encoded."""
        params = replace_binary_values_recursive(job.params)
        attrs: dict[str, Any] = {
            "database": self._database,
            "type": job.type,
            "page_namespace": job.namespace,
            "page_title": job.title,
        }
        if job.release_timestamp is not None:
            attrs["delay_until"] = timestamp_to_dt(job.release_timestamp)
        if job.ignore_duplicates:
            attrs["sha1"] = _dedup_hash(job)
        if "rootJobTimestamp" in params and "rootJobSignature" in params:
            attrs["root_event"] = {
                "signature": params["rootJobSignature"],
                "dt": timestamp_to_dt(params["rootJobTimestamp"]),
            }
        attrs["params"] = params

        request_id = params.get("requestId") or job.request_id
        if request_id is None and context is not None:
            request_id = context.request_id

        try:
            event = self._serializer.create_event(
                JOB_SCHEMA,
                self._stream_names.resolve(job_stream(job.type)),
                self._article_url(job.title),
                attrs,
                wiki_id=self._database,
                request_id=request_id,
            )
            serialized = encode_event(event)
        except (TypeError, ValueError) as exc:
            logger.error("jobs.serialization_failed", job_type=job.type, error=str(exc))
            return None
        event[SIGNATURE_FIELD] = sign_event(serialized, self._secret_key)
        return event


def _dedup_hash(job: JobSpecification) -> str:
    info = replace_binary_values_recursive(job.deduplication_info())
    text = json.dumps(info, sort_keys=True, ensure_ascii=False, separators=(",", ":"), default=str)
    return hashlib.sha1(text.encode("utf-8", "surrogatepass")).hexdigest()


__all__ = ["JOB_SCHEMA", "JOB_STREAM_PREFIX", "SIGNATURE_FIELD", "JobEventFactory", "job_stream"]
