"""EventSerializer – builds the common envelope of every event.

An event is a plain dict: the domain attributes produced by an entity
serializer plus ``$schema`` and a ``meta`` block. ``meta.stream`` routes the
event; ``meta.id`` is generated fresh per event.
"""
from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import Any, Callable, Mapping
from urllib.parse import quote
from uuid import uuid4

#: Grouping key for events that lack ``meta.stream``.
UNKNOWN_STREAM = "unknown"

_MW_TIMESTAMP = re.compile(r"^\d{14}$")


def timestamp_to_dt(timestamp: datetime | str | int | float | None = None) -> str:
    """Format a timestamp as ISO-8601 UTC, e.g. ``2024-05-01T12:00:00Z``.

    Accepts ``None`` (now), a ``datetime`` (naive values are taken as UTC),
    unix seconds, a MediaWiki ``YYYYMMDDHHMMSS`` string or an ISO-8601 string.
    """
    if timestamp is None:
        moment = datetime.now(UTC)
    elif isinstance(timestamp, datetime):
        moment = timestamp
    elif isinstance(timestamp, (int, float)):
        moment = datetime.fromtimestamp(timestamp, UTC)
    elif _MW_TIMESTAMP.match(timestamp):
        moment = datetime.strptime(timestamp, "%Y%m%d%H%M%S")
    elif timestamp.isdigit():
        moment = datetime.fromtimestamp(int(timestamp), UTC)
    else:
        moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")


def article_url(canonical_server: str, title: str, article_path: str = "/wiki/$1") -> str:
    """Full URL of a page, e.g. ``https://en.wikipedia.org/wiki/Main_Page``.

    *title* is the prefixed title; spaces become underscores and the rest
    is percent-encoded the way wiki article paths are.
    """
    encoded = quote(title.replace(" ", "_"), safe=";@$!*(),/~:")
    return canonical_server + article_path.replace("$1", encoded)


def event_stream(event: Any) -> str:
    """Return ``meta.stream`` of *event*, or :data:`UNKNOWN_STREAM`."""
    if isinstance(event, Mapping):
        meta = event.get("meta")
        if isinstance(meta, Mapping) and meta.get("stream"):
            return str(meta["stream"])
    return UNKNOWN_STREAM


class EventSerializer:
    """Create events suitable for an Event Platform intake service.

    ``wiki_domains`` maps a wiki id to its canonical domain name for
    ``meta.domain``; unknown wiki ids simply leave ``meta.domain`` unset.
    """

    def __init__(
        self,
        wiki_domains: Mapping[str, str] | None = None,
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self._wiki_domains = dict(wiki_domains or {})
        self._id_factory = id_factory or (lambda: str(uuid4()))

    def create_event(
        self,
        schema: str,
        stream: str,
        uri: str,
        attrs: Mapping[str, Any],
        *,
        wiki_id: str | None = None,
        ingestion_timestamp: bool | datetime | str | int | None = None,
        request_id: str | None = None,
    ) -> dict[str, Any]:
        """Return *attrs* plus ``$schema`` and ``meta``.

        ``ingestion_timestamp`` controls ``meta.dt``: ``True`` stamps the
        current time, a timestamp is formatted, ``None`` leaves it unset so
        the intake service stamps its own ingestion time.
        """
        domain = self._wiki_domains.get(wiki_id) if wiki_id is not None else None

        dt: str | None = None
        if ingestion_timestamp is True:
            dt = timestamp_to_dt()
        elif ingestion_timestamp is not None and ingestion_timestamp is not False:
            dt = timestamp_to_dt(ingestion_timestamp)

        return {
            **attrs,
            "$schema": schema,
            "meta": self.create_meta(stream, uri, domain=domain, dt=dt, request_id=request_id),
        }

    def create_meta(
        self,
        stream: str,
        uri: str,
        *,
        domain: str | None = None,
        dt: str | None = None,
        request_id: str | None = None,
    ) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "stream": stream,
            "uri": uri,
            "id": self._id_factory(),
        }
        if domain is not None:
            meta["domain"] = domain
        if dt is not None:
            meta["dt"] = dt
        if request_id is not None:
            meta["request_id"] = request_id
        return meta


__all__ = ["UNKNOWN_STREAM", "EventSerializer", "article_url", "event_stream", "timestamp_to_dt"]
