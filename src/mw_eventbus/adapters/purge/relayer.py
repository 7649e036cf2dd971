"""Purge adapter – CdnPurgeEventRelayer."""
from __future__ import annotations

from typing import Any, Mapping, Sequence

from mw_eventbus.delivery import EventBus, EventBusFactory, EventType
from mw_eventbus.events import EventSerializer, StreamNameMapper
from mw_eventbus.kernel.errors import ConfigurationError, ParameterAssertionError
from mw_eventbus.observability.correlation import RequestContext

PURGE_CHANNEL = "cdn-url-purges"
RESOURCE_CHANGE_SCHEMA = "/resource_change/1.0.0"


class CdnPurgeEventRelayer:
    """Turn CDN URL purges into ``resource_change`` events.

    Purges are sent immediately rather than deferred: they are already
    emitted after the change they invalidate has been committed.
    """

    def __init__(
        self,
        factory: EventBusFactory,
        stream: str | None,
        serializer: EventSerializer | None = None,
        stream_names: StreamNameMapper | None = None,
    ) -> None:
        if not stream:
            raise ConfigurationError("The CDN purge stream must be configured")
        self._stream = (stream_names or StreamNameMapper()).resolve(stream)
        self._serializer = serializer or EventSerializer()
        self._bus: EventBus = factory.get_instance_for_stream(self._stream)

    @property
    def stream(self) -> str:
        """The stream events are produced to, after renaming."""
        return self._stream

    def notify(
        self,
        channel: str,
        purges: Sequence[Mapping[str, Any]],
        *,
        context: RequestContext | None = None,
    ) -> bool:
        """Send one event per ``{"url": ..., "timestamp": ...}`` purge.

        Returns ``True`` only when every event was accepted.
        """
        if channel != PURGE_CHANNEL:
            raise ParameterAssertionError(
                "channel", f"CdnPurgeEventRelayer only handles '{PURGE_CHANNEL}', got '{channel}'"
            )
        events = [
            self._serializer.create_event(
                RESOURCE_CHANGE_SCHEMA,
                self._stream,
                purge["url"],
                {"tags": ["mediawiki"]},
                ingestion_timestamp=purge.get("timestamp"),
                request_id=context.request_id if context is not None else None,
            )
            for purge in purges
        ]
        return self._bus.send(events, EventType.PURGE, context=context) is True


__all__ = ["PURGE_CHANNEL", "RESOURCE_CHANGE_SCHEMA", "CdnPurgeEventRelayer"]
