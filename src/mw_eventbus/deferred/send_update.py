"""Deferred – EventBusSendUpdate, batching events per backing service.

Events for different streams that share an intake service are sent in one
``EventBus.send`` call, so a request makes at most one round of HTTP
requests per service (and event type).
"""
from __future__ import annotations

import dataclasses
import enum
from typing import Any, Mapping

from mw_eventbus.deferred.updates import MergeableUpdate
from mw_eventbus.delivery import EVENT_SERVICE_DISABLED_NAME, EventBusFactory, EventType
from mw_eventbus.kernel.errors import ConfigurationError, ParameterAssertionError
from mw_eventbus.observability.correlation import RequestContext
from mw_eventbus.observability.logging import get_logger

logger = get_logger(__name__)


class _Target(enum.Enum):
    SERVICE = "service"
    STREAM = "stream"


@dataclasses.dataclass
class _Submission:
    target: _Target
    name: str
    event_type: EventType
    events: list[Any]


def assert_event_list(events: object) -> None:
    """Reject anything but a flat list of event dicts or encoded events."""
    if not isinstance(events, list) or not all(isinstance(e, (Mapping, str)) for e in events):
        raise ParameterAssertionError("events", "must be a flat list of events")


class EventBusSendUpdate(MergeableUpdate):
    """Deferred delivery of events to an event service.

    Stream names are resolved to services when the update runs, not when it
    is created. Empty event lists are dropped straight away.
    """

    def __init__(
        self,
        factory: EventBusFactory,
        service_name: str,
        events: list[Any],
        *,
        event_type: EventType = EventType.EVENT,
        context: RequestContext | None = None,
    ) -> None:
        self._factory = factory
        self._context = context
        self._submissions: list[_Submission] = []
        self._add(_Target.SERVICE, service_name, events, event_type)

    @classmethod
    def new_for_stream(
        cls,
        factory: EventBusFactory,
        stream_name: str,
        events: list[Any],
        *,
        event_type: EventType = EventType.EVENT,
        context: RequestContext | None = None,
    ) -> "EventBusSendUpdate":
        update = cls(factory, stream_name, [], event_type=event_type, context=context)
        update._add(_Target.STREAM, stream_name, events, event_type)
        return update

    @property
    def event_count(self) -> int:
        return sum(len(sub.events) for sub in self._submissions)

    def _add(self, target: _Target, name: str, events: list[Any], event_type: EventType) -> None:
        assert_event_list(events)
        if events:
            self._submissions.append(_Submission(target, name, event_type, list(events)))

    def merge(self, update: MergeableUpdate) -> None:
        if not isinstance(update, EventBusSendUpdate):
            raise ParameterAssertionError("update", f"must be an EventBusSendUpdate, got {type(update).__name__}")
        self._submissions.extend(update._submissions)
        if self._context is None:
            self._context = update._context

    def do_update(self) -> None:
        submissions, self._submissions = self._submissions, []

        config_error: ConfigurationError | None = None
        grouped: dict[tuple[str, EventType], list[Any]] = {}
        for sub in submissions:
            if sub.target is _Target.STREAM:
                try:
                    service_name = self._factory.get_event_service_name_for_stream(sub.name)
                except ConfigurationError as exc:
                    config_error = config_error or exc
                    continue
            else:
                service_name = sub.name
            if service_name == EVENT_SERVICE_DISABLED_NAME:
                logger.debug("eventbus.deferred.disabled_stream", stream=sub.name, events=len(sub.events))
                continue
            grouped.setdefault((service_name, sub.event_type), []).extend(sub.events)

        for (service_name, event_type), events in grouped.items():
            try:
                bus = self._factory.get_instance(service_name)
            except ConfigurationError as exc:
                config_error = config_error or exc
                continue
            result = bus.send(events, event_type, context=self._context)
            if result is not True:
                logger.warning(
                    "eventbus.deferred.send_failed",
                    service=service_name,
                    events=len(events),
                    errors=result,
                )
        if config_error is not None:
            raise config_error


__all__ = ["EventBusSendUpdate", "assert_event_list"]
