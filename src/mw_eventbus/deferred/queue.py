"""Deferred – DeferredEventQueue, the producer-facing submission API."""
from __future__ import annotations

from typing import Any

from mw_eventbus.deferred.send_update import EventBusSendUpdate
from mw_eventbus.deferred.updates import DeferredUpdates
from mw_eventbus.delivery import EventBusFactory, EventType
from mw_eventbus.observability.correlation import RequestContext


class DeferredEventQueue:
    """Queue events during a request; deliver them once the work commits.

    Lives exactly as long as one request. Nothing is persisted: whatever is
    queued is attempted once at :meth:`flush` and then dropped.

    Example::

        queue = DeferredEventQueue(factory, context=RequestContext.new())
        queue.enqueue("mediawiki.page-delete", [event])
        ...  # main transaction commits
        queue.flush()
    """

    def __init__(
        self,
        factory: EventBusFactory,
        updates: DeferredUpdates | None = None,
        *,
        context: RequestContext | None = None,
    ) -> None:
        self._factory = factory
        self._updates = updates if updates is not None else DeferredUpdates()
        self._context = context

    @property
    def updates(self) -> DeferredUpdates:
        return self._updates

    @property
    def context(self) -> RequestContext | None:
        return self._context

    def enqueue(self, stream: str, events: list[Any], event_type: EventType = EventType.EVENT) -> None:
        """Queue *events* for the service backing *stream*.

        Raises ``ParameterAssertionError`` right away if *events* is not a
        flat list. An empty list is ignored.
        """
        update = EventBusSendUpdate.new_for_stream(
            self._factory, stream, events, event_type=event_type, context=self._context
        )
        if update.event_count:
            self._updates.add_update(update)

    def enqueue_for_service(
        self,
        service_name: str,
        events: list[Any],
        event_type: EventType = EventType.EVENT,
    ) -> None:
        """Queue *events* for an explicitly named service."""
        update = EventBusSendUpdate(
            self._factory, service_name, events, event_type=event_type, context=self._context
        )
        if update.event_count:
            self._updates.add_update(update)

    def flush(self) -> None:
        """Run the deferred work now. Configuration errors propagate."""
        self._updates.do_updates()


__all__ = ["DeferredEventQueue"]
