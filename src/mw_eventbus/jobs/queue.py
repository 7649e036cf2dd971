"""Jobs – a job queue whose only storage is the event stream."""
from __future__ import annotations

from typing import Any, Iterable

from mw_eventbus.deferred import DeferredEventQueue, Stage
from mw_eventbus.delivery import EventType
from mw_eventbus.events import event_stream
from mw_eventbus.jobs.events import JobEventFactory
from mw_eventbus.jobs.job import JobSpecification
from mw_eventbus.observability.logging import get_logger

logger = get_logger(__name__)


class EventBusJobQueue:
    """Push jobs by emitting job events after the request's work is done.

    Only pushing is supported; popping, acking and sizing belong to the
    consumer on the other side of the stream.
    """

    def __init__(self, events: JobEventFactory, queue: DeferredEventQueue) -> None:
        self._events = events
        self._queue = queue

    def push(self, jobs: Iterable[JobSpecification]) -> int:
        """Queue job events for *jobs*; return how many distinct events were queued.

        Jobs with the same ``sha1`` collapse into the last one pushed.
        """
        unique: dict[str, dict[str, Any]] = {}
        for job in jobs:
            event = self._events.create_job_event(job, context=self._queue.context)
            if event is None:
                continue
            key = event.get("sha1") or event["meta"]["id"]
            unique[key] = event

        if not unique:
            return 0

        by_stream: dict[str, list[dict[str, Any]]] = {}
        for event in unique.values():
            by_stream.setdefault(event_stream(event), []).append(event)
        for stream, events in by_stream.items():
            self._queue.enqueue(stream, events, EventType.JOB)

        logger.debug("jobs.pushed", events=len(unique), streams=sorted(by_stream))
        return len(unique)

    def push_lazy(self, jobs: Iterable[JobSpecification]) -> None:
        """Push *jobs* only once every other deferred submission has run.

        Used for jobs queued while running another job, so that a requeue
        never overtakes the events it depends on.
        """
        pending = list(jobs)
        self._queue.updates.add_callable_update(lambda: self.push(pending), Stage.POSTSEND)


__all__ = ["EventBusJobQueue"]
