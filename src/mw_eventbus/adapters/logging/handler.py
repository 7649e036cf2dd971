"""Logging adapter – EventBusLogHandler."""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from mw_eventbus.deferred import DeferredEventQueue
from mw_eventbus.events import replace_binary_values_recursive


class EventBusLogHandler(logging.Handler):
    """Forward log records whose ``context`` is an event to an event service.

    The record's ``context`` mapping (``logger.info(msg, extra={"context":
    event})``) is taken as the event itself. Events are queued on the
    current request's queue, returned by *queue_provider*, and go out with
    the rest of the request's events.
    """

    def __init__(
        self,
        queue_provider: Callable[[], DeferredEventQueue],
        service_name: str,
        level: int = logging.DEBUG,
    ) -> None:
        super().__init__(level)
        self._queue_provider = queue_provider
        self._service_name = service_name

    def emit(self, record: logging.LogRecord) -> None:
        context = getattr(record, "context", None)
        if not isinstance(context, Mapping):
            return
        try:
            event: dict[str, Any] = dict(context)
            # Debug-log helpers add a 'private' flag that is not part of the event.
            event.pop("private", None)
            event = replace_binary_values_recursive(event)
            self._queue_provider().enqueue_for_service(self._service_name, [event])
        except Exception:  # noqa: BLE001
            self.handleError(record)


__all__ = ["EventBusLogHandler"]
