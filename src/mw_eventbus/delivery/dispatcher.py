"""Delivery – EventBus, the per-service event dispatcher."""
from __future__ import annotations

import json
from collections import Counter
from typing import Any, Literal, Sequence

from mw_eventbus.adapters.http import HttpRequest, HttpResponse, MultiHttpClient
from mw_eventbus.delivery.partition import byte_size, encode_event, encode_events, partition
from mw_eventbus.delivery.service import DEFAULT_REQUEST_TIMEOUT, ServiceConfig
from mw_eventbus.delivery.types import EventType
from mw_eventbus.events import event_stream
from mw_eventbus.kernel.errors import DeliveryError, SerializationError
from mw_eventbus.observability.correlation import RequestContext
from mw_eventbus.observability.logging import get_logger

logger = get_logger(__name__)

#: ``True`` when everything was delivered, else one message per failed request.
SendResult = Literal[True] | list[str]

EMPTY_BATCH_MESSAGE = "Must call send with at least 1 event"
CLIENT_IP_HEADER = "x-client-ip"

#: Above this many body bytes only the ``meta`` blocks of a failed batch are logged.
MAX_LOGGED_BODY_BYTES = 8192

_ACCEPTED = 201
_PARTIALLY_ACCEPTED = 207


class EventBus:
    """Serializes, partitions and POSTs events to one intake service.

    Holds no per-call state, so one instance may be shared by every caller
    in the process.

    Example::

        bus = EventBus(http, ServiceConfig(name="intake-main", url="http://intake.main"))
        result = bus.send([event])
        if result is not True:
            ...  # list of "Unable to deliver all events: ..." messages
    """

    def __init__(
        self,
        http: MultiHttpClient,
        service: ServiceConfig,
        allowed_event_types: EventType = EventType.ALL,
    ) -> None:
        self._http = http
        self._service = service
        self._allowed_event_types = allowed_event_types

    @property
    def service(self) -> ServiceConfig:
        return self._service

    @property
    def url(self) -> str:
        return self._service.url

    @property
    def timeout(self) -> float:
        return self._service.timeout or DEFAULT_REQUEST_TIMEOUT

    @property
    def forward_client_ip(self) -> bool:
        return self._service.forward_client_ip

    @property
    def allowed_event_types(self) -> EventType:
        return self._allowed_event_types

    def should_send(self, event_type: EventType) -> bool:
        return bool(self._allowed_event_types & event_type)

    def send(
        self,
        events: Sequence[Any] | str,
        event_type: EventType = EventType.EVENT,
        *,
        context: RequestContext | None = None,
    ) -> SendResult:
        """Deliver *events* and report the outcome.

        *events* is a list of event dicts, a list of already JSON-encoded
        events, or a JSON string (an array, or a single event object).

        Never raises for serialization or delivery problems; they are
        logged and returned as messages. A category that is not enabled is
        dropped silently and reported as success.
        """
        if not self.should_send(event_type):
            return True
        if not events or (isinstance(events, str) and not events.strip()):
            logger.error(
                "eventbus.send.empty_batch",
                message=EMPTY_BATCH_MESSAGE,
                service=self._service.name,
                stack_info=True,
            )
            return [EMPTY_BATCH_MESSAGE]

        try:
            bodies = self._bodies(events)
        except SerializationError as exc:
            logger.error(
                "eventbus.send.serialization_failed",
                message=exc.message,
                service=self._service.name,
                events=events,
                error=repr(exc.cause) if exc.cause else None,
            )
            return [exc.message]

        headers = {"content-type": "application/json"}
        if self.forward_client_ip and context is not None and context.client_ip:
            headers[CLIENT_IP_HEADER] = context.client_ip

        requests = [HttpRequest(url=self.url, body=body, headers=dict(headers)) for body in bodies]
        responses = self._http.run_multi(requests, timeout=self.timeout)

        failures: list[str] = []
        for request, response in zip(requests, responses, strict=True):
            if response.code == _ACCEPTED:
                continue
            error = DeliveryError(
                self._service.name,
                status_code=response.code,
                reason=response.reason,
                error=response.error,
            )
            self._log_failure(error, request.body, response)
            failures.append(error.message)

        if failures:
            return failures
        logger.debug(
            "eventbus.send.delivered",
            service=self._service.name,
            requests=len(requests),
        )
        return True

    def _bodies(self, events: Sequence[Any] | str) -> list[str]:
        limit = self._service.max_batch_byte_size

        if isinstance(events, str):
            body = events.strip()
            if body.startswith("{"):
                body = f"[{body}]"
            try:
                if byte_size(body) <= limit:
                    return [body]
                decoded = json.loads(body)
            except ValueError as exc:
                raise SerializationError(f"Unable to serialize events: invalid JSON body ({exc})", cause=exc) from exc
            events = decoded

        try:
            encoded = [_checked(item) if isinstance(item, str) else encode_event(item) for item in events]
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Unable to serialize events: {exc}", cause=exc) from exc

        body = encode_events(encoded)
        if byte_size(body) <= limit:
            return [body]

        batches = partition(encoded, limit)
        logger.debug(
            "eventbus.send.partitioned",
            service=self._service.name,
            events=len(encoded),
            batches=len(batches),
            max_batch_byte_size=limit,
        )
        return [encode_events(batch) for batch in batches]

    def _log_failure(self, error: DeliveryError, body: str, response: HttpResponse) -> None:
        try:
            events: list[Any] = json.loads(body)
        except json.JSONDecodeError:
            events = []
        if not isinstance(events, list):
            events = []
        logged: Any = events
        if byte_size(body) > MAX_LOGGED_BODY_BYTES:
            logged = [event.get("meta") for event in events if isinstance(event, dict)]

        message = error.message
        if error.partial:
            message = f"Partially delivered events, some were rejected: {error.status_code}: {error.reason}"
        logger.error(
            "eventbus.send.delivery_failed",
            message=message,
            service=self._service.name,
            url=self.url,
            status_code=error.status_code,
            reason=error.reason,
            transport_error=error.error or None,
            streams=dict(Counter(event_stream(event) for event in events)),
            events=logged,
            service_response=response.body[:MAX_LOGGED_BODY_BYTES] if response.body else None,
        )


def _checked(encoded: str) -> str:
    encoded.encode("utf-8")
    return encoded


__all__ = ["CLIENT_IP_HEADER", "EMPTY_BATCH_MESSAGE", "EventBus", "SendResult"]
