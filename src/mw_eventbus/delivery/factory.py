"""Delivery – EventBusFactory, the stream-to-service resolver.

One factory is built at process start and handed to every producer. It
turns a stream name into the name of the intake service that carries it,
and a service name into a memoized :class:`EventBus`.

Per-stream settings live under the producer's key::

    "mediawiki.page-delete": {
        "producers": {
            "mediawiki_eventbus": {"event_service_name": "intake-main", "enabled": true}
        }
    }

A legacy top-level ``destination_event_service`` is honoured as well.
"""
from __future__ import annotations

from typing import Any, Mapping

from mw_eventbus.adapters.http import MultiHttpClient
from mw_eventbus.config.settings import EventBusSettings
from mw_eventbus.config.streams import StreamConfigs
from mw_eventbus.config.validation import InvalidSettingValueError
from mw_eventbus.delivery.dispatcher import EventBus
from mw_eventbus.delivery.service import DEFAULT_REQUEST_TIMEOUT, ServiceConfig
from mw_eventbus.delivery.types import EventType, parse_event_types
from mw_eventbus.kernel.errors import ConfigurationError
from mw_eventbus.observability.logging import get_logger

logger = get_logger(__name__)

#: Service name meaning "do not deliver"; its EventBus sends nothing.
EVENT_SERVICE_DISABLED_NAME = "_disabled_eventbus_"

EVENT_STREAM_CONFIG_PRODUCER_NAME = "mediawiki_eventbus"
EVENT_STREAM_CONFIG_SERVICE_SETTING = "event_service_name"
EVENT_STREAM_CONFIG_ENABLED_SETTING = "enabled"
EVENT_STREAM_CONFIG_LEGACY_SERVICE_SETTING = "destination_event_service"


class EventBusFactory:
    """Resolve streams to services and hand out one EventBus per service."""

    def __init__(
        self,
        settings: EventBusSettings,
        http: MultiHttpClient,
        *,
        stream_configs: StreamConfigs | None = None,
    ) -> None:
        self._settings = settings
        self._http = http
        self._stream_configs = stream_configs
        self._allowed_event_types = parse_event_types(settings.enable_event_bus)
        self._instances: dict[str, EventBus] = {}

    @classmethod
    def from_settings(cls, settings: EventBusSettings, http: MultiHttpClient) -> "EventBusFactory":
        """Build a factory that reads stream configs from *settings*."""
        return cls(settings, http, stream_configs=StreamConfigs.from_settings(settings))

    @property
    def allowed_event_types(self) -> EventType:
        return self._allowed_event_types

    def get_event_service_name_for_stream(self, stream: str) -> str:
        """Return the service name events of *stream* go to.

        :data:`EVENT_SERVICE_DISABLED_NAME` when the stream is disabled for
        this producer.

        Raises
        ------
        ConfigurationError
            When the default service is needed but none is configured.
        """
        config = self._stream_configs.get(stream) if self._stream_configs is not None else None
        if config is None:
            return self._default_service_name(stream)

        producer = self._producer_settings(config)
        if producer.get(EVENT_STREAM_CONFIG_ENABLED_SETTING, True) is False:
            logger.debug("eventbus.stream_disabled", stream=stream)
            return EVENT_SERVICE_DISABLED_NAME

        service_name = producer.get(EVENT_STREAM_CONFIG_SERVICE_SETTING) or config.get(
            EVENT_STREAM_CONFIG_LEGACY_SERVICE_SETTING
        )
        if service_name:
            return str(service_name)
        return self._default_service_name(stream)

    resolve_service_name = get_event_service_name_for_stream

    def get_instance(self, service_name: str) -> EventBus:
        """Return the EventBus for *service_name*, building it on first use.

        Raises
        ------
        ConfigurationError
            When the service is unknown or has no ``url``.
        """
        instance = self._instances.get(service_name)
        if instance is None:
            instance = self._build(service_name)
            self._instances[service_name] = instance
        return instance

    def get_instance_for_stream(self, stream: str) -> EventBus:
        return self.get_instance(self.get_event_service_name_for_stream(stream))

    def _build(self, service_name: str) -> EventBus:
        if service_name == EVENT_SERVICE_DISABLED_NAME:
            return EventBus(
                self._http,
                ServiceConfig(name=service_name, url=service_name),
                EventType.NONE,
            )

        service = self._settings.event_services.get(service_name)
        if not service or not service.get("url"):
            error = (
                f"Could not get configuration of EventBus instance for '{service_name}'. "
                "The service must exist in event_services with a url."
            )
            logger.error("eventbus.misconfigured_service", message=error, service=service_name)
            raise ConfigurationError(error, detail={"service": service_name})

        return EventBus(
            self._http,
            ServiceConfig(
                name=service_name,
                url=str(service["url"]),
                timeout=float(service.get("timeout") or DEFAULT_REQUEST_TIMEOUT),
                max_batch_byte_size=self._max_batch_byte_size(service_name, service),
                forward_client_ip=bool(service.get("x_client_ip_forwarding_enabled", False)),
            ),
            self._allowed_event_types,
        )

    def _max_batch_byte_size(self, service_name: str, service: Mapping[str, Any]) -> int:
        """Per-service ``max_batch_byte_size``, else the global limit."""
        value = service.get("max_batch_byte_size")
        if value is None:
            return self._settings.max_batch_byte_size
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidSettingValueError(
                f"event_services.{service_name}.max_batch_byte_size", value, "must be a positive integer"
            )
        return value

    def _default_service_name(self, stream: str) -> str:
        default = self._settings.event_service_default
        if not default:
            raise ConfigurationError(
                f"No event service configured for stream '{stream}' and no default provided",
                detail={"stream": stream},
            )
        return default

    @staticmethod
    def _producer_settings(config: Mapping[str, Any]) -> Mapping[str, Any]:
        producers = config.get("producers")
        if not isinstance(producers, Mapping):
            return {}
        producer = producers.get(EVENT_STREAM_CONFIG_PRODUCER_NAME)
        return producer if isinstance(producer, Mapping) else {}


__all__ = [
    "EVENT_SERVICE_DISABLED_NAME",
    "EVENT_STREAM_CONFIG_ENABLED_SETTING",
    "EVENT_STREAM_CONFIG_LEGACY_SERVICE_SETTING",
    "EVENT_STREAM_CONFIG_PRODUCER_NAME",
    "EVENT_STREAM_CONFIG_SERVICE_SETTING",
    "EventBusFactory",
]
