"""Config settings – EventBusSettings."""
from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from mw_eventbus.config.settings.base import Settings
from mw_eventbus.config.validation import InvalidSettingValueError

DEFAULT_MAX_BATCH_BYTE_SIZE = 4 * 1024 * 1024


@dataclasses.dataclass
class EventBusSettings(Settings):
    """Everything the producer reads from static configuration.

    ``event_services`` maps a service name to ``{"url": ..., "timeout": ...,
    "max_batch_byte_size": ...,
    "x_client_ip_forwarding_enabled": ...}``; only ``url`` is required.
    ``event_streams`` is ``None`` when no per-stream configuration is
    available, in which case every stream goes to ``event_service_default``.
    """

    _prefix: dataclasses.ClassVar[str] = "EVENTBUS"

    enable_event_bus: str = "TYPE_ALL"
    event_service_default: str = "eventbus"
    event_services: dict[str, dict[str, Any]] = dataclasses.field(default_factory=dict)
    max_batch_byte_size: int = DEFAULT_MAX_BATCH_BYTE_SIZE
    event_streams: dict[str, Any] | None = None
    event_streams_default_settings: dict[str, Any] = dataclasses.field(default_factory=dict)
    stream_names_map: dict[str, str] = dataclasses.field(default_factory=dict)
    secret_key: str = ""

    def _validate(self) -> None:
        if not isinstance(self.max_batch_byte_size, int) or self.max_batch_byte_size <= 0:
            raise InvalidSettingValueError(
                "max_batch_byte_size", self.max_batch_byte_size, "must be a positive integer"
            )
        if not isinstance(self.event_services, Mapping):
            raise InvalidSettingValueError("event_services", self.event_services, "must be a mapping")
        for name, service in self.event_services.items():
            if not isinstance(service, Mapping):
                raise InvalidSettingValueError(f"event_services.{name}", service, "must be a mapping")
        if self.event_streams is not None and not isinstance(self.event_streams, Mapping):
            raise InvalidSettingValueError("event_streams", self.event_streams, "must be a mapping or None")


__all__ = ["DEFAULT_MAX_BATCH_BYTE_SIZE", "EventBusSettings"]
