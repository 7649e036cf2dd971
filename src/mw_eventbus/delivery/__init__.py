"""Delivery – stream resolution, batching and transmission of events."""
from mw_eventbus.delivery.dispatcher import CLIENT_IP_HEADER, EMPTY_BATCH_MESSAGE, EventBus, SendResult
from mw_eventbus.delivery.factory import (
    EVENT_SERVICE_DISABLED_NAME,
    EVENT_STREAM_CONFIG_ENABLED_SETTING,
    EVENT_STREAM_CONFIG_LEGACY_SERVICE_SETTING,
    EVENT_STREAM_CONFIG_PRODUCER_NAME,
    EVENT_STREAM_CONFIG_SERVICE_SETTING,
    EventBusFactory,
)
from mw_eventbus.delivery.partition import encode_event, encode_events, partition
from mw_eventbus.delivery.service import DEFAULT_REQUEST_TIMEOUT, ServiceConfig
from mw_eventbus.delivery.types import EventType, parse_event_types

__all__ = [
    "CLIENT_IP_HEADER",
    "DEFAULT_REQUEST_TIMEOUT",
    "EMPTY_BATCH_MESSAGE",
    "EVENT_SERVICE_DISABLED_NAME",
    "EVENT_STREAM_CONFIG_ENABLED_SETTING",
    "EVENT_STREAM_CONFIG_LEGACY_SERVICE_SETTING",
    "EVENT_STREAM_CONFIG_PRODUCER_NAME",
    "EVENT_STREAM_CONFIG_SERVICE_SETTING",
    "EventBus",
    "EventBusFactory",
    "EventType",
    "SendResult",
    "ServiceConfig",
    "encode_event",
    "encode_events",
    "parse_event_types",
    "partition",
]
