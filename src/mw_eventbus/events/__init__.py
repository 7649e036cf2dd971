"""Events – construction and sanitising of Event Records."""
from mw_eventbus.events.binary import (
    BINARY_DATA_PREFIX,
    decode_binary_value,
    replace_binary_values,
    replace_binary_values_recursive,
)
from mw_eventbus.events.serializer import (
    UNKNOWN_STREAM,
    EventSerializer,
    article_url,
    event_stream,
    timestamp_to_dt,
)
from mw_eventbus.events.signature import sign_event, verify_event_signature
from mw_eventbus.events.stream_names import StreamNameMapper

__all__ = [
    "BINARY_DATA_PREFIX",
    "UNKNOWN_STREAM",
    "EventSerializer",
    "StreamNameMapper",
    "article_url",
    "decode_binary_value",
    "event_stream",
    "replace_binary_values",
    "replace_binary_values_recursive",
    "sign_event",
    "timestamp_to_dt",
    "verify_event_signature",
]
