"""Delivery – EventType categories and their configuration syntax."""
from __future__ import annotations

import enum

from mw_eventbus.observability.logging import get_logger

logger = get_logger(__name__)


class EventType(enum.IntFlag):
    """Categories of traffic a dispatcher may be allowed to send."""

    NONE = 0
    EVENT = 1
    JOB = 2
    PURGE = 4
    ALL = EVENT | JOB | PURGE


def parse_event_types(value: "str | int | EventType | None") -> EventType:
    """Parse the ``enable_event_bus`` setting.

    Accepts an int bitmask or ``TYPE_*`` names joined with ``|``, e.g.
    ``"TYPE_EVENT|TYPE_PURGE"``. Empty values allow everything. An unknown
    name is logged and the whole setting falls back to ``ALL``.
    """
    if isinstance(value, int):
        return EventType(value) & EventType.ALL
    if not value:
        return EventType.ALL

    allowed = EventType.NONE
    for token in (part.strip() for part in value.split("|")):
        name = token.removeprefix("TYPE_")
        if not token.startswith("TYPE_") or name not in EventType.__members__:
            logger.warning("eventbus.unknown_event_type", setting=value, token=token)
            return EventType.ALL
        allowed |= EventType[name]
    return allowed


__all__ = ["EventType", "parse_event_types"]
