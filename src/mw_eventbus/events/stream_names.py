"""StreamNameMapper – logical stream name to the stream actually produced to.

Lets a wiki with special needs (a private wiki next to public ones, a
staging install) send its events to separate streams. Unmapped names are
produced to as-is. Producers call :meth:`StreamNameMapper.resolve` when
picking the stream for a new event.
"""
from __future__ import annotations

from typing import Mapping

from mw_eventbus.config.settings import EventBusSettings


class StreamNameMapper:
    def __init__(self, stream_names_map: Mapping[str, str] | None = None) -> None:
        self._map = dict(stream_names_map or {})

    @classmethod
    def from_settings(cls, settings: EventBusSettings) -> "StreamNameMapper":
        return cls(settings.stream_names_map)

    def resolve(self, name: str) -> str:
        return self._map.get(name, name)


__all__ = ["StreamNameMapper"]
