"""Config – StreamConfigs, the per-stream configuration lookup.

Stream entries are keyed by stream name. A key written as ``/pattern/`` is a
regular expression matched against the whole stream name. Default settings
are merged underneath every declared stream; undeclared streams have no
config at all.
"""
from __future__ import annotations

import re
from typing import Any, Mapping

from mw_eventbus.config.settings import EventBusSettings


def _is_regex_key(key: str) -> bool:
    return len(key) > 2 and key.startswith("/") and key.endswith("/")


class StreamConfigs:
    """Read-only view over declared stream configurations."""

    def __init__(
        self,
        streams: Mapping[str, Mapping[str, Any]],
        defaults: Mapping[str, Any] | None = None,
    ) -> None:
        self._exact: dict[str, Mapping[str, Any]] = {}
        self._patterns: list[tuple[re.Pattern[str], Mapping[str, Any]]] = []
        self._defaults = dict(defaults or {})
        for key, config in streams.items():
            if _is_regex_key(key):
                self._patterns.append((re.compile(key[1:-1]), config))
            else:
                self._exact[key] = config

    @classmethod
    def from_settings(cls, settings: EventBusSettings) -> "StreamConfigs | None":
        if settings.event_streams is None:
            return None
        return cls(settings.event_streams, settings.event_streams_default_settings)

    def get(self, stream: str) -> dict[str, Any] | None:
        """Return the merged config for *stream*, or ``None`` if undeclared."""
        config = self._exact.get(stream)
        if config is None:
            config = next(
                (cfg for pattern, cfg in self._patterns if pattern.fullmatch(stream)),
                None,
            )
        if config is None:
            return None
        return {**self._defaults, **config}

    def __contains__(self, stream: object) -> bool:
        return isinstance(stream, str) and self.get(stream) is not None


__all__ = ["StreamConfigs"]
