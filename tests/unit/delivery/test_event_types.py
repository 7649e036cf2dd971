"""Unit tests – EventType and the enable_event_bus setting."""
from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from mw_eventbus.delivery import EventType, parse_event_types


class TestEventType:
    def test_all_covers_every_category(self) -> None:
        assert EventType.ALL == EventType.EVENT | EventType.JOB | EventType.PURGE == 7

    def test_none_allows_nothing(self) -> None:
        assert not (EventType.NONE & EventType.EVENT)


class TestParseEventTypes:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("TYPE_ALL", EventType.ALL),
            ("TYPE_NONE", EventType.NONE),
            ("TYPE_EVENT", EventType.EVENT),
            ("TYPE_EVENT|TYPE_PURGE", EventType.EVENT | EventType.PURGE),
            (" TYPE_JOB | TYPE_EVENT ", EventType.JOB | EventType.EVENT),
            (3, EventType.EVENT | EventType.JOB),
            (255, EventType.ALL),
            ("", EventType.ALL),
            (None, EventType.ALL),
        ],
    )
    def test_values(self, value: object, expected: EventType) -> None:
        assert parse_event_types(value) == expected  # type: ignore[arg-type]

    def test_unknown_token_falls_back_to_all(self) -> None:
        with capture_logs() as logs:
            assert parse_event_types("TYPE_EVENT|TYPE_BOGUS") == EventType.ALL
        assert logs[0]["event"] == "eventbus.unknown_event_type"
        assert logs[0]["token"] == "TYPE_BOGUS"
