"""Unit tests – CdnPurgeEventRelayer."""
from __future__ import annotations

import json

import pytest

from mw_eventbus.adapters.http import HttpResponse
from mw_eventbus.adapters.purge import PURGE_CHANNEL, RESOURCE_CHANGE_SCHEMA, CdnPurgeEventRelayer
from mw_eventbus.config.settings import EventBusSettings
from mw_eventbus.delivery import EventBusFactory
from mw_eventbus.events import StreamNameMapper
from mw_eventbus.kernel.errors import ConfigurationError, ParameterAssertionError
from mw_eventbus.observability.correlation import RequestContext
from mw_eventbus.testing.fakes import FakeMultiHttpClient

PURGES = [
    {"url": "https://en.wikipedia.org/wiki/Foo", "timestamp": "20240501120000"},
    {"url": "https://en.wikipedia.org/wiki/Bar", "timestamp": 1714564801},
]


class TestCdnPurgeEventRelayer:
    def test_requires_stream(self, factory: EventBusFactory) -> None:
        with pytest.raises(ConfigurationError):
            CdnPurgeEventRelayer(factory, None)

    def test_rejects_other_channels(self, factory: EventBusFactory) -> None:
        relayer = CdnPurgeEventRelayer(factory, "resource-purge")
        with pytest.raises(ParameterAssertionError, match="channel"):
            relayer.notify("htcp-purges", PURGES)

    def test_sends_resource_change_events(self, factory: EventBusFactory, http: FakeMultiHttpClient) -> None:
        relayer = CdnPurgeEventRelayer(factory, "resource-purge")
        ctx = RequestContext(request_id="req-9")

        assert relayer.notify(PURGE_CHANNEL, PURGES, context=ctx) is True

        (request,) = http.requests
        assert request.url == "http://intake.main"
        events = json.loads(request.body)
        assert [e["meta"]["uri"] for e in events] == [p["url"] for p in PURGES]
        assert [e["meta"]["dt"] for e in events] == ["2024-05-01T12:00:00Z", "2024-05-01T12:00:01Z"]
        for event in events:
            assert event["$schema"] == RESOURCE_CHANGE_SCHEMA
            assert event["tags"] == ["mediawiki"]
            assert event["meta"]["stream"] == "resource-purge"
            assert event["meta"]["request_id"] == "req-9"

    def test_failure_returns_false(self, settings: EventBusSettings) -> None:
        http = FakeMultiHttpClient([HttpResponse(code=503, reason="Service Unavailable")])
        relayer = CdnPurgeEventRelayer(EventBusFactory.from_settings(settings, http), "resource-purge")
        assert relayer.notify(PURGE_CHANNEL, PURGES) is False

    def test_purges_gated_by_type(self, settings: EventBusSettings, http: FakeMultiHttpClient) -> None:
        settings.enable_event_bus = "TYPE_EVENT|TYPE_JOB"
        relayer = CdnPurgeEventRelayer(EventBusFactory.from_settings(settings, http), "resource-purge")
        assert relayer.notify(PURGE_CHANNEL, PURGES) is True
        assert http.calls == []

    def test_renamed_stream(self, factory: EventBusFactory, http: FakeMultiHttpClient) -> None:
        names = StreamNameMapper.from_settings(
            EventBusSettings(stream_names_map={"resource-purge": "resource-purge.private"})
        )
        relayer = CdnPurgeEventRelayer(factory, "resource-purge", stream_names=names)
        assert relayer.stream == "resource-purge.private"

        assert relayer.notify(PURGE_CHANNEL, PURGES) is True
        (request,) = http.requests
        assert {e["meta"]["stream"] for e in json.loads(request.body)} == {"resource-purge.private"}
