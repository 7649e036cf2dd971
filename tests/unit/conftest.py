"""Shared fixtures – a two-service event bus wired to a scripted transport."""
from __future__ import annotations

import functools
import itertools
from collections.abc import Iterator

import pytest

from mw_eventbus.config.settings import EventBusSettings
from mw_eventbus.delivery import EventBusFactory
from mw_eventbus.events import EventSerializer, article_url
from mw_eventbus.jobs import JobEventFactory
from mw_eventbus.observability.correlation import CorrelationContext
from mw_eventbus.testing.fakes import FakeMultiHttpClient


def _producer(**settings: object) -> dict[str, object]:
    return {"producers": {"mediawiki_eventbus": settings}}


@pytest.fixture
def http() -> FakeMultiHttpClient:
    return FakeMultiHttpClient()


@pytest.fixture
def settings() -> EventBusSettings:
    return EventBusSettings(
        event_service_default="intake-main",
        event_services={
            "intake-main": {"url": "http://intake.main"},
            "intake-analytics": {
                "url": "http://intake.analytics",
                "timeout": 2,
                "x_client_ip_forwarding_enabled": True,
            },
            "intake-broken": {"timeout": 1},
        },
        event_streams={
            "mediawiki.page-delete": _producer(event_service_name="intake-main"),
            "mediawiki.page-create": _producer(event_service_name="intake-main"),
            "mediawiki.page-view": _producer(event_service_name="intake-analytics"),
            "mediawiki.disabled": _producer(enabled=False, event_service_name="intake-main"),
            "mediawiki.legacy": {"destination_event_service": "intake-analytics"},
            "mediawiki.broken": _producer(event_service_name="intake-broken"),
            "/^mediawiki\\.job\\..+$/": _producer(event_service_name="intake-main"),
        },
    )


@pytest.fixture
def factory(settings: EventBusSettings, http: FakeMultiHttpClient) -> EventBusFactory:
    return EventBusFactory.from_settings(settings, http)


@pytest.fixture(autouse=True)
def _clear_correlation() -> Iterator[None]:
    yield
    CorrelationContext.clear()


@pytest.fixture
def job_events() -> JobEventFactory:
    ids = (f"id-{n}" for n in itertools.count(1))
    return JobEventFactory(
        EventSerializer({"enwiki": "en.wikipedia.org"}, id_factory=lambda: next(ids)),
        "wiki-secret-key",
        "enwiki",
        functools.partial(article_url, "https://en.wikipedia.org"),
    )
