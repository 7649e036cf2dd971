"""Unit tests – RequestContext, CorrelationContext and logging setup."""
from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from mw_eventbus.observability.correlation import CorrelationContext, RequestContext
from mw_eventbus.observability.logging import JsonLoggerFactory, RequestContextProcessor, get_logger


# ---------------------------------------------------------------------------
# RequestContext
# ---------------------------------------------------------------------------


class TestRequestContext:
    def test_new_generates_id(self) -> None:
        a, b = RequestContext.new(), RequestContext.new("10.0.0.1")
        assert a.request_id != b.request_id
        assert b.client_ip == "10.0.0.1"

    def test_from_headers_propagates_request_id(self) -> None:
        ctx = RequestContext.from_headers({"X-Request-Id": "req-1", "X-Client-IP": "192.0.2.4"})
        assert ctx.request_id == "req-1"
        assert ctx.client_ip == "192.0.2.4"

    def test_from_headers_uses_first_forwarded_hop(self) -> None:
        ctx = RequestContext.from_headers({"x-forwarded-for": "198.51.100.7, 10.0.0.1"})
        assert ctx.client_ip == "198.51.100.7"
        assert ctx.request_id

    def test_frozen(self) -> None:
        ctx = RequestContext.new()
        with pytest.raises(AttributeError):
            ctx.request_id = "other"  # type: ignore[misc]

    def test_carries_only_request_id_and_client_ip(self) -> None:
        assert [f.name for f in dataclasses.fields(RequestContext)] == ["request_id", "client_ip"]


# ---------------------------------------------------------------------------
# CorrelationContext
# ---------------------------------------------------------------------------


class TestCorrelationContext:
    def test_set_get_reset(self) -> None:
        assert CorrelationContext.get() is None
        ctx = RequestContext(request_id="r1")
        token = CorrelationContext.set(ctx)
        assert CorrelationContext.get() is ctx
        CorrelationContext.reset(token)
        assert CorrelationContext.get() is None


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


class TestRequestContextProcessor:
    def test_adds_bound_request_id(self) -> None:
        CorrelationContext.set(RequestContext(request_id="r1"))
        out = RequestContextProcessor()(None, "info", {"event": "x"})
        assert out["request_id"] == "r1"

    def test_explicit_value_wins(self) -> None:
        CorrelationContext.set(RequestContext(request_id="r1"))
        out = RequestContextProcessor()(None, "info", {"event": "x", "request_id": "mine"})
        assert out["request_id"] == "mine"

    def test_no_context(self) -> None:
        assert RequestContextProcessor()(None, "info", {"event": "x"}) == {"event": "x"}


class TestJsonLoggerFactory:
    @pytest.fixture(autouse=True)
    def _restore(self) -> Iterator[None]:
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        structlog.reset_defaults()
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_renders_json_with_request_id(self, capsys: pytest.CaptureFixture[str]) -> None:
        JsonLoggerFactory.configure(logging.DEBUG)
        CorrelationContext.set(RequestContext(request_id="r-42"))
        get_logger("mw_eventbus.test", service="intake-main").info("eventbus.test", events=3)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "eventbus.test"
        assert payload["request_id"] == "r-42"
        assert payload["service"] == "intake-main"
        assert payload["events"] == 3
        assert payload["level"] == "info"
