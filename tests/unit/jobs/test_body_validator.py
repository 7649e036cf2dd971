"""Unit tests – EventBodyValidator."""
from __future__ import annotations

import json
from typing import Any

import pytest

from mw_eventbus.delivery import encode_event
from mw_eventbus.events import BINARY_DATA_PREFIX, sign_event
from mw_eventbus.jobs import EventBodyValidator, JobEventFactory, JobSpecification
from mw_eventbus.kernel.errors import JobValidationError

SECRET = "wiki-secret-key"


def _signed(event: dict[str, Any], secret: str = SECRET) -> str:
    event = {**event, "mediawiki_signature": sign_event(encode_event(event), secret)}
    return json.dumps(event)


class TestValidateBody:
    def test_round_trip(self, job_events: JobEventFactory) -> None:
        event = job_events.create_job_event(
            JobSpecification("refreshLinks", {"blob": b"\xff\x00", "n": 1.5, "t": "Ünï"}, title="Foo")
        )
        assert event is not None

        decoded = EventBodyValidator(SECRET).validate_body(encode_event(event).encode("utf-8"))

        assert "mediawiki_signature" not in decoded
        assert decoded["type"] == "refreshLinks"
        assert decoded["params"] == {"blob": b"\xff\x00", "n": 1.5, "t": "Ünï"}

    def test_undecodable_body(self) -> None:
        with pytest.raises(JobValidationError) as info:
            EventBodyValidator(SECRET).validate_body("{not json")
        assert info.value.status == 500
        assert info.value.message == "Could not decode the event"

    @pytest.mark.parametrize(
        ("event", "missing"),
        [
            ({"type": "t", "params": {}}, ["database"]),
            ({"database": "enwiki"}, ["type", "params"]),
            ([], ["database", "type", "params"]),
        ],
    )
    def test_missing_fields(self, event: Any, missing: list[str]) -> None:
        with pytest.raises(JobValidationError) as info:
            EventBodyValidator(SECRET).validate_body(json.dumps(event))
        assert info.value.status == 400
        assert info.value.detail == {"missing_params": missing}

    def test_missing_signature(self) -> None:
        body = json.dumps({"database": "enwiki", "type": "t", "params": {}})
        with pytest.raises(JobValidationError, match="Missing mediawiki signature") as info:
            EventBodyValidator(SECRET).validate_body(body)
        assert info.value.status == 403

    def test_wrong_secret(self) -> None:
        body = _signed({"database": "enwiki", "type": "t", "params": {}}, secret="not-the-secret")
        with pytest.raises(JobValidationError, match="Invalid mediawiki signature") as info:
            EventBodyValidator(SECRET).validate_body(body)
        assert info.value.status == 403

    def test_tampered_event(self) -> None:
        event = {"database": "enwiki", "type": "t", "params": {"page": 1}}
        tampered = json.loads(_signed(event))
        tampered["params"]["page"] = 2
        with pytest.raises(JobValidationError) as info:
            EventBodyValidator(SECRET).validate_body(json.dumps(tampered))
        assert info.value.status == 403

    def test_bad_base64_parameter(self) -> None:
        body = _signed({"database": "enwiki", "type": "t", "params": {"blob": BINARY_DATA_PREFIX + "%%%"}})
        with pytest.raises(JobValidationError) as info:
            EventBodyValidator(SECRET).validate_body(body)
        assert info.value.status == 500
        assert "blob" in info.value.detail["error"]
