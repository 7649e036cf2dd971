"""Unit tests – wire encoding and batch partitioning."""
from __future__ import annotations

import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from mw_eventbus.delivery import encode_event, encode_events, partition
from mw_eventbus.delivery.partition import byte_size


class TestEncoding:
    def test_compact_and_unescaped(self) -> None:
        assert encode_event({"title": "Ünï", "n": [1, 2]}) == '{"title":"Ünï","n":[1,2]}'

    def test_nan_rejected(self) -> None:
        with pytest.raises(ValueError):
            encode_event({"x": float("nan")})

    def test_unserializable_rejected(self) -> None:
        with pytest.raises(TypeError):
            encode_event({"x": object()})

    def test_array_body(self) -> None:
        assert encode_events(['{"a":1}', '{"b":2}']) == '[{"a":1},{"b":2}]'
        assert encode_events([]) == "[]"

    def test_byte_size_counts_utf8(self) -> None:
        assert byte_size("é") == 2


class TestPartition:
    def test_fits_in_one(self) -> None:
        assert partition(["aa", "bb"], 100) == [["aa", "bb"]]

    def test_exact_boundary(self) -> None:
        # "[" + 4 + "," + 4 + "]" == 11 bytes
        assert partition(["aaaa", "bbbb"], 11) == [["aaaa", "bbbb"]]
        assert partition(["aaaa", "bbbb"], 10) == [["aaaa"], ["bbbb"]]

    def test_oversized_item_isolated(self) -> None:
        items = ["a", "x" * 50, "b"]
        assert partition(items, 10) == [["a"], ["x" * 50], ["b"]]

    def test_empty(self) -> None:
        assert partition([], 10) == []

    def test_custom_size(self) -> None:
        assert partition([1, 1, 1], 5, size_of=lambda _: 1) == [[1, 1], [1]]


_item = st.text(min_size=0, max_size=40).map(lambda s: json.dumps(s, ensure_ascii=False))


@given(st.lists(_item, max_size=30), st.integers(min_value=1, max_value=200))
def test_partition_preserves_order(items: list[str], budget: int) -> None:
    batches = partition(items, budget)
    assert [item for batch in batches for item in batch] == items
    assert all(batches)


@given(st.lists(_item, max_size=30), st.integers(min_value=1, max_value=200))
def test_batches_fit_unless_single_oversized_item(items: list[str], budget: int) -> None:
    for batch in partition(items, budget):
        body = encode_events(batch)
        if byte_size(body) > budget:
            assert len(batch) == 1
