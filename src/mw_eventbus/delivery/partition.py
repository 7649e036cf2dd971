"""Delivery – wire encoding and size-bounded batch partitioning.

Sizes are measured on the exact text that goes on the wire: a JSON array of
compact, non-ASCII-escaped event objects.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Sequence, TypeVar

T = TypeVar("T")

_ARRAY_OVERHEAD = 2  # "[" and "]"
_SEPARATOR = 1  # ","


def encode_event(event: Any) -> str:
    """JSON-encode one event. Raises ``TypeError``/``ValueError`` on failure.

    Text that cannot go out as UTF-8 (lone surrogates) is rejected with
    ``UnicodeEncodeError``, a ``ValueError``.
    """
    text = json.dumps(event, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    text.encode("utf-8")
    return text


def encode_events(encoded: Sequence[str]) -> str:
    """Join already-encoded events into a JSON array body."""
    return "[" + ",".join(encoded) + "]"


def byte_size(text: str) -> int:
    return len(text.encode("utf-8"))


def partition(
    items: Sequence[T],
    max_batch_byte_size: int,
    *,
    size_of: Callable[[T], int] = byte_size,  # type: ignore[assignment]
) -> list[list[T]]:
    """Split *items* into contiguous batches whose array body fits the budget.

    Greedy: items are appended to the current batch while the running size
    (brackets, separators and item sizes) stays within *max_batch_byte_size*;
    the item that would overflow opens the next batch. An item too large on
    its own forms a batch by itself. Concatenating the result gives back
    *items* unchanged.
    """
    batches: list[list[T]] = []
    current: list[T] = []
    running = _ARRAY_OVERHEAD

    for item in items:
        size = size_of(item)
        added = size + (_SEPARATOR if current else 0)
        if current and running + added > max_batch_byte_size:
            batches.append(current)
            current = []
            running = _ARRAY_OVERHEAD
            added = size
        current.append(item)
        running += added

    if current:
        batches.append(current)
    return batches


__all__ = ["byte_size", "encode_event", "encode_events", "partition"]
