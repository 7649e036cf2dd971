"""Deferred – DeferredUpdates, the request-scoped "run deferred work" point.

The host creates one runner per request (or other unit of work), adds
updates while handling it, and calls :meth:`DeferredUpdates.do_updates` once
the main transaction has committed.
"""
from __future__ import annotations

import abc
import enum
from typing import Any, Callable

from mw_eventbus.observability.logging import get_logger

logger = get_logger(__name__)


class Stage(enum.IntEnum):
    """Ordering buckets; every DEFAULT update runs before any POSTSEND one."""

    DEFAULT = 1
    POSTSEND = 2


class DeferrableUpdate(abc.ABC):
    """Port: a unit of work to run after the main transaction."""

    @abc.abstractmethod
    def do_update(self) -> None: ...


class MergeableUpdate(DeferrableUpdate):
    """A deferrable update that can absorb later updates of its own class."""

    @abc.abstractmethod
    def merge(self, update: "MergeableUpdate") -> None: ...


class CallableUpdate(DeferrableUpdate):
    def __init__(self, callback: Callable[[], Any]) -> None:
        self._callback = callback

    def do_update(self) -> None:
        self._callback()

    def __repr__(self) -> str:
        return f"CallableUpdate({getattr(self._callback, '__qualname__', self._callback)!r})"


class DeferredUpdates:
    """Collects deferred updates and runs them in stage order.

    Mergeable updates are merged into a pending update of the same class in
    the same stage, so several producers targeting one backend end up in a
    single update. Updates added while running are run in the same call.
    A failing update is logged, the others still run, and the first error
    is re-raised once everything has been attempted.
    """

    def __init__(self) -> None:
        self._pending: dict[Stage, list[DeferrableUpdate]] = {stage: [] for stage in Stage}

    def add_update(self, update: DeferrableUpdate, stage: Stage = Stage.DEFAULT) -> None:
        if isinstance(update, MergeableUpdate):
            for pending in self._pending[stage]:
                if type(pending) is type(update):
                    pending.merge(update)  # type: ignore[attr-defined]
                    return
        self._pending[stage].append(update)

    def add_callable_update(self, callback: Callable[[], Any], stage: Stage = Stage.DEFAULT) -> None:
        self.add_update(CallableUpdate(callback), stage)

    def pending_count(self) -> int:
        return sum(len(updates) for updates in self._pending.values())

    def do_updates(self) -> None:
        first_error: Exception | None = None
        while True:
            stage = next((s for s in Stage if self._pending[s]), None)
            if stage is None:
                break
            batch, self._pending[stage] = self._pending[stage], []
            for update in batch:
                try:
                    update.do_update()
                except Exception as exc:
                    logger.exception(
                        "deferred.update_failed",
                        update=type(update).__name__,
                        stage=stage.name,
                    )
                    if first_error is None:
                        first_error = exc
        if first_error is not None:
            raise first_error


__all__ = ["CallableUpdate", "DeferrableUpdate", "DeferredUpdates", "MergeableUpdate", "Stage"]
