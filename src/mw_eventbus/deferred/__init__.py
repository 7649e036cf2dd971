"""Deferred – post-commit event submission."""
from mw_eventbus.deferred.queue import DeferredEventQueue
from mw_eventbus.deferred.send_update import EventBusSendUpdate, assert_event_list
from mw_eventbus.deferred.updates import (
    CallableUpdate,
    DeferrableUpdate,
    DeferredUpdates,
    MergeableUpdate,
    Stage,
)

__all__ = [
    "CallableUpdate",
    "DeferrableUpdate",
    "DeferredEventQueue",
    "DeferredUpdates",
    "EventBusSendUpdate",
    "MergeableUpdate",
    "Stage",
    "assert_event_list",
]
