"""
mw_eventbus – MediaWiki change-event producer.

Wiki state changes are turned into schema-tagged JSON events, queued for the
end of the request and POSTed in size-bounded batches to an event intake
service.

Import path convention::

    from mw_eventbus.delivery import EventBus, EventBusFactory, EventType
    from mw_eventbus.deferred import DeferredEventQueue, DeferredUpdates
    from mw_eventbus.events import EventSerializer
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
