"""Logging adapter – log records as events."""
from mw_eventbus.adapters.logging.handler import EventBusLogHandler

__all__ = ["EventBusLogHandler"]
