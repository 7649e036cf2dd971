"""Observability – structured logging helpers."""
from mw_eventbus.observability.logging.factory import JsonLoggerFactory
from mw_eventbus.observability.logging.processors import RequestContextProcessor, get_logger

__all__ = ["JsonLoggerFactory", "RequestContextProcessor", "get_logger"]
