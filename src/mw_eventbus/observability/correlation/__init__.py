"""Observability – request correlation."""
from mw_eventbus.observability.correlation.context import CorrelationContext, RequestContext

__all__ = ["CorrelationContext", "RequestContext"]
