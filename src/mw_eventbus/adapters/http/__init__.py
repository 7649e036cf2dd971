"""HTTP adapter – Delivery Transport for the event dispatcher."""
from mw_eventbus.adapters.http.client import HttpxMultiClient
from mw_eventbus.adapters.http.ports import HttpRequest, HttpResponse, MultiHttpClient

__all__ = ["HttpRequest", "HttpResponse", "HttpxMultiClient", "MultiHttpClient"]
