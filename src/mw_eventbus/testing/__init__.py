"""Testing – in-memory doubles for the delivery transport."""
from mw_eventbus.testing.fakes import FakeMultiHttpClient

__all__ = ["FakeMultiHttpClient"]
