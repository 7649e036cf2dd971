"""Testing fakes – in-memory doubles for ports."""
from mw_eventbus.testing.fakes.http import FakeMultiHttpClient

__all__ = ["FakeMultiHttpClient"]
