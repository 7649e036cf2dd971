"""Purge adapter – CDN purge notifications as events."""
from mw_eventbus.adapters.purge.relayer import PURGE_CHANNEL, RESOURCE_CHANGE_SCHEMA, CdnPurgeEventRelayer

__all__ = ["PURGE_CHANNEL", "RESOURCE_CHANGE_SCHEMA", "CdnPurgeEventRelayer"]
