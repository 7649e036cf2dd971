"""Config settings – dataclass settings with layered loaders."""
from mw_eventbus.config.settings.base import Settings
from mw_eventbus.config.settings.eventbus import DEFAULT_MAX_BATCH_BYTE_SIZE, EventBusSettings
from mw_eventbus.config.settings.factory import SettingsFactory
from mw_eventbus.config.settings.loaders import EnvSettingsLoader, JsonFileSettingsLoader, SettingsLoader

__all__ = [
    "DEFAULT_MAX_BATCH_BYTE_SIZE",
    "EnvSettingsLoader",
    "EventBusSettings",
    "JsonFileSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
