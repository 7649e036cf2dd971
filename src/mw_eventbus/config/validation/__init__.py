"""Config validation errors."""
from mw_eventbus.config.validation.errors import InvalidSettingValueError, MissingRequiredSettingError
from mw_eventbus.kernel.errors import ConfigurationError

__all__ = ["ConfigurationError", "InvalidSettingValueError", "MissingRequiredSettingError"]
