"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from mw_eventbus.config.settings.base import Settings
from mw_eventbus.config.settings.loaders import SettingsLoader, is_required
from mw_eventbus.config.validation import ConfigurationError, MissingRequiredSettingError
from mw_eventbus.observability.logging import get_logger

T = TypeVar("T", bound=Settings)

logger = get_logger(__name__)


class SettingsFactory:
    """Build EventBusSettings (or any Settings subclass) from layered sources.

    Typical wiring reads the service and stream maps from a JSON file and
    lets environment variables adjust single values on top. A source that
    cannot be read is logged and skipped.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """Merge loader values in order, then *overrides*, and construct.

        Later loaders win on conflicting fields; *overrides* win over all.

        Raises
        ------
        MissingRequiredSettingError
            When a required field (no default) is absent after all sources
            have been merged.
        ConfigurationError
            On any other construction failure, including validation.
        """
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            try:
                merged.update(loader.values(settings_cls))
            except ConfigurationError as exc:
                logger.warning(
                    "settings.loader_skipped",
                    loader=type(loader).__name__,
                    error=exc.message,
                )

        if overrides:
            merged.update(overrides)

        for field in dataclasses.fields(settings_cls):  # type: ignore[arg-type]
            if field.name not in merged and is_required(field):
                raise MissingRequiredSettingError(field.name)

        try:
            return settings_cls(**merged)
        except ConfigurationError:
            raise
        except Exception as exc:
            raise ConfigurationError(
                f"Failed to construct {settings_cls.__name__}: {exc}", cause=exc
            ) from exc


__all__ = ["SettingsFactory"]
