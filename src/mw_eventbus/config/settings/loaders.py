"""Config settings – EnvSettingsLoader, JsonFileSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import json
import os
from pathlib import Path
from typing import Any, TypeVar

from mw_eventbus.config.settings.base import Settings
from mw_eventbus.config.validation import (
    ConfigurationError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)


def is_required(field: dataclasses.Field[Any]) -> bool:
    return (
        field.default is dataclasses.MISSING
        and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
    )


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source.

    ``values`` returns only the fields the source actually provides, so
    several loaders can be layered without defaults masking earlier values.
    """

    @abc.abstractmethod
    def values(self, settings_class: type[Settings]) -> dict[str, Any]: ...

    def load(self, settings_class: type[T]) -> T:
        kwargs = self.values(settings_class)
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            if field.name not in kwargs and is_required(field):
                raise MissingRequiredSettingError(self.key_for(settings_class, field.name))
        try:
            return settings_class(**kwargs)
        except ConfigurationError:
            raise
        except Exception as exc:
            raise ConfigurationError(f"Failed to load settings: {exc}", cause=exc) from exc

    def key_for(self, settings_class: type[Settings], field_name: str) -> str:  # noqa: ARG002
        return field_name


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    ``EventBusSettings.max_batch_byte_size`` is read from
    ``EVENTBUS_MAX_BATCH_BYTE_SIZE``. Mapping-typed fields are JSON documents.
    """

    def key_for(self, settings_class: type[Settings], field_name: str) -> str:
        prefix = getattr(settings_class, "_prefix", "").upper()
        return f"{prefix}_{field_name}".upper().lstrip("_")

    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = self.key_for(settings_class, field.name)
            raw = os.environ.get(env_key)
            if raw is not None:
                kwargs[field.name] = self._coerce(env_key, raw, field.type)
        return kwargs

    def _coerce(self, key: str, value: str, type_hint: Any) -> Any:  # noqa: PLR0911
        hint = type_hint if isinstance(type_hint, str) else getattr(type_hint, "__name__", str(type_hint))
        origin = getattr(type_hint, "__origin__", None)
        if type_hint is bool or hint == "bool":
            return value.lower() in ("1", "true", "yes", "on")
        if type_hint is int or hint == "int":
            try:
                return int(value)
            except ValueError as exc:
                raise InvalidSettingValueError(key, value, "not an integer") from exc
        if type_hint is float or hint == "float":
            return float(value)
        if origin is dict or hint.startswith("dict"):
            try:
                return json.loads(value)
            except json.JSONDecodeError as exc:
                raise InvalidSettingValueError(key, value, f"not a JSON object ({exc})") from exc
        if origin is list or hint.startswith("list"):
            return [v.strip() for v in value.split(",") if v.strip()]
        return value


class JsonFileSettingsLoader(SettingsLoader):
    """Load settings from a JSON document keyed by field name.

    Suits the nested service and stream maps, which are awkward as env vars.
    Unknown keys are ignored.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def values(self, settings_class: type[Settings]) -> dict[str, Any]:
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot read settings file {self._path}: {exc}", cause=exc) from exc
        if not isinstance(document, dict):
            raise ConfigurationError(f"Settings file {self._path} must contain a JSON object")

        names = {field.name for field in dataclasses.fields(settings_class)}  # type: ignore[arg-type]
        return {key: value for key, value in document.items() if key in names}


__all__ = ["EnvSettingsLoader", "JsonFileSettingsLoader", "SettingsLoader", "is_required"]
