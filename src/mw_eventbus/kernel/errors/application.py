"""Application-layer errors – raised to the caller, never absorbed."""

from __future__ import annotations

from typing import Any

from mw_eventbus.kernel.errors.base import EventBusError


class ApplicationError(EventBusError):
    """Caller-visible failure: bad configuration or a programming mistake."""

    default_code = "application_error"


class ConfigurationError(ApplicationError):
    """The event services or streams are misconfigured.

    Raised at factory construction or stream resolution time. It means the
    producer is unusable, not that one event failed to go out.
    """

    default_code = "configuration_error"


class ParameterAssertionError(ApplicationError):
    """A caller passed malformed arguments (e.g. a dict instead of a list).

    Raised at the call site so the bug is not hidden inside deferred work.
    """

    default_code = "parameter_assertion"

    def __init__(self, parameter: str, message: str, **kwargs: Any) -> None:
        super().__init__(f"Bad value for parameter {parameter}: {message}", **kwargs)
        self.parameter = parameter


class JobValidationError(ApplicationError):
    """A signed job event body was rejected.

    ``status`` is the HTTP status a REST front-end should answer with.
    """

    default_code = "job_validation_error"

    def __init__(self, message: str, *, status: int, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.status = status

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["status"] = self.status
        return base


__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "JobValidationError",
    "ParameterAssertionError",
]
