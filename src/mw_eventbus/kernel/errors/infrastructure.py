"""Infrastructure errors – encoding and delivery failures.

These are recoverable. The dispatcher builds and logs them, then reports a
failure result instead of raising.
"""

from __future__ import annotations

from typing import Any

from mw_eventbus.kernel.errors.base import EventBusError


class InfrastructureError(EventBusError):
    """I/O or encoding failure that is not a configuration problem."""

    default_code = "infrastructure_error"


class SerializationError(InfrastructureError):
    """A batch could not be encoded to JSON."""

    default_code = "serialization_error"


class DeliveryError(InfrastructureError):
    """The intake service did not accept every event of a sub-batch.

    ``status_code`` is ``0`` when no HTTP response was received at all.
    """

    default_code = "delivery_error"

    def __init__(
        self,
        service: str,
        *,
        status_code: int,
        reason: str = "",
        error: str = "",
        **kwargs: Any,
    ) -> None:
        description = error or f"{status_code}: {reason}"
        super().__init__(f"Unable to deliver all events: {description}", **kwargs)
        self.service = service
        self.status_code = status_code
        self.reason = reason
        self.error = error

    @property
    def partial(self) -> bool:
        """True when the service accepted some, but not all, of the events."""
        return self.status_code == 207


__all__ = ["DeliveryError", "InfrastructureError", "SerializationError"]
