"""Delivery – ServiceConfig."""
from __future__ import annotations

import dataclasses

DEFAULT_REQUEST_TIMEOUT = 5.0


@dataclasses.dataclass(frozen=True)
class ServiceConfig:
    """One event intake endpoint, as resolved from ``event_services``."""

    name: str
    url: str
    timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_batch_byte_size: int = 4 * 1024 * 1024
    forward_client_ip: bool = False


__all__ = ["DEFAULT_REQUEST_TIMEOUT", "ServiceConfig"]
