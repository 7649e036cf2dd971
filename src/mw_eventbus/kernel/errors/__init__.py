"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    EventBusError
    ├── ApplicationError         (application.py)   propagates to callers
    │   ├── ConfigurationError
    │   ├── ParameterAssertionError
    │   └── JobValidationError
    └── InfrastructureError      (infrastructure.py) logged, never raised by send()
        ├── SerializationError
        └── DeliveryError
"""

from mw_eventbus.kernel.errors.application import (
    ApplicationError,
    ConfigurationError,
    JobValidationError,
    ParameterAssertionError,
)
from mw_eventbus.kernel.errors.base import EventBusError
from mw_eventbus.kernel.errors.infrastructure import (
    DeliveryError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "DeliveryError",
    "EventBusError",
    "InfrastructureError",
    "JobValidationError",
    "ParameterAssertionError",
    "SerializationError",
]
