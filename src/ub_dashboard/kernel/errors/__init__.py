"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError          (domain.py)
    │   └── ValidationError
    ├── ApplicationError     (application.py)
    │   ├── QueryFetchError
    │   └── TimeoutError
    └── InfrastructureError  (infrastructure.py)
        ├── SerializationError
        └── ExternalServiceError
"""

from ub_dashboard.kernel.errors.application import (
    ApplicationError,
    QueryFetchError,
    TimeoutError,
)
from ub_dashboard.kernel.errors.base import BaseError, describe
from ub_dashboard.kernel.errors.domain import DomainError, ValidationError
from ub_dashboard.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    SerializationError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "describe",
    "DomainError",
    "ExternalServiceError",
    "InfrastructureError",
    "QueryFetchError",
    "SerializationError",
    "TimeoutError",
    "ValidationError",
]
