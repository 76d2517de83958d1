"""Kernel error hierarchy — public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError                  (domain.py)
    │   ├── InvariantViolationError
    │   ├── ValidationError
    │   ├── NotFoundError
    │   ├── ConflictError
    │   ├── InvalidStateTransitionError
    │   └── NoActiveRevisionError
    ├── ApplicationError             (application.py)
    └── InfrastructureError          (infrastructure.py)
        └── StorageError
"""

from togglekit.kernel.errors.application import ApplicationError
from togglekit.kernel.errors.base import BaseError
from togglekit.kernel.errors.domain import (
    ConflictError,
    DomainError,
    InvalidStateTransitionError,
    InvariantViolationError,
    NoActiveRevisionError,
    NotFoundError,
    ValidationError,
)
from togglekit.kernel.errors.infrastructure import InfrastructureError, StorageError

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConflictError",
    "DomainError",
    "InfrastructureError",
    "InvalidStateTransitionError",
    "InvariantViolationError",
    "NoActiveRevisionError",
    "NotFoundError",
    "StorageError",
    "ValidationError",
]
