"""Kernel – framework-agnostic building blocks."""

from togglekit.kernel.errors import (
    ApplicationError,
    BaseError,
    ConflictError,
    DomainError,
    InfrastructureError,
    InvalidStateTransitionError,
    InvariantViolationError,
    NoActiveRevisionError,
    NotFoundError,
    StorageError,
    ValidationError,
)

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
