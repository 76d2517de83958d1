"""Infrastructure errors — I/O failures from the flag store and audit trail."""

from __future__ import annotations

from typing import Any

from togglekit.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Infrastructure / I/O failure that is not a business rule violation."""

    default_code = "infrastructure_error"


class StorageError(InfrastructureError):
    """A repository or audit recorder failed to read or write.

    The driver exception is kept as ``cause``; callers treat it as opaque.
    """

    default_code = "storage_error"

    def __init__(
        self,
        resource: str,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"Storage failure on '{resource}'", **kwargs)
        self.resource = resource


__all__ = ["InfrastructureError", "StorageError"]
