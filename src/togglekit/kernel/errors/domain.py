"""Domain errors — business rule, lifecycle and invariant violations."""

from __future__ import annotations

from typing import Any

from togglekit.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a domain rule is violated."""

    default_code = "domain_error"


class InvariantViolationError(DomainError):
    """An aggregate invariant was violated."""

    default_code = "invariant_violation"


class ValidationError(DomainError):
    """Input data does not meet validation rules.

    ``errors`` is a list of field-level failures, e.g.
    ``[{"field": "name", "message": "must not be empty"}]``.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class NotFoundError(DomainError):
    """The requested flag, revision or environment does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} '{identifier}' not found"
        super().__init__(msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


class ConflictError(DomainError):
    """The write raced with another writer or collides with existing state."""

    default_code = "conflict"


class InvalidStateTransitionError(DomainError):
    """A revision is not in the status the requested move starts from.

    Also raised when a rollback backlink points at a revision that is
    missing or not archived (a corrupt chain).
    """

    default_code = "invalid_state_transition"

    def __init__(
        self,
        revision_id: Any,
        from_status: Any,
        to_status: Any,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            message
            or f"Revision '{revision_id}' cannot move from {from_status} to {to_status}",
            detail={
                "revision_id": str(revision_id),
                "from_status": str(from_status),
                "to_status": str(to_status),
            },
            **kwargs,
        )
        self.revision_id = revision_id
        self.from_status = from_status
        self.to_status = to_status


class NoActiveRevisionError(DomainError):
    """Rollback was requested on a flag with no Live revision."""

    default_code = "no_active_revision"

    def __init__(self, flag_id: Any, **kwargs: Any) -> None:
        super().__init__(
            f"Flag '{flag_id}' has no live revision",
            detail={"flag_id": str(flag_id)},
            **kwargs,
        )
        self.flag_id = flag_id


__all__ = [
    "ConflictError",
    "DomainError",
    "InvalidStateTransitionError",
    "InvariantViolationError",
    "NoActiveRevisionError",
    "NotFoundError",
    "ValidationError",
]
