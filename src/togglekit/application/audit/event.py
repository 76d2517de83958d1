"""Application audit – AuditEvent and AuditEventKind."""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from enum import Enum

from togglekit.kernel.errors import ValidationError
from togglekit.kernel.types import EntityId, FlagId, UserId


class AuditEventKind(str, Enum):
    """What happened to the flag."""

    CREATED = "created"
    REVISION_CREATED = "revision_created"
    REVISION_APPROVED = "revision_approved"
    ROLLBACK = "rollback"
    DELETED = "deleted"
    TOGGLE = "toggle"


@dataclasses.dataclass(frozen=True)
class AuditEvent:
    """One immutable entry in a flag's audit trail.

    Parameters
    ----------
    flag_id:
        Flag the mutation was applied to.
    actor_id:
        User who requested the mutation.
    kind:
        :class:`AuditEventKind` of the mutation.
    environment:
        Environment name; set only for :attr:`AuditEventKind.TOGGLE`.
    event_id:
        Unique identifier for this record.  Defaults to a fresh id.
    occurred_at:
        UTC timestamp.  Defaults to *now*.
    """

    flag_id: FlagId
    actor_id: UserId
    kind: AuditEventKind
    environment: str | None = None
    event_id: EntityId = dataclasses.field(default_factory=EntityId.generate)
    occurred_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        if (self.kind is AuditEventKind.TOGGLE) != (self.environment is not None):
            raise ValidationError(
                "environment is required for toggle events and only for them",
                errors=[{"field": "environment", "message": f"invalid for {self.kind.value}"}],
            )

    @property
    def action(self) -> str:
        """Human-readable label, e.g. ``"revision_approved"`` or ``"toggle(prod)"``."""
        if self.kind is AuditEventKind.TOGGLE:
            return f"{self.kind.value}({self.environment})"
        return self.kind.value


__all__ = ["AuditEvent", "AuditEventKind"]
