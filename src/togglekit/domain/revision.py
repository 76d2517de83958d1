"""Revision — a versioned configuration snapshot attached to a flag."""

from __future__ import annotations

import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any

from togglekit.kernel.errors import InvalidStateTransitionError
from togglekit.kernel.types import RevisionId, UserId


class RevisionStatus(str, Enum):
    DRAFT = "draft"
    LIVE = "live"
    ARCHIVED = "archived"

    def __str__(self) -> str:
        return self.value


# Every move a revision may make; anything else is rejected.
ALLOWED_TRANSITIONS: frozenset[tuple[RevisionStatus, RevisionStatus]] = frozenset(
    {
        (RevisionStatus.DRAFT, RevisionStatus.LIVE),
        (RevisionStatus.LIVE, RevisionStatus.ARCHIVED),
        (RevisionStatus.LIVE, RevisionStatus.DRAFT),
        (RevisionStatus.ARCHIVED, RevisionStatus.LIVE),
    }
)


@dataclasses.dataclass(frozen=True)
class Rule:
    """Targeting rule: a condition and the value served when it matches.

    Both fields are carried verbatim; the lifecycle never inspects them.
    """

    condition: Any
    value: Any

    def to_dict(self) -> dict[str, Any]:
        return {"condition": self.condition, "value": self.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Rule":
        return cls(condition=data.get("condition"), value=data.get("value"))


@dataclasses.dataclass
class Revision:
    """Configuration snapshot with a mutable lifecycle status.

    ``default_value``, ``rules``, ``creator_id`` and ``created_at`` never change
    after creation.  ``status`` and ``last_revision_id`` are owned by
    :class:`~togglekit.domain.lifecycle.RevisionLifecycleManager`.
    """

    id: RevisionId
    default_value: Any
    rules: tuple[Rule, ...]
    creator_id: UserId
    created_at: datetime
    status: RevisionStatus = RevisionStatus.DRAFT
    last_revision_id: RevisionId | None = None

    @property
    def is_live(self) -> bool:
        return self.status is RevisionStatus.LIVE

    def can_transition_to(self, target: RevisionStatus) -> bool:
        return (self.status, target) in ALLOWED_TRANSITIONS

    def transition_to(self, target: RevisionStatus) -> None:
        """Move to *target*, raising ``InvalidStateTransitionError`` if not allowed."""
        if not self.can_transition_to(target):
            raise InvalidStateTransitionError(self.id, self.status, target)
        self.status = target


__all__ = ["ALLOWED_TRANSITIONS", "Revision", "RevisionStatus", "Rule"]
