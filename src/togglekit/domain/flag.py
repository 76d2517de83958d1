"""Flag — the aggregate root holding revisions, environments and version."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Any

from togglekit.domain.environment import Environment
from togglekit.domain.revision import Revision, RevisionStatus, Rule
from togglekit.kernel.ddd import AggregateRoot, Invariant
from togglekit.kernel.errors import ValidationError
from togglekit.kernel.types import FlagId, OrganizationId, RevisionId, UserId


class FlagType(str, Enum):
    BOOLEAN = "boolean"
    JSON = "json"
    STRING = "string"
    NUMBER = "number"

    def __str__(self) -> str:
        return self.value


INITIAL_VERSION = 1


class Flag(AggregateRoot):
    """A feature flag owned by one organization.

    ``revisions`` is append-only and kept in creation order.  ``version``
    starts at :data:`INITIAL_VERSION` and moves only through approve and
    rollback.  ``etag`` is the storage concurrency token: repositories
    compare it on save and bump it on success.
    """

    def __init__(
        self,
        id: FlagId,  # noqa: A002
        *,
        name: str,
        flag_type: FlagType,
        organization_id: OrganizationId,
        creator_id: UserId,
        created_at: datetime,
        default_value: Any = None,
        rules: Iterable[Rule] = (),
        revisions: Iterable[Revision] = (),
        environments: Iterable[Environment] = (),
        version: int = INITIAL_VERSION,
        deleted_at: datetime | None = None,
        etag: int = 0,
    ) -> None:
        super().__init__(id)
        self.name = name
        self.flag_type = flag_type
        self.organization_id = organization_id
        self.creator_id = creator_id
        self.created_at = created_at
        self.default_value = default_value
        self.rules: tuple[Rule, ...] = tuple(rules)
        self.revisions: list[Revision] = list(revisions)
        self.environments: dict[str, Environment] = {}
        for env in environments:
            if env.name in self.environments:
                raise ValidationError(
                    f"Duplicate environment '{env.name}'",
                    errors=[{"field": "environments", "message": f"duplicate name {env.name!r}"}],
                )
            self.environments[env.name] = env
        self.version = version
        self.deleted_at = deleted_at
        self.etag = etag

    @property
    def id(self) -> FlagId:
        return self._id  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def find_revision(self, revision_id: RevisionId) -> Revision | None:
        for revision in self.revisions:
            if revision.id == revision_id:
                return revision
        return None

    def live_revisions(self) -> list[Revision]:
        return [r for r in self.revisions if r.status is RevisionStatus.LIVE]

    @property
    def live_revision(self) -> Revision | None:
        """The revision currently served, or ``None`` before the first approval."""
        live = self.live_revisions()
        return live[-1] if live else None

    def environment_states(self) -> dict[str, bool]:
        return {name: env.is_enabled for name, env in self.environments.items()}

    # ------------------------------------------------------------------
    # Mutations not owned by the lifecycle/toggle managers
    # ------------------------------------------------------------------

    def mark_deleted(self, at: datetime) -> None:
        self.deleted_at = at

    def check_invariants(self) -> None:
        Invariant.require(
            len(self.live_revisions()) <= 1,
            f"Flag '{self.id}' has more than one live revision",
        )

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"Flag(id={self.id!r}, name={self.name!r}, version={self.version}, "
            f"revisions={len(self.revisions)})"
        )


__all__ = ["INITIAL_VERSION", "Flag", "FlagType"]
