"""String-based identifier value objects."""

from __future__ import annotations

import dataclasses
import uuid

from togglekit.kernel.errors.domain import ValidationError


@dataclasses.dataclass(frozen=True, slots=True)
class _StrId:
    """Base for string-typed identifiers."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value:
            raise ValidationError(f"{type(self).__name__} must be a non-empty string")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def generate(cls):  # type: ignore[no-untyped-def]
        """Return a new random identifier (UUID v4)."""
        return cls(str(uuid.uuid4()))

    @classmethod
    def from_str(cls, value: str):  # type: ignore[no-untyped-def]
        """Construct from an existing string identifier."""
        return cls(value)


@dataclasses.dataclass(frozen=True, slots=True)
class EntityId(_StrId):
    """Generic entity identifier.

    Examples::

        eid = EntityId.generate()           # new random id
        eid = EntityId.from_str("abc-123")  # from existing string
    """


@dataclasses.dataclass(frozen=True, slots=True)
class FlagId(EntityId):
    """Identifies a feature flag document."""


@dataclasses.dataclass(frozen=True, slots=True)
class RevisionId(EntityId):
    """Identifies one revision inside a flag."""


@dataclasses.dataclass(frozen=True, slots=True)
class OrganizationId(_StrId):
    """Identifies the tenant (organization) owning a flag."""


@dataclasses.dataclass(frozen=True, slots=True)
class UserId(_StrId):
    """Authenticated user identifier (creators, approvers, audit actors)."""


__all__ = [
    "EntityId",
    "FlagId",
    "OrganizationId",
    "RevisionId",
    "UserId",
]
