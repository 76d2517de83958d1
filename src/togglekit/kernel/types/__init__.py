"""Kernel value-object types — public re-export surface.

Modules:
  ids.py — EntityId, FlagId, RevisionId, OrganizationId, UserId
"""

from togglekit.kernel.types.ids import (
    EntityId,
    FlagId,
    OrganizationId,
    RevisionId,
    UserId,
)

__all__ = [
    "EntityId",
    "FlagId",
    "OrganizationId",
    "RevisionId",
    "UserId",
]
