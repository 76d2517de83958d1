"""Application flags – InMemoryFlagRepository."""

from __future__ import annotations

import copy

from togglekit.application.flags.repository import FlagRepository
from togglekit.application.pagination import Page, PageRequest
from togglekit.domain.flag import Flag
from togglekit.kernel.errors import ConflictError, NotFoundError
from togglekit.kernel.types import EntityId, OrganizationId


class InMemoryFlagRepository(FlagRepository):
    """Dict-backed repository.

    Flags are deep-copied on the way in and out so every caller holds its
    own aggregate, as it would with a real document store.
    """

    def __init__(self) -> None:
        self._flags: dict[EntityId, Flag] = {}

    async def get(self, id: EntityId) -> Flag | None:  # noqa: A002
        stored = self._flags.get(id)
        return copy.deepcopy(stored) if stored is not None else None

    async def get_or_raise(self, id: EntityId) -> Flag:  # noqa: A002
        flag = await self.get(id)
        if flag is None:
            raise NotFoundError("Flag", id.value)
        return flag

    async def add(self, flag: Flag) -> None:
        if flag.id in self._flags:
            raise ConflictError(f"Flag '{flag.id}' already exists")
        self._flags[flag.id] = copy.deepcopy(flag)

    async def save(self, flag: Flag) -> None:
        stored = self._flags.get(flag.id)
        if stored is None:
            raise NotFoundError("Flag", flag.id.value)
        if stored.etag != flag.etag:
            raise ConflictError(
                f"Flag '{flag.id}' was modified concurrently",
                detail={"expected_etag": flag.etag, "actual_etag": stored.etag},
            )
        flag.etag += 1
        self._flags[flag.id] = copy.deepcopy(flag)

    async def find_by_organization(
        self,
        organization_id: OrganizationId,
        request: PageRequest,
    ) -> Page[Flag]:
        matching = [
            copy.deepcopy(flag)
            for flag in self._flags.values()
            if flag.organization_id == organization_id and not flag.is_deleted
        ]
        matching.sort(key=lambda f: f.created_at)
        return Page.of(matching, request)


__all__ = ["InMemoryFlagRepository"]
