"""Application flags – FlagRepository port."""

from __future__ import annotations

import abc

from togglekit.application.pagination import Page, PageRequest
from togglekit.domain.flag import Flag
from togglekit.kernel.ddd import Repository
from togglekit.kernel.types import OrganizationId


class FlagRepository(Repository[Flag]):
    """Port: load and persist :class:`~togglekit.domain.Flag` aggregates.

    ``save`` is a compare-and-replace on ``flag.etag``: it succeeds only if
    the stored document has not been written since the flag was loaded,
    then increments ``flag.etag``.  A lost race raises
    :class:`~togglekit.kernel.errors.ConflictError`; this is the single
    writer guarantee the lifecycle relies on.
    """

    @abc.abstractmethod
    async def find_by_organization(
        self,
        organization_id: OrganizationId,
        request: PageRequest,
    ) -> Page[Flag]:
        """Return alive flags of *organization_id* in creation order."""


__all__ = ["FlagRepository"]
