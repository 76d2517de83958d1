"""Repository port — generic async repository for aggregate roots."""

from __future__ import annotations

import abc
from typing import Generic, TypeVar

from togglekit.kernel.ddd.aggregate import AggregateRoot
from togglekit.kernel.types.ids import EntityId

TAggregate = TypeVar("TAggregate", bound=AggregateRoot)


class Repository(abc.ABC, Generic[TAggregate]):
    """Port: generic repository for aggregate roots.

    Concrete implementations live in ``application/flags/in_memory.py`` and
    ``adapters/mongodb``.
    """

    @abc.abstractmethod
    async def get(self, id: EntityId) -> TAggregate | None: ...  # noqa: A002

    @abc.abstractmethod
    async def get_or_raise(self, id: EntityId) -> TAggregate: ...  # noqa: A002

    @abc.abstractmethod
    async def add(self, aggregate: TAggregate) -> None: ...

    @abc.abstractmethod
    async def save(self, aggregate: TAggregate) -> None: ...


__all__ = ["Repository"]
