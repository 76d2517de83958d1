"""DDD building blocks — public re-export surface."""

from togglekit.kernel.ddd.aggregate import AggregateRoot
from togglekit.kernel.ddd.entity import Entity
from togglekit.kernel.ddd.invariant import Invariant, ensure
from togglekit.kernel.ddd.repository import Repository

__all__ = [
    "AggregateRoot",
    "Entity",
    "Invariant",
    "Repository",
    "ensure",
]
