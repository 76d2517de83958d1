"""AggregateRoot — consistency boundary that checks its own invariants."""

from __future__ import annotations

from togglekit.kernel.ddd.entity import Entity


class AggregateRoot(Entity):
    """Aggregate root.

    Everything reachable from the root is loaded, transformed and persisted
    as one unit.  Subclasses override :meth:`check_invariants`; the domain
    services that mutate the aggregate call it before returning.
    """

    def check_invariants(self) -> None:
        """Raise ``InvariantViolationError`` when the aggregate is inconsistent."""


__all__ = ["AggregateRoot"]
