"""Application audit – InMemoryAuditRecorder."""

from __future__ import annotations

from collections import defaultdict

from togglekit.application.audit.event import AuditEvent
from togglekit.application.audit.recorder import AuditRecorder
from togglekit.kernel.types import FlagId


class InMemoryAuditRecorder(AuditRecorder):
    """List-backed recorder for unit tests and local development."""

    def __init__(self) -> None:
        self._trails: dict[FlagId, list[AuditEvent]] = defaultdict(list)

    async def append(self, event: AuditEvent) -> None:
        self._trails[event.flag_id].append(event)

    async def list_for_flag(self, flag_id: FlagId) -> list[AuditEvent]:
        return list(self._trails.get(flag_id, []))

    def all(self) -> list[AuditEvent]:
        """Return every stored event (helper for test assertions)."""
        return [event for trail in self._trails.values() for event in trail]


__all__ = ["InMemoryAuditRecorder"]
