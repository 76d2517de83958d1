"""MongoDB adapter — MongoAuditRecorder."""

from __future__ import annotations

from typing import Any

from togglekit.application.audit import AuditEvent, AuditEventKind, AuditRecorder
from togglekit.kernel.errors import StorageError
from togglekit.kernel.types import EntityId, FlagId, UserId


class MongoAuditRecorder(AuditRecorder):
    """Audit trail stored as one timeline document per flag.

    Each :meth:`append` is a single ``$push`` onto ``entries`` with
    ``upsert=True``, so the first event creates the timeline and the array
    order is the call order.
    """

    COLLECTION_NAME = "timelines"

    def __init__(self, collection: Any) -> None:
        self._col = collection

    async def append(self, event: AuditEvent) -> None:
        try:
            await self._col.update_one(
                {"_id": event.flag_id.value},
                {"$push": {"entries": self._to_entry(event)}},
                upsert=True,
            )
        except Exception as exc:
            raise StorageError(self.COLLECTION_NAME, cause=exc) from exc

    async def list_for_flag(self, flag_id: FlagId) -> list[AuditEvent]:
        try:
            doc = await self._col.find_one({"_id": flag_id.value})
        except Exception as exc:
            raise StorageError(self.COLLECTION_NAME, cause=exc) from exc
        if doc is None:
            return []
        return [self._from_entry(flag_id, entry) for entry in doc.get("entries", [])]

    # ------------------------------------------------------------------
    # (De)serialisation helpers
    # ------------------------------------------------------------------

    def _to_entry(self, event: AuditEvent) -> dict[str, Any]:
        return {
            "event_id": event.event_id.value,
            "actor_id": event.actor_id.value,
            "kind": event.kind.value,
            "environment": event.environment,
            "occurred_at": event.occurred_at,
        }

    def _from_entry(self, flag_id: FlagId, entry: dict[str, Any]) -> AuditEvent:
        return AuditEvent(
            flag_id=flag_id,
            actor_id=UserId(entry["actor_id"]),
            kind=AuditEventKind(entry["kind"]),
            environment=entry.get("environment"),
            event_id=EntityId(entry["event_id"]),
            occurred_at=entry["occurred_at"],
        )


__all__ = ["MongoAuditRecorder"]
