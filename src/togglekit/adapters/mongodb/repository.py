"""MongoDB adapter — MongoFlagRepository."""

from __future__ import annotations

from typing import Any

from togglekit.application.flags.repository import FlagRepository
from togglekit.application.pagination import Page, PageRequest
from togglekit.domain import Environment, Flag, FlagType, Revision, RevisionStatus, Rule
from togglekit.kernel.errors import ConflictError, NotFoundError, StorageError
from togglekit.kernel.types import EntityId, FlagId, OrganizationId, RevisionId, UserId

_DUPLICATE_KEY = 11000


def is_duplicate_key(exc: BaseException) -> bool:
    return getattr(exc, "code", None) == _DUPLICATE_KEY or "E11000" in str(exc)


class MongoFlagRepository(FlagRepository):
    """Flag repository backed by a **motor** collection.

    One document per flag, keyed by ``_id = str(flag.id)``; revisions and
    environments are embedded arrays, so every lifecycle or toggle
    operation is a single-document replace.

    Optimistic locking strategy
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~
    :meth:`save` replaces the document filtered by ``{_id, etag}`` and
    writes ``etag + 1``.  If nothing matched, another writer got there
    first (``ConflictError``) or the flag is gone (``NotFoundError``).

    Call :meth:`create_indexes` once on startup.
    """

    COLLECTION_NAME = "feature_flags"

    def __init__(self, collection: Any) -> None:
        self._col = collection

    # ------------------------------------------------------------------
    # Index management
    # ------------------------------------------------------------------

    @classmethod
    async def create_indexes(cls, collection: Any) -> None:
        """Create the listing index.  Idempotent — safe to call repeatedly."""
        await collection.create_index(
            [("organization_id", 1), ("created_at", 1)],
            name="idx_flags_org_created",
        )

    # ------------------------------------------------------------------
    # FlagRepository interface
    # ------------------------------------------------------------------

    async def get(self, id: EntityId) -> Flag | None:  # noqa: A002
        try:
            doc = await self._col.find_one({"_id": id.value})
        except Exception as exc:
            raise StorageError(self.COLLECTION_NAME, cause=exc) from exc
        return self._from_document(doc) if doc is not None else None

    async def get_or_raise(self, id: EntityId) -> Flag:  # noqa: A002
        flag = await self.get(id)
        if flag is None:
            raise NotFoundError("Flag", id.value)
        return flag

    async def add(self, flag: Flag) -> None:
        try:
            await self._col.insert_one(self._to_document(flag))
        except Exception as exc:
            if is_duplicate_key(exc):
                raise ConflictError(f"Flag '{flag.id}' already exists", cause=exc) from exc
            raise StorageError(self.COLLECTION_NAME, cause=exc) from exc

    async def save(self, flag: Flag) -> None:
        expected = flag.etag
        doc = self._to_document(flag)
        doc["etag"] = expected + 1
        try:
            result = await self._col.replace_one(
                {"_id": doc["_id"], "etag": self._etag_filter(expected)},
                doc,
            )
            matched = result.matched_count
            exists = matched or await self._col.count_documents({"_id": doc["_id"]}, limit=1)
        except Exception as exc:
            raise StorageError(self.COLLECTION_NAME, cause=exc) from exc
        if not matched:
            if not exists:
                raise NotFoundError("Flag", flag.id.value)
            raise ConflictError(
                f"Flag '{flag.id}' was modified concurrently",
                detail={"expected_etag": expected},
            )
        flag.etag = expected + 1

    @staticmethod
    def _etag_filter(expected: int) -> Any:
        # documents written before the etag field existed load as etag 0
        if expected == 0:
            return {"$in": [0, None]}
        return expected

    async def find_by_organization(
        self,
        organization_id: OrganizationId,
        request: PageRequest,
    ) -> Page[Flag]:
        query = {"organization_id": organization_id.value, "deleted_at": None}
        try:
            total = await self._col.count_documents(query)
            cursor = (
                self._col.find(query)
                .sort("created_at", 1)
                .skip(request.offset)
                .limit(request.size)
            )
            items = [self._from_document(doc) async for doc in cursor]
        except Exception as exc:
            raise StorageError(self.COLLECTION_NAME, cause=exc) from exc
        return Page(items=items, total=total, page=request.page, size=request.size)

    # ------------------------------------------------------------------
    # (De)serialisation helpers
    # ------------------------------------------------------------------

    def _to_document(self, flag: Flag) -> dict[str, Any]:
        return {
            "_id": flag.id.value,
            "name": flag.name,
            "type": flag.flag_type.value,
            "organization_id": flag.organization_id.value,
            "creator_id": flag.creator_id.value,
            "created_at": flag.created_at,
            "default_value": flag.default_value,
            "rules": [rule.to_dict() for rule in flag.rules],
            "version": flag.version,
            "etag": flag.etag,
            "environments": [
                {"name": env.name, "is_enabled": env.is_enabled}
                for env in flag.environments.values()
            ],
            "revisions": [self._revision_to_document(r) for r in flag.revisions],
            "deleted_at": flag.deleted_at,
        }

    def _revision_to_document(self, revision: Revision) -> dict[str, Any]:
        return {
            "_id": revision.id.value,
            "status": revision.status.value,
            "default_value": revision.default_value,
            "rules": [rule.to_dict() for rule in revision.rules],
            "creator_id": revision.creator_id.value,
            "created_at": revision.created_at,
            "last_revision_id": (
                revision.last_revision_id.value if revision.last_revision_id else None
            ),
        }

    def _from_document(self, doc: dict[str, Any]) -> Flag:
        return Flag(
            FlagId(doc["_id"]),
            name=doc["name"],
            flag_type=FlagType(doc["type"]),
            organization_id=OrganizationId(doc["organization_id"]),
            creator_id=UserId(doc["creator_id"]),
            created_at=doc["created_at"],
            default_value=doc.get("default_value"),
            rules=[Rule.from_dict(r) for r in doc.get("rules", [])],
            revisions=[self._revision_from_document(r) for r in doc.get("revisions", [])],
            environments=[
                Environment(e["name"], bool(e.get("is_enabled", False)))
                for e in doc.get("environments", [])
            ],
            version=doc.get("version", 1),
            deleted_at=doc.get("deleted_at"),
            etag=doc.get("etag", 0),
        )

    def _revision_from_document(self, doc: dict[str, Any]) -> Revision:
        last = doc.get("last_revision_id")
        return Revision(
            id=RevisionId(doc["_id"]),
            status=RevisionStatus(doc["status"]),
            default_value=doc.get("default_value"),
            rules=tuple(Rule.from_dict(r) for r in doc.get("rules", [])),
            creator_id=UserId(doc["creator_id"]),
            created_at=doc["created_at"],
            last_revision_id=RevisionId(last) if last else None,
        )


__all__ = ["MongoFlagRepository", "is_duplicate_key"]
