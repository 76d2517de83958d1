"""Revision lifecycle — create drafts, approve them, roll back one step.

Every method is a synchronous in-memory transformation of the flag passed
in.  Nothing here touches storage; the caller persists the aggregate.

Revision moves::

    Draft ──approve──▶ Live ──approve (displaced)──▶ Archived
      ▲                 │                              │
      └────rollback─────┘◀──────rollback (restored)────┘
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from togglekit.domain.flag import Flag
from togglekit.domain.revision import Revision, RevisionStatus, Rule
from togglekit.kernel.errors import (
    InvalidStateTransitionError,
    InvariantViolationError,
    NoActiveRevisionError,
    NotFoundError,
)
from togglekit.kernel.time import Clock, SystemClock
from togglekit.kernel.types import RevisionId, UserId
from togglekit.observability.logging import get_logger

logger = get_logger(__name__)


class RevisionLifecycleManager:
    """Owns the Draft/Live/Archived moves of one flag's revisions.

    The only state held is the clock used to stamp new drafts, so a single
    instance can serve any number of flags concurrently.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()

    def create_draft(
        self,
        flag: Flag,
        default_value: Any,
        rules: Iterable[Rule],
        creator_id: UserId,
    ) -> Revision:
        """Append a new ``Draft`` revision; no other revision changes."""
        revision = Revision(
            id=RevisionId.generate(),
            default_value=default_value,
            rules=tuple(rules),
            creator_id=creator_id,
            created_at=self._clock.now(),
        )
        flag.revisions.append(revision)
        logger.debug(
            "revision.drafted",
            flag_id=str(flag.id),
            revision_id=str(revision.id),
            creator_id=str(creator_id),
        )
        return revision

    def approve(self, flag: Flag, revision_id: RevisionId, approver_id: UserId) -> Revision:
        """Promote a draft to Live, archiving the revision it displaces.

        Raises:
            InvalidStateTransitionError: *revision_id* is unknown or not a draft.
                The flag is left untouched.
        """
        target = flag.find_revision(revision_id)
        if target is None:
            raise InvalidStateTransitionError(
                revision_id,
                None,
                RevisionStatus.LIVE,
                message=f"Revision '{revision_id}' does not exist on flag '{flag.id}'",
                cause=NotFoundError("Revision", str(revision_id)),
            )
        if target.status is not RevisionStatus.DRAFT:
            raise InvalidStateTransitionError(revision_id, target.status, RevisionStatus.LIVE)

        previous_live_id: RevisionId | None = None
        archived = 0
        for revision in flag.revisions:
            if revision.status is RevisionStatus.LIVE:
                revision.transition_to(RevisionStatus.ARCHIVED)
                previous_live_id = revision.id
                archived += 1
        if archived > 1:
            logger.warning(
                "revision.multiple_live",
                flag_id=str(flag.id),
                archived=archived,
                backlink=str(previous_live_id),
                invariant_violation=True,
            )

        target.transition_to(RevisionStatus.LIVE)
        target.last_revision_id = previous_live_id
        flag.version += 1
        flag.check_invariants()

        logger.info(
            "revision.approved",
            flag_id=str(flag.id),
            revision_id=str(target.id),
            previous_revision_id=str(previous_live_id) if previous_live_id else None,
            approver_id=str(approver_id),
            version=flag.version,
        )
        return target

    def rollback(self, flag: Flag) -> Revision | None:
        """Undo the most recent approval.

        The Live revision goes back to ``Draft`` and loses its backlink; the
        revision it displaced (if any) becomes Live again.  ``version`` drops
        by one either way and is not clamped.

        Returns:
            The revision that is Live afterwards, or ``None`` when the undone
            approval had no predecessor.

        Raises:
            NoActiveRevisionError: nothing is Live.
            InvariantViolationError: more than one revision is Live.
            InvalidStateTransitionError: the backlink target is missing or not
                archived.  The flag is left untouched.
        """
        live = flag.live_revisions()
        if not live:
            raise NoActiveRevisionError(flag.id)
        if len(live) > 1:
            raise InvariantViolationError(
                f"Flag '{flag.id}' has {len(live)} live revisions; refusing to roll back",
                detail={"flag_id": str(flag.id), "live": [str(r.id) for r in live]},
            )

        current = live[0]
        target_id = current.last_revision_id
        restored: Revision | None = None
        if target_id is not None:
            restored = flag.find_revision(target_id)
            if restored is None or restored.status is not RevisionStatus.ARCHIVED:
                raise InvalidStateTransitionError(
                    target_id,
                    restored.status if restored is not None else None,
                    RevisionStatus.LIVE,
                    message=(
                        f"Revision '{current.id}' links back to '{target_id}', "
                        "which is not an archived revision"
                    ),
                )

        current.transition_to(RevisionStatus.DRAFT)
        current.last_revision_id = None
        if restored is not None:
            restored.transition_to(RevisionStatus.LIVE)
        flag.version -= 1
        flag.check_invariants()

        logger.info(
            "revision.rolled_back",
            flag_id=str(flag.id),
            revision_id=str(current.id),
            restored_revision_id=str(restored.id) if restored else None,
            version=flag.version,
        )
        return restored


__all__ = ["RevisionLifecycleManager"]
