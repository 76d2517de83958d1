"""Application flags – FeatureFlagService use cases.

Each public coroutine is one unit of work::

    load flag ─▶ transform in memory ─▶ repository.save ─▶ audit.append

The transformation is delegated to the domain managers and never awaits.
Repository errors propagate unchanged.  An audit failure after a
successful save is logged and re-raised; the saved mutation stays.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from togglekit.application.audit import AuditEvent, AuditEventKind, AuditRecorder
from togglekit.application.flags.repository import FlagRepository
from togglekit.application.pagination import Page, PageRequest
from togglekit.config.settings import TogglekitSettings
from togglekit.domain import (
    Environment,
    EnvironmentToggleManager,
    Flag,
    FlagType,
    Revision,
    RevisionLifecycleManager,
    Rule,
)
from togglekit.kernel.errors import NotFoundError, ValidationError
from togglekit.kernel.time import Clock, SystemClock
from togglekit.kernel.types import FlagId, OrganizationId, RevisionId, UserId
from togglekit.observability.logging import get_logger

logger = get_logger(__name__)


class FeatureFlagService:
    """Entry point for the transport layer: one method per request."""

    def __init__(
        self,
        repository: FlagRepository,
        audit: AuditRecorder,
        *,
        settings: TogglekitSettings | None = None,
        clock: Clock | None = None,
        lifecycle: RevisionLifecycleManager | None = None,
        toggles: EnvironmentToggleManager | None = None,
    ) -> None:
        self._repository = repository
        self._audit = audit
        self._settings = settings or TogglekitSettings()
        self._clock = clock or SystemClock()
        self._lifecycle = lifecycle or RevisionLifecycleManager(self._clock)
        self._toggles = toggles or EnvironmentToggleManager()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def create_flag(
        self,
        name: str,
        flag_type: FlagType | str,
        default_value: Any,
        rules: Iterable[Rule],
        environments: Iterable[str],
        organization_id: OrganizationId,
        creator_id: UserId,
    ) -> Flag:
        """Create a flag at version 1 with no revisions and every environment off."""
        env_names = list(environments)
        errors = _validate_new_flag(name, flag_type, env_names)
        if errors:
            raise ValidationError("Invalid feature flag", errors=errors)

        flag = Flag(
            FlagId.generate(),
            name=name.strip(),
            flag_type=FlagType(flag_type),
            organization_id=organization_id,
            creator_id=creator_id,
            created_at=self._clock.now(),
            default_value=default_value,
            rules=rules,
            environments=[Environment(n) for n in env_names],
        )
        await self._repository.add(flag)
        logger.info(
            "flag.created",
            flag_id=str(flag.id),
            organization_id=str(organization_id),
            environments=env_names,
        )
        await self._record(flag, creator_id, AuditEventKind.CREATED)
        return flag

    async def create_draft_revision(
        self,
        flag_id: FlagId,
        default_value: Any,
        rules: Iterable[Rule],
        actor_id: UserId,
    ) -> Revision:
        flag = await self._load(flag_id)
        revision = self._lifecycle.create_draft(flag, default_value, rules, actor_id)
        await self._repository.save(flag)
        await self._record(flag, actor_id, AuditEventKind.REVISION_CREATED)
        return revision

    async def approve_revision(
        self,
        flag_id: FlagId,
        revision_id: RevisionId,
        actor_id: UserId,
    ) -> Flag:
        flag = await self._load(flag_id)
        self._lifecycle.approve(flag, revision_id, actor_id)
        await self._repository.save(flag)
        await self._record(flag, actor_id, AuditEventKind.REVISION_APPROVED)
        return flag

    async def rollback(self, flag_id: FlagId, actor_id: UserId) -> Flag:
        flag = await self._load(flag_id)
        self._lifecycle.rollback(flag)
        await self._repository.save(flag)
        await self._record(flag, actor_id, AuditEventKind.ROLLBACK)
        return flag

    async def toggle_environment(
        self,
        flag_id: FlagId,
        environment_name: str,
        actor_id: UserId,
    ) -> Flag:
        """Flip one environment.

        An unknown name is a no-op that is still saved and audited, unless
        ``strict_toggle`` is set, in which case ``NotFoundError`` is raised.
        """
        flag = await self._load(flag_id)
        if self._settings.strict_toggle and environment_name not in flag.environments:
            raise NotFoundError("Environment", environment_name)
        self._toggles.toggle(flag, environment_name)
        await self._repository.save(flag)
        await self._record(flag, actor_id, AuditEventKind.TOGGLE, environment=environment_name)
        return flag

    async def soft_delete(self, flag_id: FlagId, actor_id: UserId) -> Flag:
        """Mark the flag deleted; it stays stored but is hidden from every operation."""
        flag = await self._load(flag_id)
        flag.mark_deleted(self._clock.now())
        await self._repository.save(flag)
        logger.info("flag.soft_deleted", flag_id=str(flag.id), actor_id=str(actor_id))
        await self._record(flag, actor_id, AuditEventKind.DELETED)
        return flag

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def get_flag(self, flag_id: FlagId) -> Flag:
        return await self._load(flag_id)

    async def list_flags(
        self,
        organization_id: OrganizationId,
        request: PageRequest | None = None,
    ) -> Page[Flag]:
        request = request or PageRequest(size=self._settings.default_page_size)
        return await self._repository.find_by_organization(organization_id, request)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, flag_id: FlagId) -> Flag:
        flag = await self._repository.get_or_raise(flag_id)
        if flag.is_deleted:
            raise NotFoundError("Flag", flag_id.value)
        return flag

    async def _record(
        self,
        flag: Flag,
        actor_id: UserId,
        kind: AuditEventKind,
        *,
        environment: str | None = None,
    ) -> None:
        event = AuditEvent(
            flag_id=flag.id,
            actor_id=actor_id,
            kind=kind,
            environment=environment,
            occurred_at=self._clock.now(),
        )
        try:
            await self._audit.append(event)
        except Exception:
            logger.error(
                "audit.append_failed",
                flag_id=str(flag.id),
                action=event.action,
                actor_id=str(actor_id),
                exc_info=True,
            )
            raise


def _validate_new_flag(
    name: str,
    flag_type: FlagType | str,
    environments: list[str],
) -> list[dict[str, Any]]:
    errors: list[dict[str, Any]] = []
    if not name or not name.strip():
        errors.append({"field": "name", "message": "must not be empty"})
    try:
        FlagType(flag_type)
    except ValueError:
        allowed = ", ".join(t.value for t in FlagType)
        errors.append({"field": "type", "message": f"must be one of {allowed}"})
    if not environments:
        errors.append({"field": "environments", "message": "at least one environment is required"})
    seen: set[str] = set()
    for env in environments:
        if not env:
            errors.append({"field": "environments", "message": "names must not be empty"})
        elif env in seen:
            errors.append({"field": "environments", "message": f"duplicate name {env!r}"})
        seen.add(env)
    return errors


__all__ = ["FeatureFlagService"]
