"""Unit tests for FeatureFlagService: load, transform, save, audit."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from togglekit.application.audit import AuditEventKind, InMemoryAuditRecorder
from togglekit.application.flags import FeatureFlagService, InMemoryFlagRepository
from togglekit.application.pagination import PageRequest
from togglekit.config import TogglekitSettings
from togglekit.domain import FlagType, RevisionStatus, Rule
from togglekit.kernel.errors import (
    ConflictError,
    InvalidStateTransitionError,
    NoActiveRevisionError,
    NotFoundError,
    StorageError,
    ValidationError,
)
from togglekit.kernel.types import FlagId, OrganizationId, RevisionId, UserId
from togglekit.testing import FailingAuditRecorder, FakeClock

ORG = OrganizationId("org-1")
ALICE = UserId("alice")
BOB = UserId("bob")


def _run(coro: Any) -> Any:
    return asyncio.run(coro)


def _service(
    audit: Any = None,
    settings: TogglekitSettings | None = None,
) -> tuple[FeatureFlagService, InMemoryFlagRepository, Any]:
    repo = InMemoryFlagRepository()
    audit = audit if audit is not None else InMemoryAuditRecorder()
    service = FeatureFlagService(repo, audit, settings=settings, clock=FakeClock())
    return service, repo, audit


async def _create(service: FeatureFlagService, **overrides: Any):
    kwargs: dict[str, Any] = {
        "name": "new-checkout",
        "flag_type": FlagType.BOOLEAN,
        "default_value": "false",
        "rules": [Rule({"country": "BR"}, "true")],
        "environments": ["prod", "staging"],
        "organization_id": ORG,
        "creator_id": ALICE,
    }
    kwargs.update(overrides)
    return await service.create_flag(**kwargs)


# ---------------------------------------------------------------------------
# create_flag
# ---------------------------------------------------------------------------


class TestCreateFlag:
    def test_new_flag_starts_at_version_one_with_no_revisions(self) -> None:
        service, repo, audit = _service()

        async def run() -> None:
            flag = await _create(service)
            stored = await repo.get_or_raise(flag.id)
            assert stored.version == 1
            assert stored.revisions == []
            assert stored.environment_states() == {"prod": False, "staging": False}
            assert stored.flag_type is FlagType.BOOLEAN
            assert stored.rules == (Rule({"country": "BR"}, "true"),)
            assert stored.created_at == FakeClock().now()
            events = await audit.list_for_flag(flag.id)
            assert [e.kind for e in events] == [AuditEventKind.CREATED]
            assert events[0].actor_id == ALICE

        _run(run())

    def test_accepts_type_as_string(self) -> None:
        service, _, _ = _service()
        flag = _run(_create(service, flag_type="json"))
        assert flag.flag_type is FlagType.JSON

    @pytest.mark.parametrize(
        ("overrides", "field"),
        [
            ({"name": "  "}, "name"),
            ({"flag_type": "color"}, "type"),
            ({"environments": []}, "environments"),
            ({"environments": ["prod", "prod"]}, "environments"),
            ({"environments": [""]}, "environments"),
        ],
    )
    def test_invalid_input_raises_validation_error(self, overrides, field) -> None:
        service, _, audit = _service()
        with pytest.raises(ValidationError) as exc_info:
            _run(_create(service, **overrides))
        assert field in {e["field"] for e in exc_info.value.errors}
        assert audit.all() == []


# ---------------------------------------------------------------------------
# Lifecycle through the service
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_full_walkthrough_is_persisted_and_audited(self) -> None:
        service, repo, audit = _service()

        async def run() -> None:
            flag = await _create(service)
            r1 = await service.create_draft_revision(flag.id, "v1", [], ALICE)
            await service.approve_revision(flag.id, r1.id, BOB)
            r2 = await service.create_draft_revision(flag.id, "v2", [], ALICE)
            approved = await service.approve_revision(flag.id, r2.id, BOB)
            assert approved.version == 3

            rolled = await service.rollback(flag.id, BOB)
            stored = await repo.get_or_raise(flag.id)
            for loaded in (rolled, stored):
                first, second = loaded.revisions
                assert first.status is RevisionStatus.LIVE
                assert second.status is RevisionStatus.DRAFT
                assert second.last_revision_id is None
                assert loaded.version == 2

            kinds = [e.kind for e in await audit.list_for_flag(flag.id)]
            assert kinds == [
                AuditEventKind.CREATED,
                AuditEventKind.REVISION_CREATED,
                AuditEventKind.REVISION_APPROVED,
                AuditEventKind.REVISION_CREATED,
                AuditEventKind.REVISION_APPROVED,
                AuditEventKind.ROLLBACK,
            ]

        _run(run())

    def test_draft_returns_revision_and_keeps_flag_version(self) -> None:
        service, repo, _ = _service()

        async def run() -> None:
            flag = await _create(service)
            revision = await service.create_draft_revision(flag.id, "v1", [], ALICE)
            stored = await repo.get_or_raise(flag.id)
            assert stored.find_revision(revision.id) is not None
            assert stored.version == 1

        _run(run())

    def test_failed_approve_is_not_saved_or_audited(self) -> None:
        service, repo, audit = _service()

        async def run() -> None:
            flag = await _create(service)
            with pytest.raises(InvalidStateTransitionError):
                await service.approve_revision(flag.id, RevisionId("nope"), BOB)
            stored = await repo.get_or_raise(flag.id)
            assert stored.version == 1
            assert stored.etag == 0
            assert len(await audit.list_for_flag(flag.id)) == 1

        _run(run())

    def test_rollback_without_live_revision(self) -> None:
        service, _, _ = _service()

        async def run() -> None:
            flag = await _create(service)
            with pytest.raises(NoActiveRevisionError):
                await service.rollback(flag.id, BOB)

        _run(run())

    def test_unknown_flag_is_not_found(self) -> None:
        service, _, _ = _service()
        with pytest.raises(NotFoundError):
            _run(service.create_draft_revision(FlagId("missing"), "v", [], ALICE))


# ---------------------------------------------------------------------------
# Toggle
# ---------------------------------------------------------------------------


class TestToggleEnvironment:
    def test_toggle_flips_and_audits_environment(self) -> None:
        service, repo, audit = _service()

        async def run() -> None:
            flag = await _create(service)
            await service.toggle_environment(flag.id, "prod", BOB)
            stored = await repo.get_or_raise(flag.id)
            assert stored.environment_states() == {"prod": True, "staging": False}
            last = (await audit.list_for_flag(flag.id))[-1]
            assert last.kind is AuditEventKind.TOGGLE
            assert last.environment == "prod"
            assert last.action == "toggle(prod)"

        _run(run())

    def test_unknown_environment_is_a_no_op(self) -> None:
        service, repo, _ = _service()

        async def run() -> None:
            flag = await _create(service)
            await service.toggle_environment(flag.id, "qa", BOB)
            stored = await repo.get_or_raise(flag.id)
            assert stored.environment_states() == {"prod": False, "staging": False}

        _run(run())

    def test_strict_mode_rejects_unknown_environment(self) -> None:
        service, repo, audit = _service(settings=TogglekitSettings(strict_toggle=True))

        async def run() -> None:
            flag = await _create(service)
            with pytest.raises(NotFoundError):
                await service.toggle_environment(flag.id, "qa", BOB)
            assert len(await audit.list_for_flag(flag.id)) == 1

        _run(run())


# ---------------------------------------------------------------------------
# Soft delete and queries
# ---------------------------------------------------------------------------


class TestSoftDelete:
    def test_deleted_flag_is_hidden_but_stored(self) -> None:
        service, repo, audit = _service()

        async def run() -> None:
            flag = await _create(service)
            deleted = await service.soft_delete(flag.id, BOB)
            assert deleted.deleted_at == FakeClock().now()
            stored = await repo.get_or_raise(flag.id)
            assert stored.is_deleted
            with pytest.raises(NotFoundError):
                await service.get_flag(flag.id)
            with pytest.raises(NotFoundError):
                await service.toggle_environment(flag.id, "prod", BOB)
            page = await service.list_flags(ORG)
            assert page.items == []
            assert (await audit.list_for_flag(flag.id))[-1].kind is AuditEventKind.DELETED

        _run(run())


class TestAuditTimestamps:
    def test_events_are_stamped_by_the_service_clock(self) -> None:
        repo = InMemoryFlagRepository()
        audit = InMemoryAuditRecorder()
        clock = FakeClock()
        service = FeatureFlagService(repo, audit, clock=clock)

        async def run() -> None:
            flag = await _create(service)
            clock.advance(hours=1)
            deleted = await service.soft_delete(flag.id, BOB)
            created_event, deleted_event = await audit.list_for_flag(flag.id)
            assert created_event.occurred_at == flag.created_at
            assert deleted_event.occurred_at == deleted.deleted_at
            assert deleted_event.occurred_at == clock.now()

        _run(run())


class TestListFlags:
    def test_lists_only_organization_flags_paginated(self) -> None:
        service, _, _ = _service()

        async def run() -> None:
            for i in range(3):
                await _create(service, name=f"flag-{i}")
            await _create(service, name="other", organization_id=OrganizationId("org-2"))
            page = await service.list_flags(ORG, PageRequest(page=1, size=2))
            assert page.total == 3
            assert len(page.items) == 2
            assert page.has_next
            second = await service.list_flags(ORG, PageRequest(page=2, size=2))
            assert len(second.items) == 1

        _run(run())

    def test_default_page_size_comes_from_settings(self) -> None:
        service, _, _ = _service(settings=TogglekitSettings(default_page_size=5))
        page = _run(service.list_flags(ORG))
        assert page.size == 5


# ---------------------------------------------------------------------------
# Failure policy
# ---------------------------------------------------------------------------


class TestFailurePolicy:
    def test_audit_failure_surfaces_but_keeps_mutation(self) -> None:
        repo = InMemoryFlagRepository()
        ok_service = FeatureFlagService(repo, InMemoryAuditRecorder(), clock=FakeClock())
        failing = FailingAuditRecorder()
        broken_service = FeatureFlagService(repo, failing, clock=FakeClock())

        async def run() -> None:
            flag = await _create(ok_service)
            with pytest.raises(StorageError):
                await broken_service.toggle_environment(flag.id, "prod", BOB)
            stored = await repo.get_or_raise(flag.id)
            assert stored.environment_states()["prod"] is True
            assert [e.kind for e in failing.attempts] == [AuditEventKind.TOGGLE]

        _run(run())

    def test_concurrent_writers_conflict(self) -> None:
        service, repo, _ = _service()

        async def run() -> None:
            flag = await _create(service)
            r1 = await service.create_draft_revision(flag.id, "v1", [], ALICE)

            first = await repo.get_or_raise(flag.id)
            second = await repo.get_or_raise(flag.id)
            service._lifecycle.approve(first, r1.id, BOB)
            await repo.save(first)
            service._lifecycle.approve(second, r1.id, BOB)
            with pytest.raises(ConflictError):
                await repo.save(second)

            stored = await repo.get_or_raise(flag.id)
            assert stored.version == 2

        _run(run())
