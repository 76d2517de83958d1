"""Property tests: lifecycle invariants hold under arbitrary operation sequences."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from togglekit.domain import EnvironmentToggleManager, RevisionLifecycleManager, RevisionStatus
from togglekit.kernel.errors import InvalidStateTransitionError, NoActiveRevisionError
from togglekit.kernel.types import UserId
from togglekit.testing import FakeClock, environment_names, lifecycle_operations, make_flag, rule_strategy

ACTOR = UserId("actor")


def _apply(manager: RevisionLifecycleManager, flag, step: tuple[str, int]) -> str | None:
    """Run one step; return the operation name if it changed the version."""
    op, index = step
    if op == "draft":
        manager.create_draft(flag, f"value-{index}", [], ACTOR)
    elif op == "approve" and flag.revisions:
        target = flag.revisions[index % len(flag.revisions)]
        try:
            manager.approve(flag, target.id, ACTOR)
        except InvalidStateTransitionError:
            assert target.status is not RevisionStatus.DRAFT
        else:
            return op
    elif op == "rollback":
        try:
            manager.rollback(flag)
        except NoActiveRevisionError:
            assert flag.live_revision is None
        else:
            return op
    return None


@settings(max_examples=200, deadline=None)
@given(lifecycle_operations())
def test_at_most_one_live_revision(steps) -> None:
    manager = RevisionLifecycleManager(FakeClock())
    flag = make_flag()
    for step in steps:
        _apply(manager, flag, step)
        assert len(flag.live_revisions()) <= 1
        flag.check_invariants()


@settings(max_examples=200, deadline=None)
@given(lifecycle_operations())
def test_backlinks_only_point_at_archived_revisions(steps) -> None:
    manager = RevisionLifecycleManager(FakeClock())
    flag = make_flag()
    for step in steps:
        _apply(manager, flag, step)
    for revision in flag.revisions:
        if revision.status is RevisionStatus.DRAFT:
            continue
        if revision.last_revision_id is not None and revision.is_live:
            target = flag.find_revision(revision.last_revision_id)
            assert target is not None
            assert target.status is RevisionStatus.ARCHIVED


@settings(max_examples=100, deadline=None)
@given(lifecycle_operations(max_size=15))
def test_approve_then_rollback_is_inverse(steps) -> None:
    manager = RevisionLifecycleManager(FakeClock())
    flag = make_flag()
    for step in steps:
        _apply(manager, flag, step)

    draft = manager.create_draft(flag, "candidate", [], ACTOR)
    before_live = flag.live_revision
    before_version = flag.version
    before = [(r.id, r.status, r.last_revision_id) for r in flag.revisions]

    manager.approve(flag, draft.id, ACTOR)
    manager.rollback(flag)

    assert flag.live_revision is before_live
    assert flag.version == before_version
    assert [(r.id, r.status, r.last_revision_id) for r in flag.revisions] == before


@settings(max_examples=100, deadline=None)
@given(lifecycle_operations())
def test_version_tracks_approvals_minus_rollbacks(steps) -> None:
    manager = RevisionLifecycleManager(FakeClock())
    flag = make_flag()
    applied = [_apply(manager, flag, step) for step in steps]
    assert flag.version == 1 + applied.count("approve") - applied.count("rollback")


@given(rule_strategy())
def test_rules_are_carried_verbatim(rule) -> None:
    manager = RevisionLifecycleManager(FakeClock())
    flag = make_flag()
    revision = manager.create_draft(flag, "v", [rule], ACTOR)
    manager.approve(flag, revision.id, ACTOR)
    assert revision.rules == (rule,)


@given(environment_names(), st.data())
def test_double_toggle_is_identity(names, data) -> None:
    initial = {name: data.draw(st.booleans()) for name in names}
    flag = make_flag(environments=initial)
    target = data.draw(st.sampled_from(names + ["missing-env"]))
    toggles = EnvironmentToggleManager()
    toggles.toggle(flag, target)
    toggles.toggle(flag, target)
    assert flag.environment_states() == initial
