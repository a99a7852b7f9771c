from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from nannytime.core.exceptions import (
    AlreadyClosedError,
    NotAuthenticatedError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from nannytime.shifts.lifecycle import ShiftLifecycleManager, find_active
from nannytime.shifts.model import Shift

UTC = timezone.utc
NOW = datetime(2026, 2, 2, 9, 0, tzinfo=UTC)


@pytest.fixture
def manager(shifts_repo):
    return ShiftLifecycleManager(shifts_repo)


def test_clock_in_requires_a_session(manager):
    with pytest.raises(NotAuthenticatedError):
        manager.clock_in(None, now=NOW)


def test_clock_in_then_find_active_returns_new_shift(manager):
    shift = manager.clock_in("u1", now=NOW)

    assert shift.start_time == NOW
    assert shift.end_time is None
    assert find_active(manager.list_shifts("u1")) == shift


def test_clock_out_closes_the_shift(manager):
    shift = manager.clock_in("u1", now=NOW)
    later = NOW + timedelta(hours=8)

    closed = manager.clock_out("u1", shift.shift_id, now=later)

    assert closed.end_time == later
    refreshed = manager.list_shifts("u1")
    assert refreshed[0].end_time == later
    assert find_active(refreshed) is None


def test_clock_out_unknown_shift_raises_not_found(manager):
    with pytest.raises(NotFoundError):
        manager.clock_out("u1", "missing", now=NOW)


def test_clock_out_other_users_shift_raises_not_found(manager):
    shift = manager.clock_in("u2", now=NOW)
    with pytest.raises(NotFoundError):
        manager.clock_out("u1", shift.shift_id, now=NOW)


def test_clock_out_twice_is_rejected(manager):
    shift = manager.clock_in("u1", now=NOW)
    manager.clock_out("u1", shift.shift_id, now=NOW + timedelta(hours=1))

    with pytest.raises(AlreadyClosedError):
        manager.clock_out("u1", shift.shift_id, now=NOW + timedelta(hours=2))


def test_second_clock_in_is_rejected_when_single_active_enforced(manager):
    manager.clock_in("u1", now=NOW)
    with pytest.raises(ValidationError):
        manager.clock_in("u1", now=NOW + timedelta(minutes=5))
    assert len(manager.list_shifts("u1")) == 1


def test_second_clock_in_is_permitted_when_enforcement_disabled(shifts_repo):
    manager = ShiftLifecycleManager(shifts_repo, enforce_single_active=False)
    manager.clock_in("u1", now=NOW)
    second = manager.clock_in("u1", now=NOW + timedelta(minutes=5))

    shifts = manager.list_shifts("u1")
    assert len([s for s in shifts if s.is_active]) == 2
    assert find_active(shifts) == second


def test_manual_add_creates_zero_duration_closed_shift(manager):
    manager.clock_in("u1", now=NOW - timedelta(hours=1))
    added = manager.manual_add("u1", now=NOW)

    assert added.start_time == added.end_time == NOW
    active = find_active(manager.list_shifts("u1"))
    assert active is not None and active.shift_id != added.shift_id


def test_manual_add_requires_a_session(manager):
    with pytest.raises(NotAuthenticatedError):
        manager.manual_add("", now=NOW)


def test_edit_shift_replaces_times_and_notes(manager):
    added = manager.manual_add("u1", now=NOW)
    edited = Shift(
        shift_id=added.shift_id,
        user_id="u1",
        start_time=NOW - timedelta(hours=3),
        end_time=NOW - timedelta(hours=1),
        notes="  school pickup  ",
    )

    result = manager.edit_shift("u1", edited)

    assert result.notes == "school pickup"
    stored = manager.list_shifts("u1")[0]
    assert stored.start_time == NOW - timedelta(hours=3)
    assert stored.end_time == NOW - timedelta(hours=1)


def test_edit_shift_can_reopen_a_shift(manager):
    added = manager.manual_add("u1", now=NOW)
    manager.edit_shift("u1", Shift(shift_id=added.shift_id, user_id="u1", start_time=NOW, end_time=None))

    assert find_active(manager.list_shifts("u1")).shift_id == added.shift_id


def test_edit_reopen_rejected_when_another_shift_is_open(manager):
    manager.clock_in("u1", now=NOW)
    added = manager.manual_add("u1", now=NOW)

    with pytest.raises(ValidationError):
        manager.edit_shift("u1", Shift(shift_id=added.shift_id, user_id="u1", start_time=NOW, end_time=None))


def test_edit_inverted_range_rejected_by_default(manager):
    added = manager.manual_add("u1", now=NOW)
    inverted = Shift(shift_id=added.shift_id, user_id="u1", start_time=NOW, end_time=NOW - timedelta(hours=1))

    with pytest.raises(ValidationError):
        manager.edit_shift("u1", inverted)


def test_edit_inverted_range_permitted_when_allowed(shifts_repo):
    manager = ShiftLifecycleManager(shifts_repo, allow_inverted_range=True)
    added = manager.manual_add("u1", now=NOW)
    inverted = Shift(shift_id=added.shift_id, user_id="u1", start_time=NOW, end_time=NOW - timedelta(hours=1))

    manager.edit_shift("u1", inverted)

    assert shifts_repo.get(added.shift_id).end_time == NOW - timedelta(hours=1)


def test_edit_unknown_shift_raises_not_found(manager):
    with pytest.raises(NotFoundError):
        manager.edit_shift("u1", Shift(shift_id="nope", user_id="u1", start_time=NOW, end_time=NOW))


def test_delete_shift_removes_record(manager):
    shift = manager.clock_in("u1", now=NOW)
    manager.delete_shift("u1", shift.shift_id)

    assert manager.list_shifts("u1") == []


def test_delete_unknown_shift_raises_not_found(manager):
    with pytest.raises(NotFoundError):
        manager.delete_shift("u1", "missing")


def test_list_shifts_newest_first(manager):
    manager.manual_add("u1", now=NOW - timedelta(days=2))
    manager.manual_add("u1", now=NOW)
    manager.manual_add("u1", now=NOW - timedelta(days=1))

    starts = [s.start_time for s in manager.list_shifts("u1")]
    assert starts == sorted(starts, reverse=True)


def test_list_shifts_degrades_to_empty_on_store_error(manager, shifts_repo):
    manager.manual_add("u1", now=NOW)
    shifts_repo.fail_reads = True

    assert manager.list_shifts("u1") == []


def test_write_errors_propagate(manager, shifts_repo):
    shifts_repo.fail_writes = True
    with pytest.raises(StoreError):
        manager.manual_add("u1", now=NOW)
