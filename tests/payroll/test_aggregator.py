from __future__ import annotations

import calendar
from datetime import datetime, timedelta, timezone

from nannytime.core.enums import Period
from nannytime.payroll.aggregator import aggregate, period_window, remaining_hours
from nannytime.shifts.model import Shift

UTC = timezone.utc

# Monday, 2 February 2026
NOW = datetime(2026, 2, 2, 18, 0, tzinfo=UTC)


def _closed(shift_id, start, minutes):
    return Shift(shift_id=shift_id, user_id="u1", start_time=start, end_time=start + timedelta(minutes=minutes))


def test_week_window_starts_on_sunday_by_default():
    window = period_window(NOW, Period.WEEK)

    assert window.start == datetime(2026, 2, 1, 0, 0, tzinfo=UTC)
    assert window.end == datetime(2026, 2, 7, 23, 59, 59, 999999, tzinfo=UTC)


def test_week_window_with_monday_start():
    window = period_window(NOW, Period.WEEK, week_start=calendar.MONDAY)
    assert window.start == datetime(2026, 2, 2, 0, 0, tzinfo=UTC)


def test_month_window_covers_calendar_month():
    window = period_window(NOW, Period.MONTH)

    assert window.start == datetime(2026, 2, 1, tzinfo=UTC)
    assert window.end == datetime(2026, 2, 28, 23, 59, 59, 999999, tzinfo=UTC)


def test_eight_hour_monday_shift_at_25_per_hour():
    shifts = [
        Shift(
            shift_id="a",
            user_id="u1",
            start_time=datetime(2026, 2, 2, 9, 0, tzinfo=UTC),
            end_time=datetime(2026, 2, 2, 17, 0, tzinfo=UTC),
        )
    ]

    result = aggregate(shifts, NOW, Period.WEEK, 25)

    assert result.hours == 8.0
    assert result.earnings == 200.0
    assert result.count == 1


def test_open_shift_is_excluded():
    shifts = [Shift(shift_id="a", user_id="u1", start_time=datetime(2026, 2, 2, 9, 0, tzinfo=UTC))]

    result = aggregate(shifts, NOW, Period.WEEK, 25)

    assert result.hours == 0
    assert result.count == 0
    assert result.earnings == 0


def test_two_ninety_minute_shifts_make_three_hours():
    shifts = [
        _closed("a", datetime(2026, 2, 2, 8, 0, tzinfo=UTC), 90),
        _closed("b", datetime(2026, 2, 2, 13, 0, tzinfo=UTC), 90),
    ]

    result = aggregate(shifts, NOW, Period.WEEK, 10)

    assert result.hours == 3.0
    assert result.earnings == 30.0
    assert result.count == 2


def test_fractional_hours_are_kept():
    result = aggregate([_closed("a", datetime(2026, 2, 2, 8, 0, tzinfo=UTC), 90)], NOW, Period.WEEK, 20)
    assert result.hours == 1.5
    assert result.earnings == 30.0


def test_partial_minutes_are_truncated():
    start = datetime(2026, 2, 2, 8, 0, tzinfo=UTC)
    shift = Shift(shift_id="a", user_id="u1", start_time=start, end_time=start + timedelta(minutes=59, seconds=59))

    assert aggregate([shift], NOW, Period.WEEK, 60).hours == 59 / 60


def test_shift_starting_at_lower_bound_is_included():
    window = period_window(NOW, Period.WEEK)
    result = aggregate([_closed("a", window.start, 60)], NOW, Period.WEEK, 10)
    assert result.count == 1


def test_shift_starting_just_before_lower_bound_is_excluded():
    window = period_window(NOW, Period.WEEK)
    result = aggregate([_closed("a", window.start - timedelta(minutes=1), 120)], NOW, Period.WEEK, 10)
    assert result.count == 0
    assert result.hours == 0


def test_shift_starting_at_upper_bound_is_included():
    window = period_window(NOW, Period.MONTH)
    result = aggregate([_closed("a", window.end, 30)], NOW, Period.MONTH, 10)
    assert result.count == 1


def test_month_includes_shifts_outside_current_week():
    shifts = [
        _closed("a", datetime(2026, 2, 20, 9, 0, tzinfo=UTC), 60),
        _closed("b", datetime(2026, 2, 2, 9, 0, tzinfo=UTC), 60),
        _closed("c", datetime(2026, 1, 30, 9, 0, tzinfo=UTC), 60),
    ]

    assert aggregate(shifts, NOW, Period.WEEK, 10).count == 1
    assert aggregate(shifts, NOW, Period.MONTH, 10).count == 2


def test_aggregate_is_pure_and_idempotent():
    shifts = [
        _closed("a", datetime(2026, 2, 2, 8, 0, tzinfo=UTC), 45),
        Shift(shift_id="b", user_id="u1", start_time=datetime(2026, 2, 3, 8, 0, tzinfo=UTC)),
    ]
    snapshot = list(shifts)

    first = aggregate(shifts, NOW, Period.WEEK, 17.5)
    second = aggregate(shifts, NOW, Period.WEEK, 17.5)

    assert first == second
    assert shifts == snapshot


def test_remaining_hours_clamps_at_zero():
    assert remaining_hours(45, Period.WEEK) == 0
    assert remaining_hours(30, Period.WEEK) == 10
    assert remaining_hours(170, Period.MONTH) == 0
    assert remaining_hours(100, Period.MONTH) == 60
