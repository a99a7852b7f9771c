from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from typing import Iterable, Optional

from ..core.constants import DEFAULT_WEEK_START, MONTHLY_TARGET_HOURS, WEEKLY_TARGET_HOURS
from ..core.enums import Period
from ..shifts.model import Shift
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator

_LAST_INSTANT = timedelta(microseconds=1)


@dataclass(frozen=True)
class PeriodWindow:
    period: Period
    start: datetime
    end: datetime

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class PayrollSummary:
    hours: float
    earnings: float
    count: int


def period_window(now: datetime, period: Period, *, week_start: int = DEFAULT_WEEK_START) -> PeriodWindow:
    """Window containing `now`, bounds inclusive, in now's tzinfo.

    week_start uses datetime.weekday() numbering (Monday=0 ... Sunday=6).
    """
    period = Period(period)
    today = now.date()

    if period == Period.WEEK:
        first_day = today - timedelta(days=(today.weekday() - week_start) % 7)
        start = datetime.combine(first_day, time.min, tzinfo=now.tzinfo)
        return PeriodWindow(period=period, start=start, end=start + timedelta(days=7) - _LAST_INSTANT)

    first_day = today.replace(day=1)
    days = monthrange(today.year, today.month)[1]
    start = datetime.combine(first_day, time.min, tzinfo=now.tzinfo)
    return PeriodWindow(period=period, start=start, end=start + timedelta(days=days) - _LAST_INSTANT)


def included_shifts(shifts: Iterable[Shift], window: PeriodWindow) -> list[Shift]:
    """Closed shifts whose start falls inside the window; open shifts are excluded."""
    return [s for s in shifts if s.end_time is not None and window.contains(s.start_time)]


def aggregate(
    shifts: Iterable[Shift],
    now: datetime,
    period: Period,
    hourly_rate: float,
    *,
    week_start: int = DEFAULT_WEEK_START,
    calculator: Optional[PayrollCalculator] = None,
) -> PayrollSummary:
    """Pure: hours, earnings and count of the shifts inside the period containing `now`."""
    calculator = calculator or StandardPayrollCalculator()
    window = period_window(now, period, week_start=week_start)
    counted = included_shifts(shifts, window)

    hours = calculator.total_minutes(counted) / 60
    return PayrollSummary(hours=hours, earnings=hours * float(hourly_rate), count=len(counted))


def target_hours(period: Period) -> int:
    return WEEKLY_TARGET_HOURS if Period(period) == Period.WEEK else MONTHLY_TARGET_HOURS


def remaining_hours(hours: float, period: Period) -> float:
    """Hours left to the nominal target; never negative."""
    return max(0.0, target_hours(period) - hours)


def format_money(amount: float) -> str:
    return f"{amount:.2f}"
