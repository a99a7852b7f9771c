from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import datetime, timezone, tzinfo
from typing import Optional, Sequence

from ..core.constants import DEFAULT_WEEK_START
from ..core.enums import Period
from ..profiles.model import Profile
from ..shifts.lifecycle import sort_newest_first
from ..shifts.model import Shift
from ..summary.service import SummaryService
from .aggregator import (
    PayrollSummary,
    PeriodWindow,
    aggregate,
    format_money,
    included_shifts,
    period_window,
    remaining_hours,
    target_hours,
)
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator

CSV_FIELDS = ["date", "start", "end", "minutes", "notes"]


@dataclass(frozen=True)
class PayStub:
    window: PeriodWindow
    summary: PayrollSummary
    currency: str
    hourly_rate: float
    target_hours: int
    remaining_hours: float
    rows: list[dict]

    @property
    def period(self) -> Period:
        return self.window.period

    def as_dict(self) -> dict:
        return {
            "period": self.period.value,
            "window_start": self.window.start.isoformat(),
            "window_end": self.window.end.isoformat(),
            "hours": round(self.summary.hours, 2),
            "earnings": format_money(self.summary.earnings),
            "count": self.summary.count,
            "currency": self.currency,
            "hourly_rate": self.hourly_rate,
            "target_hours": self.target_hours,
            "remaining_hours": round(self.remaining_hours, 2),
            "rows": self.rows,
        }


class PayStubService:
    """Pay stub for the period containing `now`, resolved in the user's calendar.

    `tz` is the zone whose calendar defines "this week" and "this month";
    row dates and times are rendered in it as well.
    """

    def __init__(
        self,
        summaries: SummaryService,
        *,
        week_start: int = DEFAULT_WEEK_START,
        tz: Optional[tzinfo] = None,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._summaries = summaries
        self._week_start = int(week_start)
        self._tz = tz or timezone.utc
        self._calculator = calculator or StandardPayrollCalculator()

    def build_from(
        self,
        shifts: Sequence[Shift],
        profile: Profile,
        *,
        period: Period,
        now: datetime,
        tz: Optional[tzinfo] = None,
    ) -> PayStub:
        period = Period(period)
        now = now.astimezone(tz or self._tz)
        window = period_window(now, period, week_start=self._week_start)
        summary = aggregate(
            shifts,
            now,
            period,
            profile.hourly_rate,
            week_start=self._week_start,
            calculator=self._calculator,
        )

        rows = []
        for s in sort_newest_first(included_shifts(shifts, window)):
            start = s.start_time.astimezone(now.tzinfo)
            end = s.end_time.astimezone(now.tzinfo) if s.end_time else None
            rows.append(
                {
                    "date": start.strftime("%Y-%m-%d"),
                    "start": start.strftime("%H:%M"),
                    "end": end.strftime("%H:%M") if end else "-",
                    "minutes": self._calculator.worked_minutes(s),
                    "notes": s.notes or "",
                }
            )

        return PayStub(
            window=window,
            summary=summary,
            currency=profile.currency.value,
            hourly_rate=profile.hourly_rate,
            target_hours=target_hours(period),
            remaining_hours=remaining_hours(summary.hours, period),
            rows=rows,
        )

    def note(self, stub: PayStub) -> str:
        return self._summaries.summarize(
            hours=stub.summary.hours,
            earnings=stub.summary.earnings,
            currency=stub.currency,
            shift_count=stub.summary.count,
            period=stub.period.value,
        )

    @staticmethod
    def to_csv(stub: PayStub) -> str:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, lineterminator="\n")
        writer.writeheader()
        for row in stub.rows:
            writer.writerow(row)
        writer.writerow(
            {
                "date": "TOTAL",
                "start": "",
                "end": "",
                "minutes": int(round(stub.summary.hours * 60)),
                "notes": f"{stub.summary.hours:.2f}h = {stub.currency} {format_money(stub.summary.earnings)}",
            }
        )
        return out.getvalue()
