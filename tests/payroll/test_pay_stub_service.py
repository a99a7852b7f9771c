from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from nannytime.core.constants import FALLBACK_SUMMARY
from nannytime.core.enums import Currency, Period
from nannytime.payroll.service import PayStubService
from nannytime.profiles.model import Profile
from nannytime.shifts.model import Shift
from nannytime.summary.service import SummaryService

UTC = timezone.utc
NEW_YORK = ZoneInfo("America/New_York")
NOW = datetime(2026, 2, 2, 18, 0, tzinfo=UTC)
PROFILE = Profile.default_for("u1")


class RecordingSummarizer:
    def __init__(self):
        self.calls = []

    def summarize(self, **kwargs):
        self.calls.append(kwargs)
        return "Lovely week!"


def _shift(shift_id, start, end, notes=None):
    return Shift(shift_id=shift_id, user_id="u1", start_time=start, end_time=end, notes=notes)


def _service(summarizer=None, **kwargs):
    return PayStubService(SummaryService(summarizer), **kwargs)


def test_build_uses_profile_rate_and_currency():
    profile = Profile(user_id="u1", name="Ana", hourly_rate=20.0, currency=Currency.EUR)
    shifts = [_shift("s1", NOW - timedelta(hours=9), NOW - timedelta(hours=5))]

    stub = _service().build_from(shifts, profile, period=Period.WEEK, now=NOW)

    assert stub.summary.hours == 4.0
    assert stub.summary.earnings == 80.0
    assert stub.currency == "EUR"
    assert stub.target_hours == 40
    assert stub.remaining_hours == 36.0
    assert stub.rows[0]["minutes"] == 240


def test_month_stub_for_no_shifts():
    stub = _service().build_from([], PROFILE, period=Period.MONTH, now=NOW)

    assert stub.hourly_rate == 25.0
    assert stub.summary.count == 0
    assert stub.target_hours == 160
    assert stub.remaining_hours == 160


def test_note_passes_totals_to_summarizer():
    summarizer = RecordingSummarizer()
    service = _service(summarizer)
    stub = service.build_from([_shift("s1", NOW - timedelta(hours=3), NOW)], PROFILE, period=Period.WEEK, now=NOW)

    assert service.note(stub) == "Lovely week!"
    assert summarizer.calls[0]["hours"] == 3.0
    assert summarizer.calls[0]["shift_count"] == 1
    assert summarizer.calls[0]["period"] == "WEEK"


def test_note_without_summarizer_uses_fallback():
    service = _service()
    stub = service.build_from([], PROFILE, period=Period.WEEK, now=NOW)
    assert service.note(stub) == FALLBACK_SUMMARY


def test_csv_has_rows_and_total():
    shifts = [_shift("s1", NOW - timedelta(hours=2), NOW, notes="park")]
    stub = _service().build_from(shifts, PROFILE, period=Period.WEEK, now=NOW)

    lines = PayStubService.to_csv(stub).strip().split("\n")

    assert lines[0] == "date,start,end,minutes,notes"
    assert lines[1] == "2026-02-02,16:00,18:00,120,park"
    assert lines[2].startswith("TOTAL,,,120,")
    assert "USD 50.00" in lines[2]


def _new_york_week():
    # Monday 2 Feb 09:00-17:00 and Saturday 7 Feb 20:00-23:00, New York time
    monday = _shift(
        "s1",
        datetime(2026, 2, 2, 9, 0, tzinfo=NEW_YORK),
        datetime(2026, 2, 2, 17, 0, tzinfo=NEW_YORK),
    )
    saturday = _shift(
        "s2",
        datetime(2026, 2, 7, 20, 0, tzinfo=NEW_YORK),
        datetime(2026, 2, 7, 23, 0, tzinfo=NEW_YORK),
    )
    # Saturday 23:30 in New York is already Sunday in UTC
    now = datetime(2026, 2, 7, 23, 30, tzinfo=NEW_YORK).astimezone(UTC)
    return [monday, saturday], now


def test_week_follows_configured_timezone():
    shifts, now = _new_york_week()

    stub = _service(tz=NEW_YORK).build_from(shifts, PROFILE, period=Period.WEEK, now=now)

    assert stub.summary.count == 2
    assert stub.summary.hours == 11.0
    assert stub.window.start == datetime(2026, 2, 1, tzinfo=NEW_YORK)
    assert [(r["date"], r["start"], r["end"]) for r in stub.rows] == [
        ("2026-02-07", "20:00", "23:00"),
        ("2026-02-02", "09:00", "17:00"),
    ]


def test_per_call_timezone_overrides_default():
    shifts, now = _new_york_week()
    service = _service()

    utc_stub = service.build_from(shifts, PROFILE, period=Period.WEEK, now=now)
    local_stub = service.build_from(shifts, PROFILE, period=Period.WEEK, now=now, tz=NEW_YORK)

    assert utc_stub.summary.count == 1
    assert local_stub.summary.count == 2
