from __future__ import annotations

from ...common.datetime_utils import whole_minutes_between
from ...shifts.model import Shift
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: whole minutes of (end - start), open shifts and inverted ranges count 0."""

    def worked_minutes(self, shift: Shift) -> int:
        if shift.end_time is None:
            return 0
        return max(whole_minutes_between(shift.start_time, shift.end_time), 0)
