from __future__ import annotations

from abc import ABC, abstractmethod

from ...shifts.model import Shift


class PayrollCalculator(ABC):
    """Decides how many billable minutes a shift contributes to a pay period."""

    @abstractmethod
    def worked_minutes(self, shift: Shift) -> int:
        """Whole minutes, never negative; an open shift counts as 0."""
        raise NotImplementedError

    def total_minutes(self, shifts) -> int:
        return sum(self.worked_minutes(s) for s in shifts)
