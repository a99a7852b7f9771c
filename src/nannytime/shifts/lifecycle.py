from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..core.exceptions import (
    AlreadyClosedError,
    NotAuthenticatedError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


def find_active(shifts: Iterable[Shift]) -> Optional[Shift]:
    """Return the open shift (end_time is None), or None.

    A well-formed store has at most one. If several are open the most recently
    started one wins (ties broken by the greatest id) and the anomaly is logged.
    """
    open_shifts = [s for s in shifts if s.end_time is None]
    if not open_shifts:
        return None
    if len(open_shifts) > 1:
        logger.warning(
            "Found %d open shifts for one user: %s",
            len(open_shifts),
            ", ".join(s.shift_id for s in open_shifts),
        )
    return max(open_shifts, key=lambda s: (s.start_time, s.shift_id))


def sort_newest_first(shifts: Iterable[Shift]) -> list[Shift]:
    return sorted(shifts, key=lambda s: s.start_time, reverse=True)


class ShiftLifecycleManager:
    """Use cases: clock in/out, manual add, edit and delete shifts.

    After any mutation callers refresh with list_shifts() and re-run
    find_active(); state is never patched locally.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        *,
        enforce_single_active: bool = True,
        allow_inverted_range: bool = False,
    ):
        self._shifts = shifts
        self._enforce_single_active = bool(enforce_single_active)
        self._allow_inverted_range = bool(allow_inverted_range)

    @staticmethod
    def _require_user(user_id: Optional[str]) -> str:
        if not user_id:
            raise NotAuthenticatedError("Not logged in")
        return user_id

    def list_shifts(self, user_id: str) -> list[Shift]:
        """Read path: a store failure degrades to an empty list."""
        try:
            return sort_newest_first(self._shifts.list_for_user(user_id))
        except StoreError as e:
            logger.error("Failed to fetch shifts for user %s: %s", user_id, e)
            return []

    def _get_existing(self, user_id: str, shift_id: str) -> Shift:
        shift = self._shifts.get_by_id(user_id=user_id, shift_id=shift_id)
        if not shift:
            raise NotFoundError(f"Shift {shift_id} not found")
        return shift

    def clock_in(self, user_id: Optional[str], *, now: datetime) -> Shift:
        user_id = self._require_user(user_id)

        if self._enforce_single_active:
            active = find_active(self._shifts.list_for_user(user_id))
            if active:
                raise ValidationError("You are already clocked in")

        shift = self._shifts.insert(user_id=user_id, start_time=now, end_time=None)
        logger.info("User %s clocked in (shift %s)", user_id, shift.shift_id)
        return shift

    def clock_out(self, user_id: Optional[str], shift_id: str, *, now: datetime) -> Shift:
        user_id = self._require_user(user_id)
        shift = self._get_existing(user_id, shift_id)
        if shift.end_time is not None:
            raise AlreadyClosedError("This shift is already clocked out")

        self._shifts.update(
            user_id=user_id,
            shift_id=shift.shift_id,
            start_time=shift.start_time,
            end_time=now,
            notes=shift.notes,
        )
        logger.info("User %s clocked out (shift %s)", user_id, shift.shift_id)
        return Shift(
            shift_id=shift.shift_id,
            user_id=user_id,
            start_time=shift.start_time,
            end_time=now,
            notes=shift.notes,
        )

    def manual_add(self, user_id: Optional[str], *, now: datetime, notes: Optional[str] = None) -> Shift:
        """Create a zero-duration closed shift meant to be edited right away."""
        user_id = self._require_user(user_id)
        return self._shifts.insert(user_id=user_id, start_time=now, end_time=now, notes=notes)

    def edit_shift(self, user_id: Optional[str], shift: Shift) -> Shift:
        user_id = self._require_user(user_id)
        self._get_existing(user_id, shift.shift_id)

        if shift.end_time is not None and shift.end_time < shift.start_time:
            if not self._allow_inverted_range:
                raise ValidationError("End time must not be before start time")
            logger.warning("Shift %s saved with end before start", shift.shift_id)

        if shift.end_time is None and self._enforce_single_active:
            others = [s for s in self._shifts.list_for_user(user_id) if s.shift_id != shift.shift_id]
            if find_active(others):
                raise ValidationError("Another shift is already in progress")

        notes = shift.notes.strip() if shift.notes else None
        self._shifts.update(
            user_id=user_id,
            shift_id=shift.shift_id,
            start_time=shift.start_time,
            end_time=shift.end_time,
            notes=notes,
        )
        return Shift(
            shift_id=shift.shift_id,
            user_id=user_id,
            start_time=shift.start_time,
            end_time=shift.end_time,
            notes=notes,
        )

    def delete_shift(self, user_id: Optional[str], shift_id: str) -> None:
        user_id = self._require_user(user_id)
        if not self._shifts.delete(user_id=user_id, shift_id=shift_id):
            raise NotFoundError(f"Shift {shift_id} not found")
        logger.info("User %s deleted shift %s", user_id, shift_id)
