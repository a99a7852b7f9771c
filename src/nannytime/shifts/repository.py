from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    """Store interface for shifts.

    Every call is scoped to the owning user. Implementations raise StoreError on
    transport failures.
    """

    def list_for_user(self, user_id: str) -> Sequence[Shift]:
        raise NotImplementedError

    def get_by_id(self, *, user_id: str, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def insert(
        self,
        *,
        user_id: str,
        start_time: datetime,
        end_time: Optional[datetime],
        notes: Optional[str] = None,
    ) -> Shift:
        raise NotImplementedError

    def update(
        self,
        *,
        user_id: str,
        shift_id: str,
        start_time: datetime,
        end_time: Optional[datetime],
        notes: Optional[str] = None,
    ) -> bool:
        raise NotImplementedError

    def delete(self, *, user_id: str, shift_id: str) -> bool:
        raise NotImplementedError
