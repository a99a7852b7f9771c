from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Shift:
    """Domain entity: one worked (or in-progress) shift.

    end_time=None means the shift is still open (the active shift).
    """

    shift_id: str
    user_id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    notes: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.end_time is None
