from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_HOURLY_RATE, DEFAULT_PROFILE_NAME
from ..core.enums import Currency


@dataclass(frozen=True)
class Profile:
    """Domain entity: one profile per user (same id space as the user)."""

    user_id: str
    name: str
    hourly_rate: float
    currency: Currency

    @classmethod
    def default_for(cls, user_id: str) -> "Profile":
        return cls(
            user_id=user_id,
            name=DEFAULT_PROFILE_NAME,
            hourly_rate=DEFAULT_HOURLY_RATE,
            currency=Currency.USD,
        )
