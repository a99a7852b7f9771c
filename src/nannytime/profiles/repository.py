from __future__ import annotations

from typing import Optional, Protocol

from .model import Profile


class ProfileRepository(Protocol):
    def get(self, user_id: str) -> Optional[Profile]:
        raise NotImplementedError

    def create(self, profile: Profile) -> Profile:
        raise NotImplementedError

    def upsert(self, profile: Profile) -> None:
        """Full replace of name, hourly_rate and currency."""

        raise NotImplementedError
