from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty, require_non_negative
from ..core.enums import Currency
from ..core.exceptions import NotAuthenticatedError, StoreError, ValidationError
from .model import Profile
from .repository import ProfileRepository

logger = logging.getLogger(__name__)


class ProfileService:
    """Use case: read (get-or-create-default) and update the user's profile."""

    def __init__(self, profiles: ProfileRepository):
        self._profiles = profiles

    def get_or_create(self, user_id: Optional[str]) -> Profile:
        if not user_id:
            raise NotAuthenticatedError("No user found")

        try:
            profile = self._profiles.get(user_id)
        except StoreError as e:
            logger.error("Failed to fetch profile for user %s: %s", user_id, e)
            return Profile.default_for(user_id)

        if profile:
            return profile

        default = Profile.default_for(user_id)
        try:
            return self._profiles.create(default)
        except StoreError as e:
            # Keep the app usable; the profile gets written on the next update.
            logger.error("Failed to auto-create profile for user %s: %s", user_id, e)
            return default

    def update(self, user_id: Optional[str], *, name: str, hourly_rate: float, currency: str) -> Profile:
        if not user_id:
            raise NotAuthenticatedError("No user found")

        name = require_non_empty(name, "Name")
        rate = require_non_negative(hourly_rate, "Hourly rate")
        try:
            cur = Currency(str(currency).upper())
        except ValueError:
            raise ValidationError(f"Unsupported currency: {currency}")

        profile = Profile(user_id=user_id, name=name, hourly_rate=rate, currency=cur)
        self._profiles.upsert(profile)
        return profile
