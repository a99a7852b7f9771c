from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: an account that owns shifts and a profile."""

    user_id: str
    email: str
    password_hash: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Session:
    """Proof that a user is signed in; its absence gates every screen."""

    token: str
    user_id: str
    email: str
    created_at: datetime
