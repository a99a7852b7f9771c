from __future__ import annotations

from typing import Optional

from ..core.enums import Currency
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Profile
from .repository import ProfileRepository


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, user_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, name, hourly_rate, currency FROM profiles WHERE user_id=%s",
                (user_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Profile(
                user_id=str(r["user_id"]),
                name=r["name"],
                hourly_rate=float(r["hourly_rate"]),
                currency=Currency(r["currency"]),
            )

    def create(self, profile: Profile) -> Profile:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles (user_id, name, hourly_rate, currency)
                VALUES (%s, %s, %s, %s)
                """,
                (profile.user_id, profile.name, float(profile.hourly_rate), profile.currency.value),
            )
        return profile

    def upsert(self, profile: Profile) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles (user_id, name, hourly_rate, currency)
                VALUES (%s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name),
                    hourly_rate=VALUES(hourly_rate),
                    currency=VALUES(currency)
                """,
                (profile.user_id, profile.name, float(profile.hourly_rate), profile.currency.value),
            )
