from __future__ import annotations

import uuid
from typing import Optional

from ..common.datetime_utils import from_utc_naive
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import User
from .repository import UserRepository


def _row_to_user(r: dict) -> User:
    return User(
        user_id=str(r["user_id"]),
        email=r["email"],
        password_hash=r["password_hash"],
        created_at=from_utc_naive(r.get("created_at")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, email, password_hash, created_at FROM users WHERE email=%s",
                (email,),
            )
            r = fetchone(cur)
            return _row_to_user(r) if r else None

    def create_user(self, *, email: str, password_hash: str) -> User:
        user_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO users (user_id, email, password_hash) VALUES (%s, %s, %s)",
                (user_id, email, password_hash),
            )
        return User(user_id=user_id, email=email, password_hash=password_hash)
