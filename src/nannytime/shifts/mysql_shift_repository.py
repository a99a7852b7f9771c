from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import from_utc_naive, to_utc_naive
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)

_COLUMNS = "shift_id, user_id, start_time, end_time, notes"


def _row_to_shift(r: dict) -> Shift:
    return Shift(
        shift_id=str(r["shift_id"]),
        user_id=str(r["user_id"]),
        start_time=from_utc_naive(r["start_time"]),
        end_time=from_utc_naive(r.get("end_time")),
        notes=r.get("notes"),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_user(self, user_id: str) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE user_id=%s
                ORDER BY start_time DESC
                """,
                (user_id,),
            )
            return [_row_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, *, user_id: str, shift_id: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s AND user_id=%s",
                (shift_id, user_id),
            )
            r = fetchone(cur)
            return _row_to_shift(r) if r else None

    def insert(
        self,
        *,
        user_id: str,
        start_time: datetime,
        end_time: Optional[datetime],
        notes: Optional[str] = None,
    ) -> Shift:
        shift_id = uuid.uuid4().hex
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shifts (shift_id, user_id, start_time, end_time, notes)
                VALUES (%s, %s, %s, %s, %s)
                """,
                (
                    shift_id,
                    user_id,
                    to_utc_naive(start_time),
                    to_utc_naive(end_time) if end_time else None,
                    notes,
                ),
            )
        logger.debug("Inserted shift %s for user %s", shift_id, user_id)
        return Shift(shift_id=shift_id, user_id=user_id, start_time=start_time, end_time=end_time, notes=notes)

    def update(
        self,
        *,
        user_id: str,
        shift_id: str,
        start_time: datetime,
        end_time: Optional[datetime],
        notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shifts
                SET start_time=%s, end_time=%s, notes=%s
                WHERE shift_id=%s AND user_id=%s
                """,
                (
                    to_utc_naive(start_time),
                    to_utc_naive(end_time) if end_time else None,
                    notes,
                    shift_id,
                    user_id,
                ),
            )
            # rowcount is 0 when values are unchanged, so existence is checked by the service.
            return cur.rowcount >= 0

    def delete(self, *, user_id: str, shift_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM shifts WHERE shift_id=%s AND user_id=%s", (shift_id, user_id))
            return cur.rowcount > 0
