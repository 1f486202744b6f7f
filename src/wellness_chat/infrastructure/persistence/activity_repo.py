"""
infrastructure.persistence.activity_repo - SQLite activity repository.

Implements ActivityRepository port.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from wellness_chat.domain.entities import Activity
from wellness_chat.domain.models import ActivityDraft, Intensity
from wellness_chat.infrastructure.persistence.connection import AsyncSQLiteConnection
from wellness_chat.infrastructure.persistence.timestamps import (
    day_bounds,
    now_iso,
    parse_dt,
    to_iso,
)

logger = logging.getLogger(__name__)


class SQLiteActivityRepository:
    """Async SQLite implementation of ActivityRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def create(
        self,
        user_id: int,
        draft: ActivityDraft,
        recorded_at: Optional[datetime] = None,
    ) -> Activity:
        recorded = to_iso(recorded_at)
        now = now_iso()
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO activities
                   (user_id, activity_type, duration_minutes, calories_burned,
                    intensity, notes, recorded_at, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (user_id, draft.activity_type, draft.duration_minutes,
                 draft.calories_burned,
                 draft.intensity.value if draft.intensity else None,
                 draft.notes, recorded, now),
            )
            activity_id = cursor.lastrowid
        logger.debug("Saved activity %d for user %d", activity_id, user_id)
        return Activity(
            id=activity_id,
            user_id=user_id,
            activity_type=draft.activity_type,
            duration_minutes=draft.duration_minutes,
            calories_burned=draft.calories_burned,
            intensity=draft.intensity,
            notes=draft.notes,
            recorded_at=parse_dt(recorded),
            created_at=parse_dt(now),
        )

    async def get_recent(self, user_id: int, limit: int) -> list[Activity]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM activities WHERE user_id = ?
                   ORDER BY recorded_at DESC, id DESC LIMIT ?""",
                (user_id, limit),
            )
            return [self._row_to_activity(r) for r in rows]

    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Activity]:
        async with self._conn.acquire() as conn:
            if day is None:
                rows = await conn.execute_fetchall(
                    "SELECT * FROM activities WHERE user_id = ? ORDER BY recorded_at DESC, id DESC",
                    (user_id,),
                )
            else:
                start, end = day_bounds(day)
                rows = await conn.execute_fetchall(
                    """SELECT * FROM activities
                       WHERE user_id = ? AND recorded_at >= ? AND recorded_at < ?
                       ORDER BY recorded_at DESC, id DESC""",
                    (user_id, start, end),
                )
            return [self._row_to_activity(r) for r in rows]

    @staticmethod
    def _row_to_activity(row) -> Activity:
        return Activity(
            id=row["id"],
            user_id=row["user_id"],
            activity_type=row["activity_type"],
            duration_minutes=row["duration_minutes"],
            calories_burned=row["calories_burned"],
            intensity=Intensity(row["intensity"]) if row["intensity"] else None,
            notes=row["notes"],
            recorded_at=parse_dt(row["recorded_at"]),
            created_at=parse_dt(row["created_at"]),
        )
