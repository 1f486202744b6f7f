"""
infrastructure.persistence.sleep_repo - SQLite sleep repository.

Implements SleepRepository port. The stored duration is always the one
derived by the draft (wake_time - bedtime).
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from wellness_chat.domain.entities import Sleep
from wellness_chat.domain.models import SleepDraft, SleepQuality
from wellness_chat.infrastructure.persistence.connection import AsyncSQLiteConnection
from wellness_chat.infrastructure.persistence.timestamps import (
    day_bounds,
    now_iso,
    parse_dt,
    to_iso,
)

logger = logging.getLogger(__name__)


class SQLiteSleepRepository:
    """Async SQLite implementation of SleepRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def create(
        self,
        user_id: int,
        draft: SleepDraft,
        recorded_at: Optional[datetime] = None,
    ) -> Sleep:
        recorded = to_iso(recorded_at)
        now = now_iso()
        duration = draft.duration_hours
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO sleep
                   (user_id, bedtime, wake_time, sleep_duration_hours,
                    sleep_quality, notes, recorded_at, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                (user_id, draft.bedtime.isoformat(), draft.wake_time.isoformat(),
                 duration,
                 draft.sleep_quality.value if draft.sleep_quality else None,
                 draft.notes, recorded, now),
            )
            sleep_id = cursor.lastrowid
        logger.debug("Saved %.2fh of sleep for user %d", duration, user_id)
        return Sleep(
            id=sleep_id,
            user_id=user_id,
            bedtime=draft.bedtime,
            wake_time=draft.wake_time,
            sleep_duration_hours=duration,
            sleep_quality=draft.sleep_quality,
            notes=draft.notes,
            recorded_at=parse_dt(recorded),
            created_at=parse_dt(now),
        )

    async def get_recent(self, user_id: int, limit: int) -> list[Sleep]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM sleep WHERE user_id = ?
                   ORDER BY recorded_at DESC, id DESC LIMIT ?""",
                (user_id, limit),
            )
            return [self._row_to_sleep(r) for r in rows]

    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Sleep]:
        async with self._conn.acquire() as conn:
            if day is None:
                rows = await conn.execute_fetchall(
                    "SELECT * FROM sleep WHERE user_id = ? ORDER BY recorded_at DESC, id DESC",
                    (user_id,),
                )
            else:
                start, end = day_bounds(day)
                rows = await conn.execute_fetchall(
                    """SELECT * FROM sleep
                       WHERE user_id = ? AND recorded_at >= ? AND recorded_at < ?
                       ORDER BY recorded_at DESC, id DESC""",
                    (user_id, start, end),
                )
            return [self._row_to_sleep(r) for r in rows]

    @staticmethod
    def _row_to_sleep(row) -> Sleep:
        return Sleep(
            id=row["id"],
            user_id=row["user_id"],
            bedtime=parse_dt(row["bedtime"]),
            wake_time=parse_dt(row["wake_time"]),
            sleep_duration_hours=row["sleep_duration_hours"],
            sleep_quality=SleepQuality(row["sleep_quality"]) if row["sleep_quality"] else None,
            notes=row["notes"],
            recorded_at=parse_dt(row["recorded_at"]),
            created_at=parse_dt(row["created_at"]),
        )
