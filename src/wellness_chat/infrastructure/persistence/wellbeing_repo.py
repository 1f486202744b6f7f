"""
infrastructure.persistence.wellbeing_repo - SQLite mood/stress/energy repository.

Implements WellbeingRepository port. This is the only place where
dimensions the user never mentioned get their middle value.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from wellness_chat.domain.entities import Wellbeing
from wellness_chat.domain.models import Level, Mood, WellbeingDraft
from wellness_chat.infrastructure.persistence.connection import AsyncSQLiteConnection
from wellness_chat.infrastructure.persistence.timestamps import (
    day_bounds,
    now_iso,
    parse_dt,
    to_iso,
)

logger = logging.getLogger(__name__)


class SQLiteWellbeingRepository:
    """Async SQLite implementation of WellbeingRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def create(
        self,
        user_id: int,
        draft: WellbeingDraft,
        recorded_at: Optional[datetime] = None,
    ) -> Wellbeing:
        filled = draft.with_defaults()
        recorded = to_iso(recorded_at)
        now = now_iso()
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO wellbeing
                   (user_id, mood, stress_level, energy_level, notes,
                    recorded_at, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                (user_id, filled.mood.value, filled.stress_level.value,
                 filled.energy_level.value, filled.notes, recorded, now),
            )
            wellbeing_id = cursor.lastrowid
        logger.debug(
            "Saved wellbeing %d for user %d (detected=%s)",
            wellbeing_id, user_id, draft.detected_dimensions,
        )
        return Wellbeing(
            id=wellbeing_id,
            user_id=user_id,
            mood=filled.mood,
            stress_level=filled.stress_level,
            energy_level=filled.energy_level,
            notes=filled.notes,
            recorded_at=parse_dt(recorded),
            created_at=parse_dt(now),
        )

    async def get_recent(self, user_id: int, limit: int) -> list[Wellbeing]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM wellbeing WHERE user_id = ?
                   ORDER BY recorded_at DESC, id DESC LIMIT ?""",
                (user_id, limit),
            )
            return [self._row_to_wellbeing(r) for r in rows]

    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Wellbeing]:
        async with self._conn.acquire() as conn:
            if day is None:
                rows = await conn.execute_fetchall(
                    "SELECT * FROM wellbeing WHERE user_id = ? ORDER BY recorded_at DESC, id DESC",
                    (user_id,),
                )
            else:
                start, end = day_bounds(day)
                rows = await conn.execute_fetchall(
                    """SELECT * FROM wellbeing
                       WHERE user_id = ? AND recorded_at >= ? AND recorded_at < ?
                       ORDER BY recorded_at DESC, id DESC""",
                    (user_id, start, end),
                )
            return [self._row_to_wellbeing(r) for r in rows]

    @staticmethod
    def _row_to_wellbeing(row) -> Wellbeing:
        return Wellbeing(
            id=row["id"],
            user_id=row["user_id"],
            mood=Mood(row["mood"]),
            stress_level=Level(row["stress_level"]),
            energy_level=Level(row["energy_level"]),
            notes=row["notes"],
            recorded_at=parse_dt(row["recorded_at"]),
            created_at=parse_dt(row["created_at"]),
        )
