"""
infrastructure.persistence.hydration_repo - SQLite hydration repository.

Implements HydrationRepository port.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from wellness_chat.domain.entities import Hydration
from wellness_chat.domain.models import DEFAULT_BEVERAGE, HydrationDraft
from wellness_chat.infrastructure.persistence.connection import AsyncSQLiteConnection
from wellness_chat.infrastructure.persistence.timestamps import (
    day_bounds,
    now_iso,
    parse_dt,
    to_iso,
)

logger = logging.getLogger(__name__)


class SQLiteHydrationRepository:
    """Async SQLite implementation of HydrationRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def create(
        self,
        user_id: int,
        draft: HydrationDraft,
        recorded_at: Optional[datetime] = None,
    ) -> Hydration:
        recorded = to_iso(recorded_at)
        now = now_iso()
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO hydration
                   (user_id, amount_ml, beverage_type, recorded_at, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (user_id, draft.amount_ml, draft.beverage_type, recorded, now),
            )
            hydration_id = cursor.lastrowid
        logger.debug("Saved %dml hydration for user %d", draft.amount_ml, user_id)
        return Hydration(
            id=hydration_id,
            user_id=user_id,
            amount_ml=draft.amount_ml,
            beverage_type=draft.beverage_type,
            recorded_at=parse_dt(recorded),
            created_at=parse_dt(now),
        )

    async def get_recent(self, user_id: int, limit: int) -> list[Hydration]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM hydration WHERE user_id = ?
                   ORDER BY recorded_at DESC, id DESC LIMIT ?""",
                (user_id, limit),
            )
            return [self._row_to_hydration(r) for r in rows]

    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Hydration]:
        async with self._conn.acquire() as conn:
            if day is None:
                rows = await conn.execute_fetchall(
                    "SELECT * FROM hydration WHERE user_id = ? ORDER BY recorded_at DESC, id DESC",
                    (user_id,),
                )
            else:
                start, end = day_bounds(day)
                rows = await conn.execute_fetchall(
                    """SELECT * FROM hydration
                       WHERE user_id = ? AND recorded_at >= ? AND recorded_at < ?
                       ORDER BY recorded_at DESC, id DESC""",
                    (user_id, start, end),
                )
            return [self._row_to_hydration(r) for r in rows]

    @staticmethod
    def _row_to_hydration(row) -> Hydration:
        return Hydration(
            id=row["id"],
            user_id=row["user_id"],
            amount_ml=row["amount_ml"],
            beverage_type=row["beverage_type"] or DEFAULT_BEVERAGE,
            recorded_at=parse_dt(row["recorded_at"]),
            created_at=parse_dt(row["created_at"]),
        )
