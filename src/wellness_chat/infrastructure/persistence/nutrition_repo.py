"""
infrastructure.persistence.nutrition_repo - SQLite meal repository.

Implements NutritionRepository port.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from wellness_chat.domain.entities import Nutrition
from wellness_chat.domain.models import MealType, NutritionDraft
from wellness_chat.infrastructure.persistence.connection import AsyncSQLiteConnection
from wellness_chat.infrastructure.persistence.timestamps import (
    day_bounds,
    now_iso,
    parse_dt,
    to_iso,
)

logger = logging.getLogger(__name__)


class SQLiteNutritionRepository:
    """Async SQLite implementation of NutritionRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def create(
        self,
        user_id: int,
        draft: NutritionDraft,
        recorded_at: Optional[datetime] = None,
    ) -> Nutrition:
        recorded = to_iso(recorded_at)
        now = now_iso()
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO nutrition
                   (user_id, meal_type, food_item, quantity, calories,
                    protein, carbs, fat, notes, recorded_at, created_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                (user_id, draft.meal_type.value, draft.food_item, draft.quantity,
                 draft.calories, draft.protein, draft.carbs, draft.fat,
                 draft.notes, recorded, now),
            )
            nutrition_id = cursor.lastrowid
        logger.debug("Saved %s entry %d for user %d", draft.meal_type.value, nutrition_id, user_id)
        return Nutrition(
            id=nutrition_id,
            user_id=user_id,
            meal_type=draft.meal_type,
            food_item=draft.food_item,
            quantity=draft.quantity,
            calories=draft.calories,
            protein=draft.protein,
            carbs=draft.carbs,
            fat=draft.fat,
            notes=draft.notes,
            recorded_at=parse_dt(recorded),
            created_at=parse_dt(now),
        )

    async def get_recent(self, user_id: int, limit: int) -> list[Nutrition]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                """SELECT * FROM nutrition WHERE user_id = ?
                   ORDER BY recorded_at DESC, id DESC LIMIT ?""",
                (user_id, limit),
            )
            return [self._row_to_nutrition(r) for r in rows]

    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Nutrition]:
        async with self._conn.acquire() as conn:
            if day is None:
                rows = await conn.execute_fetchall(
                    "SELECT * FROM nutrition WHERE user_id = ? ORDER BY recorded_at DESC, id DESC",
                    (user_id,),
                )
            else:
                start, end = day_bounds(day)
                rows = await conn.execute_fetchall(
                    """SELECT * FROM nutrition
                       WHERE user_id = ? AND recorded_at >= ? AND recorded_at < ?
                       ORDER BY recorded_at DESC, id DESC""",
                    (user_id, start, end),
                )
            return [self._row_to_nutrition(r) for r in rows]

    @staticmethod
    def _row_to_nutrition(row) -> Nutrition:
        return Nutrition(
            id=row["id"],
            user_id=row["user_id"],
            meal_type=MealType(row["meal_type"]),
            food_item=row["food_item"],
            quantity=row["quantity"],
            calories=row["calories"],
            protein=row["protein"],
            carbs=row["carbs"],
            fat=row["fat"],
            notes=row["notes"],
            recorded_at=parse_dt(row["recorded_at"]),
            created_at=parse_dt(row["created_at"]),
        )
