"""
infrastructure.persistence.recommendation_repo - SQLite recommendation repository.

Implements RecommendationRepository port. Listings are ordered high
priority first, newest first within a priority.
"""

from __future__ import annotations

import logging
from typing import Optional

from wellness_chat.domain.entities import Recommendation
from wellness_chat.domain.models import Category, Priority, RecommendationDraft
from wellness_chat.infrastructure.persistence.connection import AsyncSQLiteConnection
from wellness_chat.infrastructure.persistence.timestamps import now_iso, parse_dt

logger = logging.getLogger(__name__)

_PRIORITY_ORDER = """CASE priority
    WHEN 'high' THEN 0
    WHEN 'medium' THEN 1
    ELSE 2
END"""


class SQLiteRecommendationRepository:
    """Async SQLite implementation of RecommendationRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def create(self, user_id: int, draft: RecommendationDraft) -> Recommendation:
        now = now_iso()
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO recommendations
                   (user_id, category, title, description, priority, is_read, created_at)
                   VALUES (?, ?, ?, ?, ?, 0, ?)""",
                (user_id, draft.category.value, draft.title, draft.description,
                 draft.priority.value, now),
            )
            recommendation_id = cursor.lastrowid
        return Recommendation(
            id=recommendation_id,
            user_id=user_id,
            category=draft.category,
            title=draft.title,
            description=draft.description,
            priority=draft.priority,
            is_read=False,
            created_at=parse_dt(now),
        )

    async def get_by_user(self, user_id: int, unread_only: bool = False) -> list[Recommendation]:
        query = "SELECT * FROM recommendations WHERE user_id = ?"
        if unread_only:
            query += " AND is_read = 0"
        query += f" ORDER BY {_PRIORITY_ORDER}, created_at DESC, id DESC"
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(query, (user_id,))
            return [self._row_to_entity(r) for r in rows]

    async def mark_read(self, recommendation_id: int) -> Optional[Recommendation]:
        async with self._conn.acquire() as conn:
            await conn.execute(
                "UPDATE recommendations SET is_read = 1 WHERE id = ?",
                (recommendation_id,),
            )
            rows = await conn.execute_fetchall(
                "SELECT * FROM recommendations WHERE id = ?", (recommendation_id,),
            )
            if not rows:
                return None
            return self._row_to_entity(rows[0])

    @staticmethod
    def _row_to_entity(row) -> Recommendation:
        return Recommendation(
            id=row["id"],
            user_id=row["user_id"],
            category=Category(row["category"]),
            title=row["title"],
            description=row["description"],
            priority=Priority(row["priority"]),
            is_read=bool(row["is_read"]),
            created_at=parse_dt(row["created_at"]),
        )
