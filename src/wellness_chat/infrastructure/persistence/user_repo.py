"""
infrastructure.persistence.user_repo - SQLite user repository.

Implements UserRepository port.
"""

from __future__ import annotations

import logging
from typing import Optional

import aiosqlite

from wellness_chat.domain.entities import User
from wellness_chat.domain.exceptions import DuplicateEmailError
from wellness_chat.infrastructure.persistence.connection import AsyncSQLiteConnection
from wellness_chat.infrastructure.persistence.timestamps import now_iso, parse_dt

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({
    "name", "email", "age", "gender", "height", "weight",
    "activity_level", "goals", "onboarding_completed",
})


class SQLiteUserRepository:
    """Async SQLite implementation of UserRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def get_by_id(self, user_id: int) -> Optional[User]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT * FROM users WHERE id = ?", (user_id,),
            )
            if not rows:
                return None
            return self._row_to_user(rows[0])

    async def create(self, user: User) -> User:
        now = now_iso()
        async with self._conn.acquire() as conn:
            try:
                cursor = await conn.execute(
                    """INSERT INTO users
                       (name, email, age, gender, height, weight,
                        activity_level, goals, onboarding_completed, created_at)
                       VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
                    (user.name, user.email, user.age, user.gender, user.height,
                     user.weight, user.activity_level, user.goals,
                     int(user.onboarding_completed), now),
                )
            except aiosqlite.IntegrityError as exc:
                raise DuplicateEmailError(
                    f"A profile with email {user.email!r} already exists"
                ) from exc
            user_id = cursor.lastrowid
        logger.info("Created user %d (%s)", user_id, user.email)
        return User(
            id=user_id,
            name=user.name,
            email=user.email,
            age=user.age,
            gender=user.gender,
            height=user.height,
            weight=user.weight,
            activity_level=user.activity_level,
            goals=user.goals,
            onboarding_completed=user.onboarding_completed,
            created_at=parse_dt(now),
        )

    async def update(self, user_id: int, changes: dict[str, object]) -> Optional[User]:
        """Apply a partial update; returns the fresh profile or None if missing."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(
                f"Invalid field(s) {sorted(unknown)}. Allowed: {sorted(UPDATABLE_FIELDS)}"
            )
        if changes:
            values = [
                int(v) if k == "onboarding_completed" else v
                for k, v in changes.items()
            ]
            assignments = ", ".join(f"{k} = ?" for k in changes)
            async with self._conn.acquire() as conn:
                try:
                    await conn.execute(
                        f"UPDATE users SET {assignments} WHERE id = ?",
                        (*values, user_id),
                    )
                except aiosqlite.IntegrityError as exc:
                    raise DuplicateEmailError(
                        f"A profile with email {changes.get('email')!r} already exists"
                    ) from exc
        return await self.get_by_id(user_id)

    @staticmethod
    def _row_to_user(row) -> User:
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            age=row["age"],
            gender=row["gender"],
            height=row["height"],
            weight=row["weight"],
            activity_level=row["activity_level"],
            goals=row["goals"],
            onboarding_completed=bool(row["onboarding_completed"]),
            created_at=parse_dt(row["created_at"]),
        )
