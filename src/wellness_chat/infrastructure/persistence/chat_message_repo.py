"""
infrastructure.persistence.chat_message_repo - SQLite chat message repository.

Stores both sides of the conversation. The message_type column holds the
direction ("user" or "system"); data_extracted and processed_at drive the
processing pipeline's exactly-once guarantee.
"""

from __future__ import annotations

import logging
from typing import Optional

from wellness_chat.domain.entities import ChatMessage
from wellness_chat.domain.models import Direction
from wellness_chat.infrastructure.persistence.connection import AsyncSQLiteConnection
from wellness_chat.infrastructure.persistence.timestamps import now_iso, parse_dt

logger = logging.getLogger(__name__)


class SQLiteChatMessageRepository:
    """Async SQLite implementation of ChatMessageRepository."""

    def __init__(self, connection: AsyncSQLiteConnection):
        self._conn = connection

    async def create(self, user_id: int, message: str, direction: Direction) -> ChatMessage:
        now = now_iso()
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """INSERT INTO chat_messages
                   (user_id, message, message_type, data_extracted, created_at)
                   VALUES (?, ?, ?, 0, ?)""",
                (user_id, message, direction.value, now),
            )
            message_id = cursor.lastrowid
        return ChatMessage(
            id=message_id,
            user_id=user_id,
            message=message,
            direction=direction,
            extracted=False,
            processed_at=None,
            created_at=parse_dt(now),
        )

    async def get_by_id(self, message_id: int) -> Optional[ChatMessage]:
        async with self._conn.acquire() as conn:
            rows = await conn.execute_fetchall(
                "SELECT * FROM chat_messages WHERE id = ?", (message_id,),
            )
            if not rows:
                return None
            return self._row_to_entity(rows[0])

    async def get_by_user(self, user_id: int, limit: Optional[int] = None) -> list[ChatMessage]:
        """Newest first; limit=None returns the whole history."""
        async with self._conn.acquire() as conn:
            if limit is None:
                rows = await conn.execute_fetchall(
                    """SELECT * FROM chat_messages WHERE user_id = ?
                       ORDER BY created_at DESC, id DESC""",
                    (user_id,),
                )
            else:
                rows = await conn.execute_fetchall(
                    """SELECT * FROM chat_messages WHERE user_id = ?
                       ORDER BY created_at DESC, id DESC LIMIT ?""",
                    (user_id, limit),
                )
            return [self._row_to_entity(r) for r in rows]

    async def claim(self, message_id: int) -> bool:
        """Atomically mark an unprocessed user message as taken.

        Returns False when another caller already claimed it, it was
        already extracted, or it is a system message.
        """
        async with self._conn.acquire() as conn:
            cursor = await conn.execute(
                """UPDATE chat_messages
                   SET processed_at = ?
                   WHERE id = ?
                     AND processed_at IS NULL
                     AND data_extracted = 0
                     AND message_type = ?""",
                (now_iso(), message_id, Direction.USER.value),
            )
            claimed = cursor.rowcount == 1
        if not claimed:
            logger.debug("Message %d was not claimable", message_id)
        return claimed

    async def set_extracted(self, message_id: int, extracted: bool) -> None:
        async with self._conn.acquire() as conn:
            await conn.execute(
                "UPDATE chat_messages SET data_extracted = ? WHERE id = ?",
                (int(extracted), message_id),
            )

    @staticmethod
    def _row_to_entity(row) -> ChatMessage:
        return ChatMessage(
            id=row["id"],
            user_id=row["user_id"],
            message=row["message"],
            direction=Direction(row["message_type"]),
            extracted=bool(row["data_extracted"]),
            processed_at=parse_dt(row["processed_at"]),
            created_at=parse_dt(row["created_at"]),
        )
