"""
application.services.chat - Conversation entry point for adapters.

Stores what the user said, hands it to the processing pipeline and makes
sure the user always gets a reply, even when processing fails.
"""

from __future__ import annotations

import logging
from typing import Optional

from wellness_chat.application.context import SessionContext
from wellness_chat.application.dto import ProcessingResult
from wellness_chat.application.services.composer import ResponseComposer
from wellness_chat.application.services.message_processing import ChatProcessingService
from wellness_chat.domain.entities import ChatMessage
from wellness_chat.domain.exceptions import (
    InvalidRecordError,
    RepositoryError,
    UserNotFoundError,
)
from wellness_chat.domain.models import Direction
from wellness_chat.domain.ports import ChatMessageRepository, UserRepository

logger = logging.getLogger(__name__)


class ChatService:
    """Sends user messages and reads conversation history."""

    def __init__(
        self,
        user_repo: UserRepository,
        message_repo: ChatMessageRepository,
        processor: ChatProcessingService,
        composer: ResponseComposer,
    ):
        self._user_repo = user_repo
        self._message_repo = message_repo
        self._processor = processor
        self._composer = composer

    async def send(self, ctx: SessionContext, text: str) -> ProcessingResult:
        """Store a user message, process it and return the outcome.

        A database failure during processing is logged and answered with a
        generic error reply; the message stays unprocessed.

        Raises:
            InvalidRecordError: if the text is blank.
            UserNotFoundError:  if ctx.user_id does not exist.
        """
        if not text.strip():
            raise InvalidRecordError("message must not be empty")
        if await self._user_repo.get_by_id(ctx.user_id) is None:
            raise UserNotFoundError(ctx.user_id)

        message = await self._message_repo.create(ctx.user_id, text.strip(), Direction.USER)
        logger.info(
            "User %d sent message %d (request=%s)",
            ctx.user_id, message.id, ctx.request_id,
        )

        try:
            return await self._processor.process_message(message.id)
        except RepositoryError:
            logger.exception(
                "Processing failed for message %d (request=%s)",
                message.id, ctx.request_id,
            )
            error = self._composer.processing_error(ctx.user_id)
            reply = await self._message_repo.create(ctx.user_id, error.message, Direction.SYSTEM)
            return ProcessingResult(message=message, reply=reply)

    async def history(self, user_id: int, limit: Optional[int] = None) -> list[ChatMessage]:
        """Both sides of the conversation, newest first."""
        return await self._message_repo.get_by_user(user_id, limit)
