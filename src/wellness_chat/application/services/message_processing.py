"""
application.services.message_processing - The chat message pipeline.

Takes one stored user message from text to records and a reply:

    1. Load the message; skip it if it was already handled or is a
       system message.
    2. Claim it (atomic UPDATE), so concurrent callers cannot both run.
    3. Route: a recommendation request goes to the rule engine, anything
       else goes through every domain extractor.
    4. Persist the drafts (or recommendations), the extracted flag and the
       composed system reply.

Steps 2-4 share one database transaction: if any write fails, the claim,
the records and the flag are all rolled back and the message can be
processed again.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Sequence

from wellness_chat.application.dto import ProcessingResult
from wellness_chat.application.services.composer import ResponseComposer
from wellness_chat.application.services.recommendation import RecommendationService
from wellness_chat.application.services.tracking import TrackingService
from wellness_chat.domain.entities import ChatMessage, Recommendation
from wellness_chat.domain.exceptions import MessageNotFoundError, UserNotFoundError
from wellness_chat.domain.models import Direction, TrackingDraft
from wellness_chat.domain.ports import (
    ChatMessageRepository,
    ExtractorPort,
    IntentRouterPort,
    UnitOfWork,
)

logger = logging.getLogger(__name__)


class ChatProcessingService:
    """Runs a single chat message through routing, extraction and reply."""

    def __init__(
        self,
        unit_of_work: UnitOfWork,
        message_repo: ChatMessageRepository,
        intent_router: IntentRouterPort,
        extractors: Sequence[ExtractorPort],
        tracking: TrackingService,
        recommendations: RecommendationService,
        composer: ResponseComposer,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._uow = unit_of_work
        self._message_repo = message_repo
        self._intent_router = intent_router
        self._extractors = list(extractors)
        self._tracking = tracking
        self._recommendations = recommendations
        self._composer = composer
        self._clock = clock

    async def process_message(self, message_id: int) -> ProcessingResult:
        """Process a stored message exactly once.

        Raises:
            MessageNotFoundError: if no message has this id.
            RepositoryError:      if a write fails (everything is rolled back).
        """
        message = await self._message_repo.get_by_id(message_id)
        if message is None:
            raise MessageNotFoundError(message_id)
        if self._already_handled(message):
            logger.debug("Message %d already handled, skipping", message_id)
            return ProcessingResult(message=message)

        async with self._uow.transaction():
            if not await self._message_repo.claim(message_id):
                logger.info("Message %d was claimed by another caller", message_id)
                current = await self._message_repo.get_by_id(message_id)
                return ProcessingResult(message=current or message)

            drafts: list[TrackingDraft] = []
            recommendations: list[Recommendation] = []
            if self._intent_router.is_recommendation_request(message.message):
                reply_draft, recommendations = await self._recommend(message)
            else:
                drafts = self.extract(message.message)
                reply_draft = await self._record(message, drafts)

            reply = await self._message_repo.create(
                message.user_id, reply_draft.message, Direction.SYSTEM,
            )
            updated = await self._message_repo.get_by_id(message_id)

        logger.info(
            "Processed message %d for user %d: %d record(s), %d recommendation(s)",
            message_id, message.user_id, len(drafts), len(recommendations),
        )
        return ProcessingResult(
            message=updated or message,
            reply=reply,
            drafts=tuple(drafts),
            recommendations=tuple(recommendations),
        )

    def extract(self, text: str) -> list[TrackingDraft]:
        """Run every extractor over the text; results in extractor order."""
        now = self._clock()
        drafts: list[TrackingDraft] = []
        for extractor in self._extractors:
            found = extractor.extract(text, now)
            if found:
                logger.debug("Extractor %s found %d draft(s)", extractor.name, len(found))
            drafts.extend(found)
        return drafts

    # ------------------------------------------------------------------
    # Pipeline branches
    # ------------------------------------------------------------------

    async def _recommend(self, message: ChatMessage) -> tuple[ChatMessage, list[Recommendation]]:
        try:
            recommendations = await self._recommendations.generate(message.user_id)
        except UserNotFoundError:
            logger.exception("Recommendation request for unknown user %d", message.user_id)
            return self._composer.recommendation_failure(message.user_id), []
        return self._composer.digest(message.user_id, recommendations), recommendations

    async def _record(self, message: ChatMessage, drafts: list[TrackingDraft]) -> ChatMessage:
        if not drafts:
            return self._composer.help(message.user_id)
        recorded_at = self._clock()
        for draft in drafts:
            await self._tracking.save_draft(message.user_id, draft, recorded_at)
        await self._message_repo.set_extracted(message.id, True)
        return self._composer.acknowledgement(message.user_id, drafts)

    @staticmethod
    def _already_handled(message: ChatMessage) -> bool:
        return (
            message.extracted
            or message.direction != Direction.USER
            or message.processed_at is not None
        )
