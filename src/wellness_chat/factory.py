"""
factory - Composition root for the wellness chat tracker.

ALL dependency wiring happens here. No other module constructs its own
dependencies. Adapters call this factory to get fully configured services.

Usage:
    from wellness_chat.factory import ServiceFactory
    from wellness_chat.infrastructure.config import Settings

    factory = ServiceFactory(Settings.from_env())
    await factory.initialize()  # one-time startup

    chat = factory.create_chat_service()
    result = await chat.send(SessionContext(user_id=1), "I ran for 30 minutes")
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from wellness_chat.application.services.chat import ChatService
from wellness_chat.application.services.composer import ResponseComposer
from wellness_chat.application.services.message_processing import ChatProcessingService
from wellness_chat.application.services.profile import ProfileService
from wellness_chat.application.services.recommendation import RecommendationService
from wellness_chat.application.services.tracking import TrackingService
from wellness_chat.infrastructure.config import Settings
from wellness_chat.infrastructure.extraction import KeywordIntentRouter, default_extractors
from wellness_chat.infrastructure.persistence.activity_repo import SQLiteActivityRepository
from wellness_chat.infrastructure.persistence.chat_message_repo import SQLiteChatMessageRepository
from wellness_chat.infrastructure.persistence.connection import AsyncSQLiteConnection
from wellness_chat.infrastructure.persistence.hydration_repo import SQLiteHydrationRepository
from wellness_chat.infrastructure.persistence.migrations import run_migrations
from wellness_chat.infrastructure.persistence.nutrition_repo import SQLiteNutritionRepository
from wellness_chat.infrastructure.persistence.recommendation_repo import SQLiteRecommendationRepository
from wellness_chat.infrastructure.persistence.sleep_repo import SQLiteSleepRepository
from wellness_chat.infrastructure.persistence.user_repo import SQLiteUserRepository
from wellness_chat.infrastructure.persistence.wellbeing_repo import SQLiteWellbeingRepository

logger = logging.getLogger(__name__)


class ServiceFactory:
    """Composition root that wires all dependencies together.

    Every repository shares one AsyncSQLiteConnection, so a transaction
    opened by the processing pipeline covers all of them.
    """

    def __init__(self, config: Settings, clock: Callable[[], datetime] = datetime.now):
        self._config = config
        self._clock = clock
        self._connection = AsyncSQLiteConnection(config.db_path)
        self._initialized = False

    @property
    def connection(self) -> AsyncSQLiteConnection:
        return self._connection

    async def initialize(self) -> None:
        """One-time startup: create tables if missing.

        Must be called before creating services.
        """
        logger.info("Initializing ServiceFactory (db=%s)...", self._config.db_path)
        await run_migrations(self._connection)
        self._initialized = True
        logger.info("ServiceFactory ready")

    # ------------------------------------------------------------------
    # Repositories
    # ------------------------------------------------------------------

    def create_user_repository(self) -> SQLiteUserRepository:
        return SQLiteUserRepository(self._connection)

    def create_message_repository(self) -> SQLiteChatMessageRepository:
        return SQLiteChatMessageRepository(self._connection)

    def create_recommendation_repository(self) -> SQLiteRecommendationRepository:
        return SQLiteRecommendationRepository(self._connection)

    # ------------------------------------------------------------------
    # Service creation
    # ------------------------------------------------------------------

    def create_profile_service(self) -> ProfileService:
        self._ensure_initialized()
        return ProfileService(user_repo=self.create_user_repository())

    def create_tracking_service(self) -> TrackingService:
        self._ensure_initialized()
        return TrackingService(
            user_repo=self.create_user_repository(),
            activity_repo=SQLiteActivityRepository(self._connection),
            nutrition_repo=SQLiteNutritionRepository(self._connection),
            hydration_repo=SQLiteHydrationRepository(self._connection),
            sleep_repo=SQLiteSleepRepository(self._connection),
            wellbeing_repo=SQLiteWellbeingRepository(self._connection),
        )

    def create_recommendation_service(self) -> RecommendationService:
        self._ensure_initialized()
        return RecommendationService(
            user_repo=self.create_user_repository(),
            activity_repo=SQLiteActivityRepository(self._connection),
            nutrition_repo=SQLiteNutritionRepository(self._connection),
            hydration_repo=SQLiteHydrationRepository(self._connection),
            sleep_repo=SQLiteSleepRepository(self._connection),
            wellbeing_repo=SQLiteWellbeingRepository(self._connection),
            recommendation_repo=self.create_recommendation_repository(),
        )

    def create_composer(self) -> ResponseComposer:
        return ResponseComposer(digest_size=self._config.digest_size)

    def create_processing_service(self) -> ChatProcessingService:
        self._ensure_initialized()
        return ChatProcessingService(
            unit_of_work=self._connection,
            message_repo=self.create_message_repository(),
            intent_router=KeywordIntentRouter(),
            extractors=default_extractors(),
            tracking=self.create_tracking_service(),
            recommendations=self.create_recommendation_service(),
            composer=self.create_composer(),
            clock=self._clock,
        )

    def create_chat_service(self) -> ChatService:
        self._ensure_initialized()
        return ChatService(
            user_repo=self.create_user_repository(),
            message_repo=self.create_message_repository(),
            processor=self.create_processing_service(),
            composer=self.create_composer(),
        )

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError(
                "ServiceFactory not initialized. Call await factory.initialize() first."
            )
