"""
application.services.tracking - Manual logging and daily listings.

Also the single place that knows which repository stores which draft
type; the chat pipeline writes its extracted drafts through save_draft().
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from wellness_chat.application.dto import DailySummary
from wellness_chat.domain.entities import Activity, Hydration, Nutrition, Sleep, Wellbeing
from wellness_chat.domain.exceptions import UserNotFoundError
from wellness_chat.domain.models import (
    ActivityDraft,
    HydrationDraft,
    NutritionDraft,
    SleepDraft,
    TrackingDraft,
    WellbeingDraft,
)
from wellness_chat.domain.ports import (
    ActivityRepository,
    HydrationRepository,
    NutritionRepository,
    SleepRepository,
    UserRepository,
    WellbeingRepository,
)

logger = logging.getLogger(__name__)


class TrackingService:
    """Creates and lists activity, meal, hydration, sleep and wellbeing records."""

    def __init__(
        self,
        user_repo: UserRepository,
        activity_repo: ActivityRepository,
        nutrition_repo: NutritionRepository,
        hydration_repo: HydrationRepository,
        sleep_repo: SleepRepository,
        wellbeing_repo: WellbeingRepository,
    ):
        self._user_repo = user_repo
        self._activity_repo = activity_repo
        self._nutrition_repo = nutrition_repo
        self._hydration_repo = hydration_repo
        self._sleep_repo = sleep_repo
        self._wellbeing_repo = wellbeing_repo

    async def record(
        self,
        user_id: int,
        draft: TrackingDraft,
        recorded_at: Optional[datetime] = None,
    ):
        """Manually log one record for an existing user.

        Raises:
            UserNotFoundError: if the user does not exist.
        """
        await self._require_user(user_id)
        return await self.save_draft(user_id, draft, recorded_at)

    async def save_draft(
        self,
        user_id: int,
        draft: TrackingDraft,
        recorded_at: Optional[datetime] = None,
    ):
        """Persist a draft with the repository for its type."""
        if isinstance(draft, ActivityDraft):
            return await self._activity_repo.create(user_id, draft, recorded_at)
        if isinstance(draft, NutritionDraft):
            return await self._nutrition_repo.create(user_id, draft, recorded_at)
        if isinstance(draft, HydrationDraft):
            return await self._hydration_repo.create(user_id, draft, recorded_at)
        if isinstance(draft, SleepDraft):
            return await self._sleep_repo.create(user_id, draft, recorded_at)
        if isinstance(draft, WellbeingDraft):
            return await self._wellbeing_repo.create(user_id, draft, recorded_at)
        raise TypeError(f"Unsupported draft type: {type(draft).__name__}")

    # ------------------------------------------------------------------
    # Listings (newest first; optionally restricted to one calendar day)
    # ------------------------------------------------------------------

    async def activities(self, user_id: int, day: Optional[date] = None) -> list[Activity]:
        return await self._activity_repo.get_by_user(user_id, day)

    async def nutrition(self, user_id: int, day: Optional[date] = None) -> list[Nutrition]:
        return await self._nutrition_repo.get_by_user(user_id, day)

    async def hydration(self, user_id: int, day: Optional[date] = None) -> list[Hydration]:
        return await self._hydration_repo.get_by_user(user_id, day)

    async def sleep(self, user_id: int, day: Optional[date] = None) -> list[Sleep]:
        return await self._sleep_repo.get_by_user(user_id, day)

    async def wellbeing(self, user_id: int, day: Optional[date] = None) -> list[Wellbeing]:
        return await self._wellbeing_repo.get_by_user(user_id, day)

    async def day_summary(self, user_id: int, day: date) -> DailySummary:
        await self._require_user(user_id)
        summary = DailySummary(
            activities=await self.activities(user_id, day),
            nutrition=await self.nutrition(user_id, day),
            hydration=await self.hydration(user_id, day),
            sleep=await self.sleep(user_id, day),
            wellbeing=await self.wellbeing(user_id, day),
        )
        logger.debug("Loaded day summary for user %d on %s", user_id, day.isoformat())
        return summary

    async def _require_user(self, user_id: int) -> None:
        if await self._user_repo.get_by_id(user_id) is None:
            raise UserNotFoundError(user_id)
