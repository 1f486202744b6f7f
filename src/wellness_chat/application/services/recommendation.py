"""
application.services.recommendation - Rule-based recommendation engine.

Two layers:
    evaluate_rules()        pure function: WellnessHistory + User -> drafts
    RecommendationService   reads the history windows, runs the rules and
                            persists every draft

Each rule looks at one domain window and fires independently. When none
of them fires the user gets a single "Keep Up the Good Work" entry.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from wellness_chat.application.dto import WellnessHistory
from wellness_chat.domain.entities import Recommendation, User
from wellness_chat.domain.exceptions import RecommendationNotFoundError, UserNotFoundError
from wellness_chat.domain.models import (
    Category,
    Level,
    MealType,
    Priority,
    RecommendationDraft,
    SleepQuality,
)
from wellness_chat.domain.ports import (
    ActivityRepository,
    HydrationRepository,
    NutritionRepository,
    RecommendationRepository,
    SleepRepository,
    UserRepository,
    WellbeingRepository,
)

logger = logging.getLogger(__name__)

# History windows, most recent first
ACTIVITY_WINDOW = 10
SLEEP_WINDOW = 7
NUTRITION_WINDOW = 21
HYDRATION_WINDOW = 14
WELLBEING_WINDOW = 7

MIN_ACTIVITIES = 3
MIN_SLEEP_HOURS = 7.0
POOR_SLEEP_LIMIT = 3
MIN_MEALS_FOR_BREAKFAST_CHECK = 10
MIN_BREAKFAST_SHARE = 0.2
DAILY_WATER_TARGET_ML = 2000
DAYS_PER_WEEK = 7
HIGH_STRESS_LIMIT = 4
LOW_ENERGY_LIMIT = 4

_HIGH_STRESS = (Level.HIGH, Level.VERY_HIGH)
_LOW_ENERGY = (Level.LOW, Level.VERY_LOW)

Rule = Callable[[WellnessHistory, User], Optional[RecommendationDraft]]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _too_few_activities(history: WellnessHistory, user: User) -> Optional[RecommendationDraft]:
    if len(history.activities) >= MIN_ACTIVITIES:
        return None
    return RecommendationDraft(
        category=Category.ACTIVITY,
        title="Start Regular Exercise",
        description=(
            "You haven't logged much physical activity recently. Try to incorporate "
            "at least 30 minutes of exercise into your daily routine."
        ),
        priority=Priority.HIGH,
    )


def _short_sleep(history: WellnessHistory, user: User) -> Optional[RecommendationDraft]:
    if not history.sleep:
        return None
    average = sum(s.sleep_duration_hours for s in history.sleep) / len(history.sleep)
    if average >= MIN_SLEEP_HOURS:
        return None
    return RecommendationDraft(
        category=Category.SLEEP,
        title="Improve Sleep Duration",
        description=(
            f"Your average sleep duration is {average:.1f} hours. Aim for 7-9 hours "
            "of sleep per night for optimal health."
        ),
        priority=Priority.HIGH,
    )


def _poor_sleep_quality(history: WellnessHistory, user: User) -> Optional[RecommendationDraft]:
    poor = sum(1 for s in history.sleep if s.sleep_quality == SleepQuality.POOR)
    if poor < POOR_SLEEP_LIMIT:
        return None
    return RecommendationDraft(
        category=Category.SLEEP,
        title="Enhance Sleep Quality",
        description=(
            "You've reported poor sleep quality multiple times recently. Consider "
            "establishing a consistent bedtime routine."
        ),
        priority=Priority.MEDIUM,
    )


def _skipped_breakfast(history: WellnessHistory, user: User) -> Optional[RecommendationDraft]:
    meals = history.nutrition
    if len(meals) <= MIN_MEALS_FOR_BREAKFAST_CHECK:
        return None
    breakfasts = sum(1 for n in meals if n.meal_type == MealType.BREAKFAST)
    if breakfasts / len(meals) >= MIN_BREAKFAST_SHARE:
        return None
    return RecommendationDraft(
        category=Category.NUTRITION,
        title="Don't Skip Breakfast",
        description=(
            "You've been missing breakfast frequently. A healthy breakfast can boost "
            "your energy and metabolism."
        ),
        priority=Priority.MEDIUM,
    )


def _low_water_intake(history: WellnessHistory, user: User) -> Optional[RecommendationDraft]:
    if not history.hydration:
        return None
    # The window is treated as one week of entries.
    daily_average = sum(h.amount_ml for h in history.hydration) / DAYS_PER_WEEK
    if daily_average >= DAILY_WATER_TARGET_ML:
        return None
    return RecommendationDraft(
        category=Category.HYDRATION,
        title="Increase Water Intake",
        description=(
            "Your daily water intake appears low. Aim for at least 8 glasses "
            "(2000ml) of water per day."
        ),
        priority=Priority.MEDIUM,
    )


def _untracked_hydration(history: WellnessHistory, user: User) -> Optional[RecommendationDraft]:
    if history.hydration:
        return None
    if not (history.activities or history.sleep or history.nutrition or history.wellbeing):
        return None
    return RecommendationDraft(
        category=Category.HYDRATION,
        title="Track Your Hydration",
        description=(
            "Start tracking your daily water intake to ensure you're staying "
            "properly hydrated."
        ),
        priority=Priority.LOW,
    )


def _high_stress(history: WellnessHistory, user: User) -> Optional[RecommendationDraft]:
    stressed = sum(1 for w in history.wellbeing if w.stress_level in _HIGH_STRESS)
    if stressed < HIGH_STRESS_LIMIT:
        return None
    return RecommendationDraft(
        category=Category.WELLBEING,
        title="Manage Stress Levels",
        description=(
            "You've reported high stress levels frequently. Consider stress-reduction "
            "techniques like meditation or deep breathing exercises."
        ),
        priority=Priority.HIGH,
    )


def _low_energy(history: WellnessHistory, user: User) -> Optional[RecommendationDraft]:
    tired = sum(1 for w in history.wellbeing if w.energy_level in _LOW_ENERGY)
    if tired < LOW_ENERGY_LIMIT:
        return None
    return RecommendationDraft(
        category=Category.WELLBEING,
        title="Boost Energy Levels",
        description=(
            "Your energy levels have been low recently. Ensure you're getting enough "
            "sleep, nutrition, and physical activity."
        ),
        priority=Priority.MEDIUM,
    )


def _goal_reminder(history: WellnessHistory, user: User) -> Optional[RecommendationDraft]:
    goals = (user.goals or "").strip()
    if not goals:
        return None
    return RecommendationDraft(
        category=Category.GENERAL,
        title="Stay Focused on Your Goals",
        description=(
            f'Remember your goal: "{goals}". Keep tracking your progress and stay '
            "consistent with healthy habits."
        ),
        priority=Priority.LOW,
    )


RULES: tuple[Rule, ...] = (
    _too_few_activities,
    _short_sleep,
    _poor_sleep_quality,
    _skipped_breakfast,
    _low_water_intake,
    _untracked_hydration,
    _high_stress,
    _low_energy,
    _goal_reminder,
)

KEEP_IT_UP = RecommendationDraft(
    category=Category.GENERAL,
    title="Keep Up the Good Work",
    description=(
        "Your health metrics look good! Continue maintaining your healthy "
        "lifestyle habits."
    ),
    priority=Priority.LOW,
)


def evaluate_rules(history: WellnessHistory, user: User) -> list[RecommendationDraft]:
    """Run every rule over the history; deterministic for a fixed input."""
    drafts = [d for d in (r(history, user) for r in RULES) if d is not None]
    return drafts or [KEEP_IT_UP]


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class RecommendationService:
    """Generates, lists and acknowledges recommendations for a user."""

    def __init__(
        self,
        user_repo: UserRepository,
        activity_repo: ActivityRepository,
        nutrition_repo: NutritionRepository,
        hydration_repo: HydrationRepository,
        sleep_repo: SleepRepository,
        wellbeing_repo: WellbeingRepository,
        recommendation_repo: RecommendationRepository,
    ):
        self._user_repo = user_repo
        self._activity_repo = activity_repo
        self._nutrition_repo = nutrition_repo
        self._hydration_repo = hydration_repo
        self._sleep_repo = sleep_repo
        self._wellbeing_repo = wellbeing_repo
        self._recommendation_repo = recommendation_repo

    async def load_history(self, user_id: int) -> WellnessHistory:
        return WellnessHistory(
            activities=await self._activity_repo.get_recent(user_id, ACTIVITY_WINDOW),
            sleep=await self._sleep_repo.get_recent(user_id, SLEEP_WINDOW),
            nutrition=await self._nutrition_repo.get_recent(user_id, NUTRITION_WINDOW),
            hydration=await self._hydration_repo.get_recent(user_id, HYDRATION_WINDOW),
            wellbeing=await self._wellbeing_repo.get_recent(user_id, WELLBEING_WINDOW),
        )

    async def generate(self, user_id: int) -> list[Recommendation]:
        """Evaluate the rules for a user and store each result.

        Raises:
            UserNotFoundError: if the user does not exist.
        """
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        history = await self.load_history(user_id)
        drafts = evaluate_rules(history, user)
        logger.info(
            "Generated %d recommendation(s) for user %d: %s",
            len(drafts), user_id, [d.title for d in drafts],
        )

        saved = []
        for draft in drafts:
            saved.append(await self._recommendation_repo.create(user_id, draft))
        return saved

    async def list_for_user(self, user_id: int, unread_only: bool = False) -> list[Recommendation]:
        """High priority first, newest first within a priority."""
        return await self._recommendation_repo.get_by_user(user_id, unread_only=unread_only)

    async def mark_read(self, recommendation_id: int) -> Recommendation:
        recommendation = await self._recommendation_repo.mark_read(recommendation_id)
        if recommendation is None:
            raise RecommendationNotFoundError(recommendation_id)
        return recommendation
