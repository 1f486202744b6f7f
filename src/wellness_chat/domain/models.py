"""
domain.models - Value objects for the extraction and recommendation pipeline.

Drafts are immutable candidate records produced by the extractors and the
recommendation rule engine. They carry no identity and no timestamps of
their own; a repository turns them into entities (see domain.entities).

No dependencies on infrastructure (no SQLite, no regex tables).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from wellness_chat.domain.exceptions import InvalidRecordError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Direction(str, Enum):
    """Who authored a chat message."""
    USER = "user"
    SYSTEM = "system"


class Intensity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class MealType(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class SleepQuality(str, Enum):
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


class Mood(str, Enum):
    VERY_POOR = "very_poor"
    POOR = "poor"
    NEUTRAL = "neutral"
    GOOD = "good"
    EXCELLENT = "excellent"


class Level(str, Enum):
    """Five-point scale shared by stress and energy."""
    VERY_LOW = "very_low"
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    VERY_HIGH = "very_high"


class Category(str, Enum):
    ACTIVITY = "activity"
    NUTRITION = "nutrition"
    HYDRATION = "hydration"
    SLEEP = "sleep"
    WELLBEING = "wellbeing"
    GENERAL = "general"


class Priority(str, Enum):
    """Ordinal urgency: low < medium < high."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


DEFAULT_QUANTITY = "1 serving"
DEFAULT_BEVERAGE = "water"


# ---------------------------------------------------------------------------
# Tracking drafts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ActivityDraft:
    """A candidate activity record.

    notes holds the provenance of extracted drafts (the verbatim message).
    """
    activity_type: str
    duration_minutes: int
    calories_burned: Optional[float] = None
    intensity: Optional[Intensity] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.activity_type.strip():
            raise InvalidRecordError("activity_type must not be empty")
        if self.duration_minutes < 1:
            raise InvalidRecordError(
                f"duration_minutes must be >= 1, got {self.duration_minutes}"
            )
        if self.calories_burned is not None and self.calories_burned <= 0:
            raise InvalidRecordError(
                f"calories_burned must be > 0, got {self.calories_burned}"
            )


@dataclass(frozen=True)
class NutritionDraft:
    """A candidate meal record. Macros are only ever set by manual entry."""
    meal_type: MealType
    food_item: str
    quantity: str = DEFAULT_QUANTITY
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.food_item.strip():
            raise InvalidRecordError("food_item must not be empty")
        if self.calories is not None and self.calories <= 0:
            raise InvalidRecordError(f"calories must be > 0, got {self.calories}")
        for name in ("protein", "carbs", "fat"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise InvalidRecordError(f"{name} must be >= 0, got {value}")


@dataclass(frozen=True)
class HydrationDraft:
    amount_ml: int
    beverage_type: str = DEFAULT_BEVERAGE

    def __post_init__(self) -> None:
        if self.amount_ml <= 0:
            raise InvalidRecordError(f"amount_ml must be > 0, got {self.amount_ml}")


@dataclass(frozen=True)
class SleepDraft:
    """A candidate sleep record.

    Duration is never stored on the draft; it is always derived from
    wake_time - bedtime.
    """
    bedtime: datetime
    wake_time: datetime
    sleep_quality: Optional[SleepQuality] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if self.wake_time <= self.bedtime:
            raise InvalidRecordError(
                f"wake_time ({self.wake_time.isoformat()}) must be after "
                f"bedtime ({self.bedtime.isoformat()})"
            )

    @property
    def duration_hours(self) -> float:
        return (self.wake_time - self.bedtime).total_seconds() / 3600.0

    def with_quality(self, quality: SleepQuality) -> SleepDraft:
        return replace(self, sleep_quality=quality)


@dataclass(frozen=True)
class WellbeingDraft:
    """A candidate mood/stress/energy record.

    Each dimension stays None unless the user actually mentioned it.
    Middle values are only filled in by with_defaults(), right before the
    record is persisted.
    """
    mood: Optional[Mood] = None
    stress_level: Optional[Level] = None
    energy_level: Optional[Level] = None
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.detected_dimensions:
            raise InvalidRecordError(
                "a wellbeing record needs at least one of mood, stress or energy"
            )

    @property
    def detected_dimensions(self) -> dict[str, str]:
        found = {
            "mood": self.mood,
            "stress": self.stress_level,
            "energy": self.energy_level,
        }
        return {k: v.value for k, v in found.items() if v is not None}

    def with_defaults(self) -> WellbeingDraft:
        return replace(
            self,
            mood=self.mood or Mood.NEUTRAL,
            stress_level=self.stress_level or Level.MODERATE,
            energy_level=self.energy_level or Level.MODERATE,
        )


TrackingDraft = Union[
    ActivityDraft, NutritionDraft, HydrationDraft, SleepDraft, WellbeingDraft,
]


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RecommendationDraft:
    category: Category
    title: str
    description: str
    priority: Priority
