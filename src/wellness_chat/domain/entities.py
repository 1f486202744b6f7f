"""
domain.entities - Persistence-aware types (have IDs, timestamps).

Decoupled from any persistence strategy: no SQL and no DB imports.
Timestamps are set by the repository implementations, not by the entities
themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from wellness_chat.domain.models import (
    Category,
    Direction,
    Intensity,
    Level,
    MealType,
    Mood,
    Priority,
    SleepQuality,
)


@dataclass
class User:
    """User profile captured during onboarding."""
    id: Optional[int] = None
    name: str = ""
    email: str = ""
    age: Optional[int] = None
    gender: Optional[str] = None
    height: Optional[float] = None          # cm
    weight: Optional[float] = None          # kg
    activity_level: Optional[str] = None
    goals: Optional[str] = None
    onboarding_completed: bool = False
    created_at: Optional[datetime] = None


@dataclass
class Activity:
    id: int
    user_id: int
    activity_type: str
    duration_minutes: int
    recorded_at: datetime
    created_at: datetime
    calories_burned: Optional[float] = None
    intensity: Optional[Intensity] = None
    notes: Optional[str] = None


@dataclass
class Nutrition:
    id: int
    user_id: int
    meal_type: MealType
    food_item: str
    quantity: str
    recorded_at: datetime
    created_at: datetime
    calories: Optional[float] = None
    protein: Optional[float] = None
    carbs: Optional[float] = None
    fat: Optional[float] = None
    notes: Optional[str] = None


@dataclass
class Hydration:
    id: int
    user_id: int
    amount_ml: int
    beverage_type: str
    recorded_at: datetime
    created_at: datetime


@dataclass
class Sleep:
    id: int
    user_id: int
    bedtime: datetime
    wake_time: datetime
    sleep_duration_hours: float
    recorded_at: datetime
    created_at: datetime
    sleep_quality: Optional[SleepQuality] = None
    notes: Optional[str] = None


@dataclass
class Wellbeing:
    """Persisted wellbeing entry. All three dimensions are always set."""
    id: int
    user_id: int
    mood: Mood
    stress_level: Level
    energy_level: Level
    recorded_at: datetime
    created_at: datetime
    notes: Optional[str] = None


@dataclass
class ChatMessage:
    """A single chat message.

    extracted is set once tracking data was saved from the message and is
    never cleared. processed_at marks the pipeline claim on the message.
    """
    id: Optional[int] = None
    user_id: Optional[int] = None
    message: str = ""
    direction: Direction = Direction.USER
    extracted: bool = False
    processed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


@dataclass
class Recommendation:
    id: int
    user_id: int
    category: Category
    title: str
    description: str
    priority: Priority
    is_read: bool
    created_at: datetime
