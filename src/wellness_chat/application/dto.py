"""
application.dto - Data Transfer Objects for service input/output.

These are the structured results that services return to callers
(the CLI adapter and the tests).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from wellness_chat.domain.entities import (
    Activity,
    ChatMessage,
    Hydration,
    Nutrition,
    Recommendation,
    Sleep,
    Wellbeing,
)
from wellness_chat.domain.models import TrackingDraft


@dataclass(frozen=True)
class WellnessHistory:
    """Most-recent-first windows of a user's records, as read by the rule engine."""
    activities: list[Activity] = field(default_factory=list)
    sleep: list[Sleep] = field(default_factory=list)
    nutrition: list[Nutrition] = field(default_factory=list)
    hydration: list[Hydration] = field(default_factory=list)
    wellbeing: list[Wellbeing] = field(default_factory=list)


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of running one chat message through the pipeline.

    reply is None when the message was skipped (already processed or
    authored by the system).
    """
    message: ChatMessage
    reply: Optional[ChatMessage] = None
    drafts: tuple[TrackingDraft, ...] = ()
    recommendations: tuple[Recommendation, ...] = ()

    @property
    def skipped(self) -> bool:
        return self.reply is None


@dataclass(frozen=True)
class CreateUserRequest:
    """Input for registering a profile."""
    name: str
    email: str
    age: Optional[int] = None
    gender: Optional[str] = None
    height: Optional[float] = None
    weight: Optional[float] = None
    activity_level: Optional[str] = None
    goals: Optional[str] = None


@dataclass(frozen=True)
class DailySummary:
    """Everything recorded for one user on one calendar day."""
    activities: list[Activity]
    nutrition: list[Nutrition]
    hydration: list[Hydration]
    sleep: list[Sleep]
    wellbeing: list[Wellbeing]
