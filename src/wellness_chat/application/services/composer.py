"""
application.services.composer - System replies for the chat.

Pure formatting: every method returns an unsaved ChatMessage authored by
the system. Persisting it is the caller's job.
"""

from __future__ import annotations

from typing import Sequence

from wellness_chat.domain.entities import ChatMessage, Recommendation
from wellness_chat.domain.models import (
    ActivityDraft,
    Direction,
    HydrationDraft,
    NutritionDraft,
    SleepDraft,
    TrackingDraft,
    WellbeingDraft,
)

BULLET = "•"

HELP_TEXT = (
    "I couldn't find anything to track in that message. Try telling me things like:\n"
    f"{BULLET} \"I ran for 30 minutes this morning\"\n"
    f"{BULLET} \"I had a chicken salad for lunch\"\n"
    f"{BULLET} \"I drank 2 glasses of water\"\n"
    f"{BULLET} \"I slept for 8 hours last night\"\n"
    f"{BULLET} \"I'm feeling good today\"\n"
    "Or ask me for recommendations any time."
)

RECOMMENDATION_FAILURE_TEXT = (
    "I encountered an issue generating recommendations. Please try again later."
)

PROCESSING_ERROR_TEXT = (
    "Sorry, something went wrong while processing your message. Please try again."
)


def _number(value: float) -> str:
    """8.0 -> "8", 8.5 -> "8.5"."""
    return f"{value:.1f}".rstrip("0").rstrip(".")


def describe_draft(draft: TrackingDraft) -> str:
    """One human-readable line for an extracted draft."""
    if isinstance(draft, ActivityDraft):
        line = f"{draft.activity_type} for {draft.duration_minutes} minutes"
        if draft.calories_burned:
            line += f" ({_number(draft.calories_burned)} calories burned)"
        return line
    if isinstance(draft, NutritionDraft):
        line = f"{draft.meal_type.value}: {draft.food_item}"
        if draft.calories:
            line += f" ({_number(draft.calories)} calories)"
        return line
    if isinstance(draft, HydrationDraft):
        return f"{draft.amount_ml}ml of {draft.beverage_type}"
    if isinstance(draft, SleepDraft):
        line = f"{_number(draft.duration_hours)} hours of sleep"
        if draft.sleep_quality is not None:
            line += f" ({draft.sleep_quality.value} quality)"
        return line
    if isinstance(draft, WellbeingDraft):
        return ", ".join(
            f"{name}: {value.replace('_', ' ')}"
            for name, value in draft.detected_dimensions.items()
        )
    raise TypeError(f"Unsupported draft type: {type(draft).__name__}")


class ResponseComposer:
    """Builds the system side of the conversation."""

    def __init__(self, digest_size: int = 3):
        self._digest_size = digest_size

    def acknowledgement(self, user_id: int, drafts: Sequence[TrackingDraft]) -> ChatMessage:
        lines = [f"{BULLET} {describe_draft(d)}" for d in drafts]
        text = "Great! I've recorded the following:\n" + "\n".join(lines)
        return self._system(user_id, text)

    def digest(self, user_id: int, recommendations: Sequence[Recommendation]) -> ChatMessage:
        shown = recommendations[: self._digest_size]
        lines = [
            f"{i}. {r.title} - {r.description}"
            for i, r in enumerate(shown, start=1)
        ]
        text = "Here are my recommendations for you:\n\n" + "\n\n".join(lines)
        remaining = len(recommendations) - len(shown)
        if remaining > 0:
            plural = "s" if remaining != 1 else ""
            text += f"\n\n...and {remaining} more recommendation{plural} in your list."
        return self._system(user_id, text)

    def help(self, user_id: int) -> ChatMessage:
        return self._system(user_id, HELP_TEXT)

    def recommendation_failure(self, user_id: int) -> ChatMessage:
        return self._system(user_id, RECOMMENDATION_FAILURE_TEXT)

    def processing_error(self, user_id: int) -> ChatMessage:
        return self._system(user_id, PROCESSING_ERROR_TEXT)

    @staticmethod
    def _system(user_id: int, text: str) -> ChatMessage:
        return ChatMessage(user_id=user_id, message=text, direction=Direction.SYSTEM)
