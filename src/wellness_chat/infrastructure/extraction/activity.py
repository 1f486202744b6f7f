"""
infrastructure.extraction.activity - Exercise mentions to ActivityDraft.

Recognised phrasings:
    "I ran for 30 minutes"              -> running, 30 min, moderate
    "cycled for 2 hours"                -> cycling, 120 min
    "45 minutes of yoga"                -> yoga, 45 min
    "burned 300 calories playing tennis" -> sports, 30 min, high, 300 kcal
"""

from __future__ import annotations

import re
from typing import Optional

from wellness_chat.domain.models import ActivityDraft, Intensity
from wellness_chat.infrastructure.extraction.rules import (
    ExtractionContext,
    RuleBasedExtractor,
    provenance,
    rule,
)
from wellness_chat.infrastructure.extraction.units import hours_to_minutes

VERB_TYPES = {
    "ran": "running",
    "walked": "walking",
    "cycled": "cycling",
    "swam": "swimming",
    "exercised": "exercise",
    "worked out": "exercise",
}

# Description keyword -> (activity_type, intensity), first hit wins.
CALORIE_INFERENCE = (
    ("basketball", "sports", Intensity.HIGH),
    ("tennis", "sports", Intensity.HIGH),
    ("soccer", "sports", Intensity.HIGH),
    ("walking", "walking", Intensity.LOW),
    ("running", "running", Intensity.HIGH),
)

CALORIES_PER_MINUTE = 10

# "20 minutes of sleep" belongs to the sleep extractor.
NOT_ACTIVITIES = ("sleep", "rest")

_DESCRIPTION_END = r"(?=[.,!?;\n]|\s+(?:and|then|today|yesterday|this|last|at|in|with|for)\b|$)"


def _verb_minutes(match: re.Match, ctx: ExtractionContext) -> Optional[ActivityDraft]:
    minutes = int(match.group(2))
    if minutes < 1:
        return None
    return ActivityDraft(
        activity_type=VERB_TYPES[match.group(1)],
        duration_minutes=minutes,
        intensity=Intensity.MODERATE,
        notes=provenance(ctx.text),
    )


def _cycling_hours(match: re.Match, ctx: ExtractionContext) -> Optional[ActivityDraft]:
    minutes = hours_to_minutes(float(match.group(1)))
    if minutes < 1:
        return None
    return ActivityDraft(
        activity_type="cycling",
        duration_minutes=minutes,
        intensity=Intensity.MODERATE,
        notes=provenance(ctx.text),
    )


def _minutes_of(match: re.Match, ctx: ExtractionContext) -> Optional[ActivityDraft]:
    minutes = int(match.group(1))
    description = " ".join(match.group(2).split())
    if minutes < 1 or not description or description.startswith(NOT_ACTIVITIES):
        return None
    return ActivityDraft(
        activity_type=description,
        duration_minutes=minutes,
        notes=provenance(ctx.text),
    )


def _burned_calories(match: re.Match, ctx: ExtractionContext) -> Optional[ActivityDraft]:
    calories = int(match.group(1))
    if calories <= 0:
        return None
    description = " ".join(match.group(2).split())
    activity_type, intensity = infer_activity(description)
    return ActivityDraft(
        activity_type=activity_type,
        duration_minutes=max(1, round(calories / CALORIES_PER_MINUTE)),
        calories_burned=float(calories),
        intensity=intensity,
        notes=provenance(ctx.text),
    )


def infer_activity(description: str) -> tuple[str, Intensity]:
    """Guess type and intensity from a free-text activity description."""
    for keyword, activity_type, intensity in CALORIE_INFERENCE:
        if keyword in description:
            return activity_type, intensity
    return "exercise", Intensity.MODERATE


class ActivityExtractor(RuleBasedExtractor):
    name = "activity"
    rules = (
        rule(
            "verb_minutes",
            r"\b(ran|walked|cycled|swam|exercised|worked out) for (\d+) ?(?:minutes?|mins?)\b",
            _verb_minutes,
            group="duration",
        ),
        rule(
            "cycling_hours",
            r"\bcycled for (\d+(?:\.\d+)?) ?(?:hours?|hrs?)\b",
            _cycling_hours,
            group="duration",
        ),
        rule(
            "minutes_of",
            r"\b(\d+) ?(?:minutes?|mins?) of ([a-z][a-z ]*?)" + _DESCRIPTION_END,
            _minutes_of,
            skip_overlapping=True,
        ),
        rule(
            "burned_calories",
            r"\bburned (\d+) ?(?:calories|kcal) (?:playing|doing) ([a-z][a-z ]*?)" + _DESCRIPTION_END,
            _burned_calories,
        ),
    )
