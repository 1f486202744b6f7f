"""
infrastructure.extraction.wellbeing - Mood, stress and energy to WellbeingDraft.

Each dimension is matched on its own; the partial hits are merged into a
single draft per message. Dimensions the user did not mention stay None
(the repository fills them in when the record is saved).
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from wellness_chat.domain.models import Level, Mood, TrackingDraft, WellbeingDraft
from wellness_chat.infrastructure.extraction.rules import (
    ExtractionContext,
    RuleBasedExtractor,
    provenance,
    rule,
)

MOOD_WORDS = {
    "terrible": Mood.VERY_POOR, "awful": Mood.VERY_POOR, "horrible": Mood.VERY_POOR,
    "miserable": Mood.VERY_POOR, "very_poor": Mood.VERY_POOR, "very poor": Mood.VERY_POOR,
    "bad": Mood.POOR, "sad": Mood.POOR, "down": Mood.POOR, "upset": Mood.POOR,
    "unhappy": Mood.POOR, "poor": Mood.POOR,
    "okay": Mood.NEUTRAL, "ok": Mood.NEUTRAL, "fine": Mood.NEUTRAL, "fair": Mood.NEUTRAL,
    "alright": Mood.NEUTRAL, "neutral": Mood.NEUTRAL, "meh": Mood.NEUTRAL,
    "good": Mood.GOOD, "great": Mood.GOOD, "happy": Mood.GOOD, "well": Mood.GOOD,
    "positive": Mood.GOOD,
    "amazing": Mood.EXCELLENT, "fantastic": Mood.EXCELLENT, "excellent": Mood.EXCELLENT,
    "wonderful": Mood.EXCELLENT, "awesome": Mood.EXCELLENT,
}

# Ordered so that at any start position the longer phrase is tried first.
STRESS_PHRASES = (
    ("extremely stressed", Level.VERY_HIGH),
    ("very stressed", Level.VERY_HIGH),
    ("super stressed", Level.VERY_HIGH),
    ("overwhelmed", Level.VERY_HIGH),
    ("a bit stressed", Level.MODERATE),
    ("a little stressed", Level.MODERATE),
    ("slightly stressed", Level.MODERATE),
    ("somewhat stressed", Level.MODERATE),
    ("not stressed", Level.LOW),
    ("stress-free", Level.VERY_LOW),
    ("stress free", Level.VERY_LOW),
    ("very relaxed", Level.VERY_LOW),
    ("completely relaxed", Level.VERY_LOW),
    ("stressed", Level.HIGH),
    ("anxious", Level.HIGH),
    ("under pressure", Level.HIGH),
    ("tense", Level.HIGH),
    ("relaxed", Level.LOW),
    ("calm", Level.LOW),
)

ENERGY_PHRASES = (
    ("full of energy", Level.VERY_HIGH),
    ("bursting with energy", Level.VERY_HIGH),
    ("very energetic", Level.VERY_HIGH),
    ("super energetic", Level.VERY_HIGH),
    ("exhausted", Level.VERY_LOW),
    ("drained", Level.VERY_LOW),
    ("burned out", Level.VERY_LOW),
    ("burnt out", Level.VERY_LOW),
    ("wiped out", Level.VERY_LOW),
    ("low on energy", Level.LOW),
    ("low energy", Level.LOW),
    ("tired", Level.LOW),
    ("sleepy", Level.LOW),
    ("fatigued", Level.LOW),
    ("sluggish", Level.LOW),
    ("high energy", Level.HIGH),
    ("energetic", Level.HIGH),
    ("energized", Level.HIGH),
    ("energised", Level.HIGH),
)

_LEVEL = r"(very[_ ]low|low|moderate|high|very[_ ]high)"
_MOOD_WORD = "|".join(sorted((re.escape(w) for w in MOOD_WORDS), key=len, reverse=True))


def _alternation(phrases: tuple[tuple[str, Level], ...]) -> str:
    return r"\b(" + "|".join(re.escape(p) for p, _ in phrases) + r")\b"


def _level(raw: str) -> Level:
    return Level(raw.replace(" ", "_"))


def _mood(match: re.Match, ctx: ExtractionContext) -> WellbeingDraft:
    return WellbeingDraft(mood=MOOD_WORDS[match.group(1)])


def _stated_mood(match: re.Match, ctx: ExtractionContext) -> WellbeingDraft:
    return WellbeingDraft(mood=Mood(match.group(1).replace(" ", "_")))


def _stated_stress(match: re.Match, ctx: ExtractionContext) -> WellbeingDraft:
    return WellbeingDraft(stress_level=_level(match.group(1)))


def _stress(match: re.Match, ctx: ExtractionContext) -> WellbeingDraft:
    return WellbeingDraft(stress_level=dict(STRESS_PHRASES)[match.group(1)])


def _stated_energy(match: re.Match, ctx: ExtractionContext) -> WellbeingDraft:
    return WellbeingDraft(energy_level=_level(match.group(1)))


def _energy(match: re.Match, ctx: ExtractionContext) -> WellbeingDraft:
    return WellbeingDraft(energy_level=dict(ENERGY_PHRASES)[match.group(1)])


class WellbeingExtractor(RuleBasedExtractor):
    name = "wellbeing"
    rules = (
        rule(
            "stated_mood",
            r"\bmood (?:is|was) (very[_ ]poor|poor|neutral|good|excellent)\b",
            _stated_mood,
            group="mood",
        ),
        rule(
            "mood",
            r"\b(?<!not )(?<!n't )(?<!never )(?:feel|feeling|felt|mood is|mood was|i am|i'm|im)"
            r" (?:very |really |so |pretty |quite )?(" + _MOOD_WORD + r")\b"
            r"(?!(?<=down) (?:to|for)\b)",
            _mood,
            group="mood",
        ),
        rule("stated_stress", r"\bstress level (?:is|was) " + _LEVEL, _stated_stress, group="stress"),
        rule("stress", _alternation(STRESS_PHRASES), _stress, group="stress"),
        rule("stated_energy", r"\benergy level (?:is|was) " + _LEVEL, _stated_energy, group="energy"),
        rule("energy", _alternation(ENERGY_PHRASES), _energy, group="energy"),
    )

    def extract(self, text: str, now: datetime) -> list[TrackingDraft]:
        partials = super().extract(text, now)
        if not partials:
            return []
        merged = _merge(partials, provenance(text))
        return [merged] if merged is not None else []


def _merge(partials: list[WellbeingDraft], notes: str) -> Optional[WellbeingDraft]:
    mood = next((p.mood for p in partials if p.mood is not None), None)
    stress = next((p.stress_level for p in partials if p.stress_level is not None), None)
    energy = next((p.energy_level for p in partials if p.energy_level is not None), None)
    if mood is None and stress is None and energy is None:
        return None
    return WellbeingDraft(mood=mood, stress_level=stress, energy_level=energy, notes=notes)
