"""
infrastructure.extraction - Rule-based text understanding.

One extractor per tracking domain, plus the intent router that decides
whether a message asks for recommendations instead.
"""

from __future__ import annotations

from wellness_chat.infrastructure.extraction.activity import ActivityExtractor
from wellness_chat.infrastructure.extraction.hydration import HydrationExtractor
from wellness_chat.infrastructure.extraction.intent_router import KeywordIntentRouter
from wellness_chat.infrastructure.extraction.nutrition import NutritionExtractor
from wellness_chat.infrastructure.extraction.sleep import SleepExtractor
from wellness_chat.infrastructure.extraction.wellbeing import WellbeingExtractor


def default_extractors() -> list:
    """All domain extractors in the order their results are reported."""
    return [
        ActivityExtractor(),
        NutritionExtractor(),
        HydrationExtractor(),
        SleepExtractor(),
        WellbeingExtractor(),
    ]


__all__ = [
    "ActivityExtractor",
    "HydrationExtractor",
    "KeywordIntentRouter",
    "NutritionExtractor",
    "SleepExtractor",
    "WellbeingExtractor",
    "default_extractors",
]
