"""
infrastructure.extraction.nutrition - Meal mentions to NutritionDraft.

The food description is taken as written up to the end of the sentence,
connector words included: "had breakfast with eggs and toast" records
"with eggs and toast". Supper is stored as dinner.
"""

from __future__ import annotations

import re
from typing import Optional

from wellness_chat.domain.models import DEFAULT_QUANTITY, MealType, NutritionDraft
from wellness_chat.infrastructure.extraction.rules import (
    ExtractionContext,
    RuleBasedExtractor,
    provenance,
    rule,
)

MEAL_WORDS = {
    "breakfast": MealType.BREAKFAST,
    "lunch": MealType.LUNCH,
    "dinner": MealType.DINNER,
    "supper": MealType.DINNER,
}

_MEAL = r"(breakfast|lunch|dinner|supper)"
_FOOD = r"([^.!?;\n]*)"
_MEAL_KEYWORD = re.compile(r"\b" + _MEAL + r"\b")
# "had 2 glasses of water for lunch" is a drink; the hydration extractor records it.
_DRINK_AMOUNT = re.compile(
    r"^(?:\w+ glass(?:es)? of|\d+(?:\.\d+)? ?(?:ml|milliliters?|millilitres?|l|liters?|litres?))\b"
)


def _clean_food(raw: str) -> str:
    return " ".join(raw.strip().lstrip("-:").split())


def _meal_draft(meal_word: str, food: str, ctx: ExtractionContext) -> Optional[NutritionDraft]:
    food = _clean_food(food)
    if not food:
        return None
    return NutritionDraft(
        meal_type=MEAL_WORDS[meal_word],
        food_item=food,
        quantity=DEFAULT_QUANTITY,
        notes=provenance(ctx.text),
    )


def _meal_first(match: re.Match, ctx: ExtractionContext) -> Optional[NutritionDraft]:
    return _meal_draft(match.group(1), match.group(2), ctx)


def _food_then_meal(match: re.Match, ctx: ExtractionContext) -> Optional[NutritionDraft]:
    if _DRINK_AMOUNT.match(_clean_food(match.group(1))):
        return None
    return _meal_draft(match.group(2), match.group(1), ctx)


def _snack(match: re.Match, ctx: ExtractionContext) -> Optional[NutritionDraft]:
    food = _clean_food(match.group(1))
    if not food:
        return None
    return NutritionDraft(
        meal_type=MealType.SNACK,
        food_item=food,
        quantity=DEFAULT_QUANTITY,
        notes=provenance(ctx.text),
    )


def _consumed_calories(match: re.Match, ctx: ExtractionContext) -> Optional[NutritionDraft]:
    calories = int(match.group(1))
    if calories <= 0:
        return None
    meal = _MEAL_KEYWORD.search(ctx.lowered)
    return NutritionDraft(
        meal_type=MEAL_WORDS[meal.group(1)] if meal else MealType.SNACK,
        food_item="meal",
        quantity=DEFAULT_QUANTITY,
        calories=float(calories),
        notes=provenance(ctx.text),
    )


class NutritionExtractor(RuleBasedExtractor):
    name = "nutrition"
    rules = (
        rule("meal_first", r"\bhad " + _MEAL + r"\b" + _FOOD, _meal_first, group="meal"),
        rule(
            "food_then_meal",
            r"\b(?:ate|had) ([^.!?;\n]+?) for " + _MEAL + r"\b",
            _food_then_meal,
            group="meal",
        ),
        rule("meal_colon", r"\b" + _MEAL + r"(?::| was\b)" + _FOOD, _meal_first, group="meal"),
        rule(
            "food_as_snack",
            r"\bate ([^.!?;\n]+?) (?:as|for) (?:a )?snack\b",
            _snack,
            group="snack",
        ),
        rule("had_snack", r"\bhad (?:a |an )?snack\b" + _FOOD, _snack, group="snack"),
        rule("snacked_on", r"\bsnacked on " + _FOOD, _snack, group="snack"),
        rule("snack_colon", r"\bsnack(?::| was\b)" + _FOOD, _snack, group="snack"),
        rule("consumed_calories", r"\bconsumed (\d+) ?(?:calories|kcal)\b", _consumed_calories),
    )
