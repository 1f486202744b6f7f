"""
infrastructure.extraction.hydration - Drink mentions to HydrationDraft.

Amounts are normalized to milliliters: liters x 1000, glasses x 250.
A bare "drank water" counts as one glass, but only when nothing more
specific was found in the message.
"""

from __future__ import annotations

import re
from typing import Optional

from wellness_chat.domain.models import DEFAULT_BEVERAGE, HydrationDraft
from wellness_chat.infrastructure.extraction.rules import (
    ExtractionContext,
    RuleBasedExtractor,
    rule,
)
from wellness_chat.infrastructure.extraction.units import (
    ML_PER_GLASS,
    WORD_NUMBERS,
    glasses_to_ml,
    liters_to_ml,
    parse_number,
)

MAX_BEVERAGE_WORDS = 2

_STOPWORDS = frozenset({
    "and", "then", "today", "yesterday", "this", "last", "tonight", "with",
    "after", "before", "during", "in", "at", "for", "to", "while", "so",
    "but", "because", "throughout", "all", "every", "since", "around",
})

_REST = r"([^.!?;\n]*)"
_COUNT = r"(\d+|" + "|".join(WORD_NUMBERS) + r")"


def beverage_from(tail: str) -> str:
    """Pick the beverage name out of the words that follow an amount."""
    words = tail.split()
    if words and words[0] == "of":
        words = words[1:]
    picked: list[str] = []
    for word in words:
        word = word.strip(",:'\"")
        if not word or word in _STOPWORDS or not word.isalpha():
            break
        picked.append(word)
        if len(picked) == MAX_BEVERAGE_WORDS:
            break
    return " ".join(picked) or DEFAULT_BEVERAGE


def _draft(amount_ml: int, tail: str) -> Optional[HydrationDraft]:
    if amount_ml <= 0:
        return None
    return HydrationDraft(amount_ml=amount_ml, beverage_type=beverage_from(tail))


def _milliliters(match: re.Match, ctx: ExtractionContext) -> Optional[HydrationDraft]:
    return _draft(int(round(float(match.group(1)))), match.group(2))


def _liters(match: re.Match, ctx: ExtractionContext) -> Optional[HydrationDraft]:
    return _draft(liters_to_ml(float(match.group(1))), match.group(2))


def _glasses(match: re.Match, ctx: ExtractionContext) -> Optional[HydrationDraft]:
    count = parse_number(match.group(1))
    if count is None:
        return None
    return _draft(glasses_to_ml(count), match.group(2))


def _plain_water(match: re.Match, ctx: ExtractionContext) -> HydrationDraft:
    return HydrationDraft(amount_ml=ML_PER_GLASS, beverage_type=DEFAULT_BEVERAGE)


class HydrationExtractor(RuleBasedExtractor):
    name = "hydration"
    rules = (
        rule(
            "milliliters",
            r"\b(?:drank|had|consumed) (\d+(?:\.\d+)?) ?(?:ml|milliliters?|millilitres?)\b" + _REST,
            _milliliters,
        ),
        rule(
            "liters",
            r"\b(?:drank|had|consumed) (\d+(?:\.\d+)?) ?(?:l|liters?|litres?)\b" + _REST,
            _liters,
            group="liters",
        ),
        rule(
            "bare_liters",
            r"\b(\d+(?:\.\d+)?) ?(?:liters?|litres?) (of [^.!?;\n]*)",
            _liters,
            group="liters",
        ),
        rule("glasses", r"\b" + _COUNT + r" glass(?:es)? (of [^.!?;\n]*)", _glasses),
        rule("plain_water", r"\bdrank (?:some )?water\b", _plain_water, only_if_empty=True),
    )
