"""
infrastructure.extraction.units - Unit conversions and small text helpers.

Every conversion returns a whole number because activity minutes and
hydration milliliters are stored as integers.
"""

from __future__ import annotations

from typing import Optional

MINUTES_PER_HOUR = 60
ML_PER_LITER = 1000
ML_PER_GLASS = 250

WORD_NUMBERS = {
    "a": 1, "an": 1, "one": 1, "two": 2, "three": 3, "four": 4, "five": 5,
    "six": 6, "seven": 7, "eight": 8, "nine": 9, "ten": 10, "eleven": 11,
    "twelve": 12,
}


def hours_to_minutes(hours: float) -> int:
    return int(round(hours * MINUTES_PER_HOUR))


def liters_to_ml(liters: float) -> int:
    return int(round(liters * ML_PER_LITER))


def glasses_to_ml(glasses: float) -> int:
    return int(round(glasses * ML_PER_GLASS))


def parse_number(token: str) -> Optional[float]:
    """Parse "2", "1.5" or a spelled-out count ("two", "a")."""
    token = token.strip().lower()
    if token in WORD_NUMBERS:
        return float(WORD_NUMBERS[token])
    try:
        return float(token)
    except ValueError:
        return None


def to_24h(hour: int, period: str) -> int:
    """Convert a 12-hour clock hour; 12am is midnight and 12pm is noon."""
    period = period.lower()
    if period == "am":
        return 0 if hour == 12 else hour
    return 12 if hour == 12 else hour + 12
