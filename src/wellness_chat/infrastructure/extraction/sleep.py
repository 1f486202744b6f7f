"""
infrastructure.extraction.sleep - Sleep mentions to SleepDraft.

Two ways to describe the night, explicit clock times taking precedence:
    "went to bed at 11:45pm and woke up at 8:15am"
    "slept for 8 hours" / "got 7 hours of sleep"   (ends now)

"sleep quality was good" annotates whichever night the message described,
or on its own records a default 8-hour night ending now.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta
from typing import Optional

from wellness_chat.domain.models import SleepDraft, SleepQuality
from wellness_chat.infrastructure.extraction.rules import (
    ExtractionContext,
    RuleBasedExtractor,
    provenance,
    rule,
)
from wellness_chat.infrastructure.extraction.units import to_24h

DEFAULT_NIGHT_HOURS = 8
MAX_NIGHT_HOURS = 24

_CLOCK = r"(\d{1,2})(?::(\d{2}))? ?(am|pm)\b"


def _clock_time(now: datetime, hour: str, minute: Optional[str], period: str) -> Optional[datetime]:
    h, m = int(hour), int(minute or 0)
    if not 1 <= h <= 12 or not 0 <= m <= 59:
        return None
    return now.replace(hour=to_24h(h, period), minute=m, second=0, microsecond=0)


def _explicit_times(match: re.Match, ctx: ExtractionContext) -> Optional[SleepDraft]:
    bedtime = _clock_time(ctx.now, match.group(1), match.group(2), match.group(3))
    wake_time = _clock_time(ctx.now, match.group(4), match.group(5), match.group(6))
    if bedtime is None or wake_time is None:
        return None
    if wake_time <= bedtime:
        wake_time += timedelta(days=1)
    # A night cannot end in the future; it was the one before.
    if wake_time > ctx.now:
        bedtime -= timedelta(days=1)
        wake_time -= timedelta(days=1)
    return SleepDraft(bedtime=bedtime, wake_time=wake_time, notes=provenance(ctx.text))


def _duration(match: re.Match, ctx: ExtractionContext) -> Optional[SleepDraft]:
    hours = float(match.group(1))
    if not 0 < hours <= MAX_NIGHT_HOURS:
        return None
    return SleepDraft(
        bedtime=ctx.now - timedelta(hours=hours),
        wake_time=ctx.now,
        notes=provenance(ctx.text),
    )


def _quality(match: re.Match, ctx: ExtractionContext) -> Optional[SleepDraft]:
    quality = SleepQuality(match.group(1))
    for index, draft in enumerate(ctx.drafts):
        if isinstance(draft, SleepDraft):
            ctx.drafts[index] = draft.with_quality(quality)
            return None
    return SleepDraft(
        bedtime=ctx.now - timedelta(hours=DEFAULT_NIGHT_HOURS),
        wake_time=ctx.now,
        sleep_quality=quality,
        notes=provenance(ctx.text),
    )


class SleepExtractor(RuleBasedExtractor):
    name = "sleep"
    rules = (
        rule(
            "explicit_times",
            r"\b(?:went to bed|went to sleep|fell asleep)(?: at)? " + _CLOCK
            + r".*?\b(?:woke up|woke|got up)(?: at)? " + _CLOCK,
            _explicit_times,
            group="night",
        ),
        rule(
            "slept_for",
            r"\bslept (?:for )?(\d+(?:\.\d+)?) ?(?:hours?|hrs?)\b",
            _duration,
            group="night",
        ),
        rule(
            "hours_of_sleep",
            r"\bgot (\d+(?:\.\d+)?) ?(?:hours?|hrs?) of sleep\b",
            _duration,
            group="night",
        ),
        rule(
            "quality",
            r"\bsleep quality (?:was|is) (poor|fair|good|excellent)\b",
            _quality,
        ),
    )
