"""
infrastructure.extraction.rules - Ordered pattern tables shared by every extractor.

An extractor is an ordered list of PatternRule objects scanned top to
bottom over the lower-cased message. Each rule that matches hands its match
to a handler, which returns at most one draft (or None to decline).

Three things can stop a matching rule from contributing:

* group: only the first rule of a group that yields a draft counts, so
  "cycled for 2 hours" is never also read as minutes.
* only_if_empty: fallback rules run only while the extractor has produced
  nothing for the message.
* skip_overlapping: the rule only looks at matches that do not overlap
  text an earlier rule already turned into a draft, so "worked out for
  45 minutes of cardio" stays one activity.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional, Sequence

from wellness_chat.domain.exceptions import InvalidRecordError
from wellness_chat.domain.models import TrackingDraft

logger = logging.getLogger(__name__)


@dataclass
class ExtractionContext:
    """Everything a handler may look at while one message is scanned."""
    text: str
    lowered: str
    now: datetime
    drafts: list[TrackingDraft] = field(default_factory=list)
    spans: list[tuple[int, int]] = field(default_factory=list)

    def overlaps(self, match: re.Match) -> bool:
        start, end = match.span()
        return any(start < used_end and used_start < end for used_start, used_end in self.spans)


Handler = Callable[[re.Match, ExtractionContext], Optional[TrackingDraft]]


@dataclass(frozen=True)
class PatternRule:
    name: str
    pattern: re.Pattern
    handler: Handler
    group: Optional[str] = None
    only_if_empty: bool = False
    skip_overlapping: bool = False


def rule(
    name: str,
    pattern: str,
    handler: Handler,
    group: Optional[str] = None,
    only_if_empty: bool = False,
    skip_overlapping: bool = False,
) -> PatternRule:
    """Build a PatternRule from a raw regex string."""
    return PatternRule(
        name, re.compile(pattern), handler, group, only_if_empty, skip_overlapping,
    )


class RuleBasedExtractor:
    """Base class for the domain extractors.

    Subclasses set ``name`` and ``rules``. A handler may also replace a draft
    already in ``ctx.drafts`` (sleep quality does this) and return None.
    """

    name: str = "base"
    rules: Sequence[PatternRule] = ()

    def extract(self, text: str, now: datetime) -> list[TrackingDraft]:
        ctx = ExtractionContext(text=text, lowered=text.lower(), now=now)
        settled_groups: set[str] = set()

        for current in self.rules:
            if current.group is not None and current.group in settled_groups:
                continue
            if current.only_if_empty and ctx.drafts:
                continue
            match = self._find(current, ctx)
            if match is None:
                continue
            try:
                draft = current.handler(match, ctx)
            except InvalidRecordError as exc:
                logger.debug("Rule %s.%s rejected %r: %s", self.name, current.name, match.group(0), exc)
                continue
            if draft is None:
                continue
            ctx.drafts.append(draft)
            ctx.spans.append(match.span())
            if current.group is not None:
                settled_groups.add(current.group)
            logger.debug("Rule %s.%s matched %r", self.name, current.name, match.group(0))

        return ctx.drafts

    @staticmethod
    def _find(current: PatternRule, ctx: ExtractionContext) -> Optional[re.Match]:
        if not current.skip_overlapping:
            return current.pattern.search(ctx.lowered)
        return next(
            (m for m in current.pattern.finditer(ctx.lowered) if not ctx.overlaps(m)),
            None,
        )


def provenance(text: str) -> str:
    """Notes text linking a draft back to the message it came from."""
    return f"Extracted from chat: {text}"
