"""
infrastructure.extraction.intent_router - Keyword intent detection.

Implements IntentRouterPort. A message is a recommendation request when
its lower-cased text contains any of the keywords below; everything else
is treated as a logging statement.
"""

from __future__ import annotations

RECOMMENDATION_KEYWORDS = (
    "recommend",
    "advice",
    "suggest",
    "tips",
    "what should i do",
    "how can i improve",
    "help me improve",
)


class KeywordIntentRouter:
    """Containment check against a fixed keyword tuple."""

    def __init__(self, keywords: tuple[str, ...] = RECOMMENDATION_KEYWORDS):
        self._keywords = tuple(k.lower() for k in keywords)

    def is_recommendation_request(self, text: str) -> bool:
        lowered = text.lower()
        return any(keyword in lowered for keyword in self._keywords)
