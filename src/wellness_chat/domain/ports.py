"""
domain.ports - Abstract interfaces (Protocols) for all system boundaries.

These define WHAT the system needs without specifying HOW. Infrastructure
modules provide concrete implementations. Application services depend only
on these protocols, never on concrete classes.

Using typing.Protocol (structural typing) instead of ABC, so any class that
implements the methods satisfies the port without explicit inheritance.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, runtime_checkable

from wellness_chat.domain.models import (
    ActivityDraft,
    Direction,
    HydrationDraft,
    NutritionDraft,
    RecommendationDraft,
    SleepDraft,
    TrackingDraft,
    WellbeingDraft,
)
from wellness_chat.domain.entities import (
    Activity,
    ChatMessage,
    Hydration,
    Nutrition,
    Recommendation,
    Sleep,
    User,
    Wellbeing,
)


# ---------------------------------------------------------------------------
# Text Understanding Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class IntentRouterPort(Protocol):
    """Decide whether a message asks for recommendations."""

    def is_recommendation_request(self, text: str) -> bool: ...


@runtime_checkable
class ExtractorPort(Protocol):
    """Turn free text into zero or more drafts of one tracking domain."""

    name: str

    def extract(self, text: str, now: datetime) -> list[TrackingDraft]: ...


# ---------------------------------------------------------------------------
# Repository Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class UserRepository(Protocol):
    """CRUD operations for User profiles."""

    async def get_by_id(self, user_id: int) -> User | None: ...
    async def create(self, user: User) -> User: ...
    async def update(self, user_id: int, changes: dict[str, object]) -> User | None: ...


@runtime_checkable
class ActivityRepository(Protocol):
    async def create(
        self, user_id: int, draft: ActivityDraft, recorded_at: Optional[datetime] = None,
    ) -> Activity: ...
    async def get_recent(self, user_id: int, limit: int) -> list[Activity]: ...
    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Activity]: ...


@runtime_checkable
class NutritionRepository(Protocol):
    async def create(
        self, user_id: int, draft: NutritionDraft, recorded_at: Optional[datetime] = None,
    ) -> Nutrition: ...
    async def get_recent(self, user_id: int, limit: int) -> list[Nutrition]: ...
    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Nutrition]: ...


@runtime_checkable
class HydrationRepository(Protocol):
    async def create(
        self, user_id: int, draft: HydrationDraft, recorded_at: Optional[datetime] = None,
    ) -> Hydration: ...
    async def get_recent(self, user_id: int, limit: int) -> list[Hydration]: ...
    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Hydration]: ...


@runtime_checkable
class SleepRepository(Protocol):
    async def create(
        self, user_id: int, draft: SleepDraft, recorded_at: Optional[datetime] = None,
    ) -> Sleep: ...
    async def get_recent(self, user_id: int, limit: int) -> list[Sleep]: ...
    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Sleep]: ...


@runtime_checkable
class WellbeingRepository(Protocol):
    async def create(
        self, user_id: int, draft: WellbeingDraft, recorded_at: Optional[datetime] = None,
    ) -> Wellbeing: ...
    async def get_recent(self, user_id: int, limit: int) -> list[Wellbeing]: ...
    async def get_by_user(self, user_id: int, day: Optional[date] = None) -> list[Wellbeing]: ...


@runtime_checkable
class RecommendationRepository(Protocol):
    async def create(self, user_id: int, draft: RecommendationDraft) -> Recommendation: ...
    async def get_by_user(self, user_id: int, unread_only: bool = False) -> list[Recommendation]: ...
    async def mark_read(self, recommendation_id: int) -> Recommendation | None: ...


@runtime_checkable
class ChatMessageRepository(Protocol):
    """CRUD for ChatMessage entities plus the processing claim."""

    async def create(self, user_id: int, message: str, direction: Direction) -> ChatMessage: ...
    async def get_by_id(self, message_id: int) -> ChatMessage | None: ...
    async def get_by_user(self, user_id: int, limit: Optional[int] = None) -> list[ChatMessage]: ...
    async def claim(self, message_id: int) -> bool: ...
    async def set_extracted(self, message_id: int, extracted: bool) -> None: ...


@runtime_checkable
class UnitOfWork(Protocol):
    """Transactional boundary shared by every repository on one connection."""

    def transaction(self): ...
