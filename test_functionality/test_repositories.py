"""
SQLite repositories and the shared connection's transaction handling.
"""

from datetime import date, datetime, timedelta

import pytest

from wellness_chat.domain.entities import User
from wellness_chat.domain.exceptions import DuplicateEmailError, RepositoryError
from wellness_chat.domain.models import (
    ActivityDraft,
    Category,
    Direction,
    HydrationDraft,
    Level,
    Mood,
    Priority,
    RecommendationDraft,
    SleepDraft,
    WellbeingDraft,
)
from wellness_chat.infrastructure.persistence.activity_repo import SQLiteActivityRepository
from wellness_chat.infrastructure.persistence.hydration_repo import SQLiteHydrationRepository
from wellness_chat.infrastructure.persistence.sleep_repo import SQLiteSleepRepository
from wellness_chat.infrastructure.persistence.wellbeing_repo import SQLiteWellbeingRepository

NOW = datetime(2024, 3, 10, 9, 0)


# ============================================================================
# USERS
# ============================================================================

async def test_duplicate_email_is_rejected(factory, user):
    repo = factory.create_user_repository()

    with pytest.raises(DuplicateEmailError):
        await repo.create(User(name="Other", email="ana@example.com"))


async def test_user_partial_update(factory, user):
    repo = factory.create_user_repository()

    updated = await repo.update(user.id, {"goals": "Sleep more", "onboarding_completed": True})

    assert updated.goals == "Sleep more"
    assert updated.onboarding_completed is True
    assert updated.name == "Ana"


async def test_user_update_rejects_unknown_fields(factory, user):
    with pytest.raises(ValueError):
        await factory.create_user_repository().update(user.id, {"password": "x"})


async def test_user_update_missing_user(factory):
    assert await factory.create_user_repository().update(999, {"goals": "x"}) is None


# ============================================================================
# TRACKING RECORDS
# ============================================================================

async def test_wellbeing_defaults_are_filled_on_save(factory, user):
    repo = SQLiteWellbeingRepository(factory.connection)

    saved = await repo.create(user.id, WellbeingDraft(mood=Mood.GOOD), NOW)
    [loaded] = await repo.get_recent(user.id, 7)

    assert saved.id == loaded.id
    assert (loaded.mood, loaded.stress_level, loaded.energy_level) == (
        Mood.GOOD, Level.MODERATE, Level.MODERATE,
    )


async def test_sleep_duration_is_derived(factory, user):
    repo = SQLiteSleepRepository(factory.connection)
    draft = SleepDraft(bedtime=datetime(2024, 3, 9, 23, 45), wake_time=datetime(2024, 3, 10, 8, 15))

    await repo.create(user.id, draft, NOW)
    [night] = await repo.get_recent(user.id, 7)

    assert night.sleep_duration_hours == 8.5
    assert night.bedtime == draft.bedtime


async def test_get_recent_is_newest_first_and_limited(factory, user):
    repo = SQLiteHydrationRepository(factory.connection)
    for day in range(5):
        await repo.create(user.id, HydrationDraft(100 * (day + 1)), NOW + timedelta(days=day))

    recent = await repo.get_recent(user.id, 3)

    assert [h.amount_ml for h in recent] == [500, 400, 300]


async def test_get_by_user_filters_one_day(factory, user):
    repo = SQLiteActivityRepository(factory.connection)
    await repo.create(user.id, ActivityDraft("running", 30), NOW)
    await repo.create(user.id, ActivityDraft("walking", 20), NOW - timedelta(days=1))

    today = await repo.get_by_user(user.id, date(2024, 3, 10))
    everything = await repo.get_by_user(user.id)

    assert [a.activity_type for a in today] == ["running"]
    assert [a.activity_type for a in everything] == ["running", "walking"]


async def test_foreign_key_violation_becomes_repository_error(factory):
    repo = SQLiteActivityRepository(factory.connection)

    with pytest.raises(RepositoryError):
        await repo.create(999, ActivityDraft("running", 30), NOW)


# ============================================================================
# CHAT MESSAGES
# ============================================================================

async def test_claim_succeeds_once(factory, user):
    repo = factory.create_message_repository()
    message = await repo.create(user.id, "I ran for 30 minutes", Direction.USER)

    assert await repo.claim(message.id) is True
    assert await repo.claim(message.id) is False
    assert (await repo.get_by_id(message.id)).processed_at is not None


async def test_system_and_extracted_messages_cannot_be_claimed(factory, user):
    repo = factory.create_message_repository()
    reply = await repo.create(user.id, "Great!", Direction.SYSTEM)
    done = await repo.create(user.id, "I ran", Direction.USER)
    await repo.set_extracted(done.id, True)

    assert await repo.claim(reply.id) is False
    assert await repo.claim(done.id) is False


async def test_history_newest_first(factory, user):
    repo = factory.create_message_repository()
    for text in ("one", "two", "three"):
        await repo.create(user.id, text, Direction.USER)

    assert [m.message for m in await repo.get_by_user(user.id)] == ["three", "two", "one"]
    assert [m.message for m in await repo.get_by_user(user.id, limit=2)] == ["three", "two"]


# ============================================================================
# RECOMMENDATIONS
# ============================================================================

def advice(title, priority):
    return RecommendationDraft(Category.GENERAL, title, "description", priority)


async def test_recommendations_ordered_by_priority(factory, user):
    repo = factory.create_recommendation_repository()
    await repo.create(user.id, advice("low", Priority.LOW))
    await repo.create(user.id, advice("high", Priority.HIGH))
    await repo.create(user.id, advice("medium", Priority.MEDIUM))
    await repo.create(user.id, advice("newer high", Priority.HIGH))

    listed = await repo.get_by_user(user.id)

    assert [r.title for r in listed] == ["newer high", "high", "medium", "low"]


async def test_mark_read_and_unread_filter(factory, user):
    repo = factory.create_recommendation_repository()
    first = await repo.create(user.id, advice("first", Priority.LOW))
    await repo.create(user.id, advice("second", Priority.LOW))

    marked = await repo.mark_read(first.id)

    assert marked.is_read is True
    assert [r.title for r in await repo.get_by_user(user.id, unread_only=True)] == ["second"]
    assert await repo.mark_read(999) is None


# ============================================================================
# TRANSACTIONS
# ============================================================================

async def test_transaction_rolls_back_every_write(factory, user):
    repo = SQLiteActivityRepository(factory.connection)

    with pytest.raises(RuntimeError):
        async with factory.connection.transaction():
            await repo.create(user.id, ActivityDraft("running", 30), NOW)
            await repo.create(user.id, ActivityDraft("walking", 20), NOW)
            raise RuntimeError("boom")

    assert await repo.get_by_user(user.id) == []
    assert not factory.connection.in_transaction


async def test_nested_transaction_joins_outer(factory, user):
    repo = SQLiteActivityRepository(factory.connection)

    async with factory.connection.transaction() as outer:
        async with factory.connection.transaction() as inner:
            assert inner is outer
        await repo.create(user.id, ActivityDraft("running", 30), NOW)

    assert len(await repo.get_by_user(user.id)) == 1
