"""
Profile, tracking and recommendation services, plus configuration wiring.
"""

from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from wellness_chat.application.dto import CreateUserRequest
from wellness_chat.domain.exceptions import (
    DuplicateEmailError,
    InvalidRecordError,
    RecommendationNotFoundError,
    UserNotFoundError,
)
from wellness_chat.domain.models import (
    ActivityDraft,
    HydrationDraft,
    MealType,
    NutritionDraft,
    Priority,
    SleepDraft,
    SleepQuality,
)
from wellness_chat.factory import ServiceFactory
from wellness_chat.infrastructure.config import Settings

NOW = datetime(2024, 3, 10, 9, 0)


# ============================================================================
# PROFILE
# ============================================================================

async def test_register_normalises_email(factory):
    user = await factory.create_profile_service().register(
        CreateUserRequest(name="  Cy ", email=" Cy@Example.COM ", goals="  "),
    )

    assert user.id is not None
    assert user.name == "Cy"
    assert user.email == "cy@example.com"
    assert user.goals is None
    assert user.onboarding_completed is False


async def test_register_duplicate_email_ignores_case(factory, user):
    with pytest.raises(DuplicateEmailError):
        await factory.create_profile_service().register(
            CreateUserRequest(name="Ana again", email="ANA@example.com"),
        )


@pytest.mark.parametrize("overrides", [
    {"name": " "},
    {"email": "not-an-email"},
    {"age": 0},
    {"height": -1.0},
    {"gender": "robot"},
    {"activity_level": "couch"},
])
async def test_register_validation(factory, overrides):
    fields = {"name": "Dee", "email": "dee@example.com", **overrides}

    with pytest.raises(InvalidRecordError):
        await factory.create_profile_service().register(CreateUserRequest(**fields))


async def test_update_and_complete_onboarding(factory, user):
    profile = factory.create_profile_service()

    updated = await profile.update(user.id, goals="Drink more water", weight=61.5)
    done = await profile.complete_onboarding(user.id)

    assert updated.goals == "Drink more water"
    assert updated.weight == 61.5
    assert done.onboarding_completed is True
    assert (await profile.get(user.id)).onboarding_completed is True


async def test_profile_of_unknown_user(factory):
    profile = factory.create_profile_service()

    with pytest.raises(UserNotFoundError):
        await profile.get(999)
    with pytest.raises(UserNotFoundError):
        await profile.update(999, goals="x")


# ============================================================================
# TRACKING
# ============================================================================

async def test_manual_record_keeps_macros(factory, user):
    tracking = factory.create_tracking_service()
    meal = NutritionDraft(
        meal_type=MealType.LUNCH, food_item="rice bowl", quantity="1 bowl",
        calories=650.0, protein=30.0, carbs=80.0, fat=20.0,
    )

    saved = await tracking.record(user.id, meal, NOW)
    [loaded] = await tracking.nutrition(user.id)

    assert loaded.id == saved.id
    assert (loaded.protein, loaded.carbs, loaded.fat) == (30.0, 80.0, 20.0)
    assert loaded.quantity == "1 bowl"


async def test_record_for_unknown_user(factory):
    with pytest.raises(UserNotFoundError):
        await factory.create_tracking_service().record(999, HydrationDraft(250), NOW)


def test_invalid_drafts_are_rejected_before_saving():
    with pytest.raises(InvalidRecordError):
        ActivityDraft("running", 0)
    with pytest.raises(InvalidRecordError):
        HydrationDraft(0)
    with pytest.raises(InvalidRecordError):
        SleepDraft(bedtime=NOW, wake_time=NOW)


async def test_day_summary(factory, user):
    tracking = factory.create_tracking_service()
    await tracking.record(user.id, ActivityDraft("yoga", 45), NOW)
    await tracking.record(user.id, HydrationDraft(500, "tea"), NOW)
    await tracking.record(user.id, HydrationDraft(250), NOW - timedelta(days=1))
    night = SleepDraft(NOW - timedelta(hours=7), NOW, SleepQuality.GOOD)
    await tracking.record(user.id, night, NOW)

    summary = await tracking.day_summary(user.id, date(2024, 3, 10))

    assert [a.activity_type for a in summary.activities] == ["yoga"]
    assert [h.beverage_type for h in summary.hydration] == ["tea"]
    assert summary.sleep[0].sleep_quality == SleepQuality.GOOD
    assert summary.nutrition == []
    assert summary.wellbeing == []


async def test_day_summary_unknown_user(factory):
    with pytest.raises(UserNotFoundError):
        await factory.create_tracking_service().day_summary(999, date(2024, 3, 10))


# ============================================================================
# RECOMMENDATIONS
# ============================================================================

async def test_generate_persists_every_recommendation(factory, user):
    service = factory.create_recommendation_service()
    await factory.create_profile_service().update(user.id, goals="Run a 5k")

    generated = await service.generate(user.id)
    stored = await service.list_for_user(user.id)

    assert {r.id for r in generated} == {r.id for r in stored}
    assert [r.priority for r in stored] == [Priority.HIGH, Priority.LOW]
    assert all(not r.is_read for r in stored)


async def test_generate_for_unknown_user(factory):
    with pytest.raises(UserNotFoundError):
        await factory.create_recommendation_service().generate(999)


async def test_keep_it_up_when_all_is_well(factory, user):
    tracking = factory.create_tracking_service()
    for day in range(3):
        await tracking.record(user.id, ActivityDraft("running", 30), NOW - timedelta(days=day))
    for _ in range(14):
        await tracking.record(user.id, HydrationDraft(1000), NOW)

    generated = await factory.create_recommendation_service().generate(user.id)

    assert [r.title for r in generated] == ["Keep Up the Good Work"]


async def test_mark_read(factory, user):
    service = factory.create_recommendation_service()
    [first] = await service.generate(user.id)

    marked = await service.mark_read(first.id)

    assert marked.is_read is True
    assert await service.list_for_user(user.id, unread_only=True) == []
    with pytest.raises(RecommendationNotFoundError):
        await service.mark_read(999)


# ============================================================================
# CONFIGURATION & WIRING
# ============================================================================

def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("WELLNESS_DB_PATH", str(tmp_path / "x.db"))
    monkeypatch.setenv("WELLNESS_LOG_LEVEL", "warning")
    monkeypatch.setenv("WELLNESS_DIGEST_SIZE", "5")
    monkeypatch.setenv("WELLNESS_SESSION_DIR", str(tmp_path / "s"))

    settings = Settings.from_env(env_file=tmp_path / "missing.env")

    assert settings.db_path == str(tmp_path / "x.db")
    assert settings.log_level_value == 30
    assert settings.digest_size == 5
    assert settings.session_dir == Path(tmp_path / "s")


def test_unknown_log_level_falls_back_to_info():
    assert Settings(log_level="chatty").log_level_value == 20


def test_factory_requires_initialize(settings):
    with pytest.raises(RuntimeError):
        ServiceFactory(settings).create_chat_service()
