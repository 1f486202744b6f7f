"""
Reply formatting.
"""

from datetime import datetime, timedelta

from wellness_chat.application.services.composer import (
    HELP_TEXT,
    RECOMMENDATION_FAILURE_TEXT,
    ResponseComposer,
    describe_draft,
)
from wellness_chat.domain.entities import Recommendation
from wellness_chat.domain.models import (
    ActivityDraft,
    Category,
    Direction,
    HydrationDraft,
    Level,
    MealType,
    Mood,
    NutritionDraft,
    Priority,
    SleepDraft,
    SleepQuality,
    WellbeingDraft,
)

NOW = datetime(2024, 3, 10, 9, 0)


def recommendation(i):
    return Recommendation(
        id=i, user_id=1, category=Category.GENERAL, title=f"Title {i}",
        description=f"Description {i}", priority=Priority.LOW, is_read=False,
        created_at=NOW,
    )


def test_describe_drafts():
    assert describe_draft(ActivityDraft("running", 30)) == "running for 30 minutes"
    assert describe_draft(ActivityDraft("sports", 30, calories_burned=300.0)) == (
        "sports for 30 minutes (300 calories burned)"
    )
    assert describe_draft(NutritionDraft(MealType.BREAKFAST, "eggs")) == "breakfast: eggs"
    assert describe_draft(HydrationDraft(500)) == "500ml of water"
    night = SleepDraft(NOW - timedelta(hours=8.5), NOW, SleepQuality.GOOD)
    assert describe_draft(night) == "8.5 hours of sleep (good quality)"
    assert describe_draft(WellbeingDraft(mood=Mood.GOOD, stress_level=Level.VERY_HIGH)) == (
        "mood: good, stress: very high"
    )


def test_acknowledgement_lists_every_draft():
    reply = ResponseComposer().acknowledgement(7, [
        ActivityDraft("running", 30),
        HydrationDraft(500),
    ])

    assert reply.user_id == 7
    assert reply.direction == Direction.SYSTEM
    assert reply.id is None
    assert reply.message == (
        "Great! I've recorded the following:\n"
        "• running for 30 minutes\n"
        "• 500ml of water"
    )


def test_digest_is_capped():
    reply = ResponseComposer(digest_size=3).digest(1, [recommendation(i) for i in range(1, 6)])

    assert reply.message.startswith("Here are my recommendations for you:\n\n1. Title 1 - Description 1")
    assert "3. Title 3" in reply.message
    assert "Title 4" not in reply.message
    assert reply.message.endswith("...and 2 more recommendations in your list.")


def test_digest_without_overflow():
    reply = ResponseComposer(digest_size=3).digest(1, [recommendation(1)])

    assert reply.message == "Here are my recommendations for you:\n\n1. Title 1 - Description 1"


def test_fixed_replies():
    composer = ResponseComposer()

    assert composer.help(1).message == HELP_TEXT
    assert composer.recommendation_failure(1).message == RECOMMENDATION_FAILURE_TEXT
    assert composer.processing_error(1).direction == Direction.SYSTEM
