"""
Domain extractors: free text -> drafts.

Every extractor is exercised on its own with a fixed "now", so the sleep
timestamps are fully deterministic.
"""

from datetime import datetime, timedelta

import pytest

from wellness_chat.domain.models import (
    ActivityDraft,
    HydrationDraft,
    Intensity,
    Level,
    MealType,
    Mood,
    NutritionDraft,
    SleepDraft,
    SleepQuality,
    WellbeingDraft,
)
from wellness_chat.infrastructure.extraction import (
    ActivityExtractor,
    HydrationExtractor,
    KeywordIntentRouter,
    NutritionExtractor,
    SleepExtractor,
    WellbeingExtractor,
    default_extractors,
)

NOW = datetime(2024, 3, 10, 9, 0)


# ============================================================================
# ACTIVITY
# ============================================================================

def test_ran_for_minutes():
    drafts = ActivityExtractor().extract("I ran for 30 minutes today", NOW)

    assert drafts == [ActivityDraft(
        activity_type="running",
        duration_minutes=30,
        intensity=Intensity.MODERATE,
        notes="Extracted from chat: I ran for 30 minutes today",
    )]


def test_cycling_hours_are_converted_once():
    drafts = ActivityExtractor().extract("Cycled for 2 hours along the river", NOW)

    assert len(drafts) == 1
    assert drafts[0].activity_type == "cycling"
    assert drafts[0].duration_minutes == 120


def test_minutes_of_activity():
    drafts = ActivityExtractor().extract("I did 45 minutes of yoga this morning", NOW)

    assert len(drafts) == 1
    assert drafts[0].activity_type == "yoga"
    assert drafts[0].duration_minutes == 45
    assert drafts[0].intensity is None


def test_minutes_of_sleep_is_not_an_activity():
    assert ActivityExtractor().extract("I got 20 minutes of sleep on the bus", NOW) == []


@pytest.mark.parametrize("text, activity_type, intensity", [
    ("burned 300 calories playing basketball", "sports", Intensity.HIGH),
    ("burned 300 calories doing some walking", "walking", Intensity.LOW),
    ("burned 300 calories doing running drills", "running", Intensity.HIGH),
    ("burned 300 calories doing pilates", "exercise", Intensity.MODERATE),
])
def test_burned_calories_inference(text, activity_type, intensity):
    drafts = ActivityExtractor().extract(text, NOW)

    assert len(drafts) == 1
    assert drafts[0].activity_type == activity_type
    assert drafts[0].intensity == intensity
    assert drafts[0].duration_minutes == 30
    assert drafts[0].calories_burned == 300.0


def test_burned_calories_duration_is_at_least_one_minute():
    drafts = ActivityExtractor().extract("burned 4 calories doing stretches", NOW)

    assert drafts[0].duration_minutes == 1


def test_zero_minutes_is_ignored():
    assert ActivityExtractor().extract("I ran for 0 minutes", NOW) == []


def test_verb_and_minutes_of_phrasings_both_count():
    drafts = ActivityExtractor().extract("I ran for 30 minutes and then did 15 minutes of yoga", NOW)

    assert [(d.activity_type, d.duration_minutes) for d in drafts] == [("running", 30), ("yoga", 15)]


def test_minutes_of_inside_a_verb_phrase_is_not_counted_twice():
    drafts = ActivityExtractor().extract("I worked out for 45 minutes of cardio", NOW)

    assert [(d.activity_type, d.duration_minutes) for d in drafts] == [("exercise", 45)]


# ============================================================================
# NUTRITION
# ============================================================================

def test_meal_first_keeps_connector_words():
    drafts = NutritionExtractor().extract("I had breakfast with eggs and toast", NOW)

    assert len(drafts) == 1
    assert drafts[0].meal_type == MealType.BREAKFAST
    assert drafts[0].food_item == "with eggs and toast"
    assert drafts[0].quantity == "1 serving"


@pytest.mark.parametrize("text, meal_type, food", [
    ("I ate a chicken salad for lunch", MealType.LUNCH, "a chicken salad"),
    ("I had a chicken salad for lunch", MealType.LUNCH, "a chicken salad"),
    ("Dinner: grilled salmon and rice", MealType.DINNER, "grilled salmon and rice"),
    ("breakfast was oatmeal.", MealType.BREAKFAST, "oatmeal"),
    ("had supper of vegetable soup", MealType.DINNER, "of vegetable soup"),
    ("snacked on almonds", MealType.SNACK, "almonds"),
    ("I ate an apple as a snack", MealType.SNACK, "an apple"),
])
def test_meal_phrasings(text, meal_type, food):
    drafts = NutritionExtractor().extract(text, NOW)

    assert len(drafts) == 1
    assert drafts[0].meal_type == meal_type
    assert drafts[0].food_item == food


def test_consumed_calories_infers_meal_slot():
    drafts = NutritionExtractor().extract("I consumed 600 calories at lunch", NOW)

    assert drafts == [NutritionDraft(
        meal_type=MealType.LUNCH,
        food_item="meal",
        calories=600.0,
        notes="Extracted from chat: I consumed 600 calories at lunch",
    )]


def test_consumed_calories_defaults_to_snack():
    drafts = NutritionExtractor().extract("consumed 200 calories", NOW)

    assert drafts[0].meal_type == MealType.SNACK


def test_meal_without_food_is_ignored():
    assert NutritionExtractor().extract("I had lunch", NOW) == []


@pytest.mark.parametrize("text", [
    "I had 2 glasses of water for lunch",
    "had 500ml of juice for breakfast",
])
def test_drinks_with_a_meal_are_not_meals(text):
    assert NutritionExtractor().extract(text, NOW) == []
    assert len(HydrationExtractor().extract(text, NOW)) == 1


# ============================================================================
# HYDRATION
# ============================================================================

@pytest.mark.parametrize("text, amount, beverage", [
    ("I drank 500ml of water", 500, "water"),
    ("had 330 ml of sparkling water today", 330, "sparkling water"),
    ("drank 2 liters of orange juice today", 2000, "orange juice"),
    ("1.5 liters of water so far", 1500, "water"),
    ("I drank 3 glasses of water", 750, "water"),
    ("had a glass of milk before bed", 250, "milk"),
    ("two glasses of lemonade", 500, "lemonade"),
])
def test_hydration_amounts(text, amount, beverage):
    drafts = HydrationExtractor().extract(text, NOW)

    assert drafts == [HydrationDraft(amount_ml=amount, beverage_type=beverage)]


def test_drank_water_fallback():
    drafts = HydrationExtractor().extract("I drank water after my run", NOW)

    assert drafts == [HydrationDraft(amount_ml=250, beverage_type="water")]


def test_fallback_suppressed_when_amount_given():
    drafts = HydrationExtractor().extract("drank water and 2 glasses of tea", NOW)

    assert drafts == [HydrationDraft(amount_ml=500, beverage_type="tea")]


# ============================================================================
# SLEEP
# ============================================================================

def test_slept_for_hours_ends_now():
    drafts = SleepExtractor().extract("I slept for 8 hours last night", NOW)

    assert len(drafts) == 1
    assert drafts[0].wake_time == NOW
    assert drafts[0].bedtime == NOW - timedelta(hours=8)
    assert drafts[0].duration_hours == 8


def test_got_hours_of_sleep():
    drafts = SleepExtractor().extract("got 7 hours of sleep", NOW)

    assert drafts[0].duration_hours == 7


def test_explicit_times_cross_midnight():
    text = "I went to bed at 11:45pm and woke up at 8:15am"
    drafts = SleepExtractor().extract(text, NOW)

    assert len(drafts) == 1
    assert drafts[0].bedtime == datetime(2024, 3, 9, 23, 45)
    assert drafts[0].wake_time == datetime(2024, 3, 10, 8, 15)
    assert drafts[0].duration_hours == 8.5


def test_twelve_am_and_pm():
    drafts = SleepExtractor().extract("went to bed at 12am, woke up at 12pm", NOW)

    # noon today is still ahead of NOW, so this was yesterday's night
    assert drafts[0].bedtime == datetime(2024, 3, 9, 0, 0)
    assert drafts[0].wake_time == datetime(2024, 3, 9, 12, 0)


def test_quality_alone_makes_default_night():
    drafts = SleepExtractor().extract("My sleep quality was poor", NOW)

    assert drafts == [SleepDraft(
        bedtime=NOW - timedelta(hours=8),
        wake_time=NOW,
        sleep_quality=SleepQuality.POOR,
        notes="Extracted from chat: My sleep quality was poor",
    )]


def test_quality_annotates_the_same_night():
    drafts = SleepExtractor().extract("I slept for 6 hours and my sleep quality was fair", NOW)

    assert len(drafts) == 1
    assert drafts[0].duration_hours == 6
    assert drafts[0].sleep_quality == SleepQuality.FAIR


# ============================================================================
# WELLBEING
# ============================================================================

def test_mood_only_leaves_other_dimensions_unset():
    drafts = WellbeingExtractor().extract("I am feeling good today", NOW)

    assert len(drafts) == 1
    assert drafts[0].mood == Mood.GOOD
    assert drafts[0].stress_level is None
    assert drafts[0].energy_level is None


def test_dimensions_are_merged_into_one_draft():
    drafts = WellbeingExtractor().extract("I'm feeling great but a bit stressed and tired", NOW)

    assert drafts == [WellbeingDraft(
        mood=Mood.GOOD,
        stress_level=Level.MODERATE,
        energy_level=Level.LOW,
        notes="Extracted from chat: I'm feeling great but a bit stressed and tired",
    )]


@pytest.mark.parametrize("text, stress, energy", [
    ("I'm exhausted and very stressed", Level.VERY_HIGH, Level.VERY_LOW),
    ("my stress level is very_high", Level.VERY_HIGH, None),
    ("energy level is low", None, Level.LOW),
    ("feeling relaxed and full of energy", Level.LOW, Level.VERY_HIGH),
    ("not stressed at all", Level.LOW, None),
])
def test_stress_and_energy(text, stress, energy):
    drafts = WellbeingExtractor().extract(text, NOW)

    assert drafts[0].stress_level == stress
    assert drafts[0].energy_level == energy


@pytest.mark.parametrize("text, mood", [
    ("I feel terrible", Mood.VERY_POOR),
    ("I'm sad", Mood.POOR),
    ("feeling okay", Mood.NEUTRAL),
    ("mood is excellent", Mood.EXCELLENT),
    ("felt really amazing after the hike", Mood.EXCELLENT),
])
def test_mood_levels(text, mood):
    assert WellbeingExtractor().extract(text, NOW)[0].mood == mood


@pytest.mark.parametrize("text", [
    "I'm not feeling good",
    "I don't feel great about it",
    "I'm down to one coffee a day",
    "I'm down for a walk later",
])
def test_negations_and_idioms_are_not_moods(text):
    assert WellbeingExtractor().extract(text, NOW) == []


# ============================================================================
# ALL TOGETHER
# ============================================================================

def test_unrelated_text_yields_nothing():
    text = "The weather is nice in Lisbon"
    assert all(e.extract(text, NOW) == [] for e in default_extractors())


def test_one_message_many_domains():
    text = "I ran for 30 minutes, drank 500ml of water and I'm feeling great"
    found = [d for e in default_extractors() for d in e.extract(text, NOW)]

    assert [type(d) for d in found] == [ActivityDraft, HydrationDraft, WellbeingDraft]


# ============================================================================
# INTENT ROUTER
# ============================================================================

@pytest.mark.parametrize("text, expected", [
    ("Can you recommend something?", True),
    ("Any tips for better sleep?", True),
    ("WHAT SHOULD I DO about my energy", True),
    ("I need some advice", True),
    ("How can I improve my diet?", True),
    ("I ran for 30 minutes", False),
    ("I had breakfast with eggs", False),
])
def test_intent_router(text, expected):
    assert KeywordIntentRouter().is_recommendation_request(text) is expected
