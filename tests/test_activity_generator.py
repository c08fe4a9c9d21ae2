"""
Tests for coping-activity suggestions.

Run with: python -m pytest tests/test_activity_generator.py -v
"""

import pytest


def _toolkit(emotion, *actions):
    from reflect.schemas.analysis import EmotionalToolkitItem

    return EmotionalToolkitItem(emotion=emotion, actions=list(actions))


# =============================================================================
# CONTEXTUAL ACTIVITIES
# =============================================================================

class TestContextualActivities:
    def test_catalog_for_emotion(self):
        from reflect.utils.activity_generator import ActivityGenerator

        activities = ActivityGenerator().generate_contextual_activities("Nothing much today.", "anxious")

        assert [a.title for a in activities] == ["Box Breathing", "5-4-3-2-1 Grounding"]
        assert not any(a.id.startswith("user-") for a in activities)

    def test_unknown_emotion_uses_default_catalog(self):
        from reflect.utils.activity_generator import ActivityGenerator

        activities = ActivityGenerator().generate_contextual_activities("Nothing much today.", "neutral")

        assert [a.id for a in activities] == ["breathing-box", "grounding-5-4-3-2-1"]

    def test_entry_triggers_extras(self):
        from reflect.utils.activity_generator import ActivityGenerator

        activities = ActivityGenerator().generate_contextual_activities("Work was hard and I'm tired.", "sad")

        assert [a.title for a in activities] == [
            "Self-Compassion Break",
            "Gentle Movement",
            "Work Boundary Setting",
            "Rest Preparation",
        ]

    def test_auxiliary_text_only_counts_when_ai_enabled(self):
        from reflect.utils.activity_generator import ActivityGenerator

        generator = ActivityGenerator()

        with_ai = generator.generate_contextual_activities("Nothing much.", "calm", "try something social", ai_enabled=True)
        without_ai = generator.generate_contextual_activities("Nothing much.", "calm", "try something social", ai_enabled=False)

        assert "Reach Out" in [a.title for a in with_ai]
        assert "Reach Out" not in [a.title for a in without_ai]

    def test_user_toolkit_comes_first(self):
        from reflect.utils.activity_generator import ActivityGenerator

        activities = ActivityGenerator().generate_contextual_activities(
            "I'm so worried.", "anxious", user_toolkit=[_toolkit("Anxiety", "Call mom")]
        )

        assert activities[0].title == "Call mom"
        assert activities[0].id == "user-anxious-0"
        assert activities[0].category == "personal"
        assert activities[0].description == "One of your personal strategies for when you feel anxious."
        assert activities[1].title == "Box Breathing"

    def test_other_emotions_in_toolkit_ignored(self):
        from reflect.utils.activity_generator import ActivityGenerator

        activities = ActivityGenerator().generate_contextual_activities(
            "I'm so worried.", "anxious", user_toolkit=[_toolkit("Sadness", "Journal")]
        )

        assert "Journal" not in [a.title for a in activities]

    def test_capped_and_deduplicated(self):
        from reflect.utils.activity_generator import ActivityGenerator

        toolkit = [_toolkit("anxious", "Box Breathing", "box breathing", "Walk", "Tea", "Music", "Stretch", "Nap")]
        activities = ActivityGenerator().generate_contextual_activities(
            "Work and my friend and sleep", "anxious", user_toolkit=toolkit
        )
        titles = [a.title.casefold() for a in activities]

        assert len(activities) == 6
        assert len(set(titles)) == len(titles)
        assert titles[0] == "box breathing"
        assert activities[0].category == "personal"


# =============================================================================
# REMOTE ACTIVITIES
# =============================================================================

class TestParseActivitiesFromAI:
    def test_defaults_and_ids(self):
        from reflect.utils.activity_generator import ActivityGenerator

        activities = ActivityGenerator().parse_activities_from_ai(
            [{"title": "Walk", "duration": "10 minutes"}, "junk", {"title": "walk"}]
        )

        assert [a.id for a in activities] == ["ai-activity-0", "ai-activity-1"]
        assert activities[0].duration == "10 minutes"
        assert activities[0].category == "mindfulness"
        assert activities[1].title == "Mindful Activity"
        assert activities[1].description == "A helpful activity based on your current state."

    def test_capped_at_four(self):
        from reflect.utils.activity_generator import ActivityGenerator

        activities = ActivityGenerator().parse_activities_from_ai([{"title": f"Step {i}"} for i in range(8)])

        assert len(activities) == 4

    def test_not_a_list(self):
        from reflect.utils.activity_generator import ActivityGenerator

        assert ActivityGenerator().parse_activities_from_ai({"title": "Walk"}) == []


# =============================================================================
# TOOLKIT HELPERS
# =============================================================================

class TestToolkitHelpers:
    @pytest.mark.parametrize("label, expected", [
        ("Anxiety", "anxious"),
        ("  SADNESS ", "sad"),
        ("Overwhelm", "overwhelmed"),
        ("anxious", "anxious"),
        ("Bored", "bored"),
        (None, ""),
    ])
    def test_normalize_emotion_label(self, label, expected):
        from reflect.utils.wellness_lexicon import normalize_emotion_label

        assert normalize_emotion_label(label) == expected

    def test_merge_toolkit_newer_wins_in_place(self):
        from reflect.utils.activity_generator import merge_toolkit

        merged = merge_toolkit(
            [_toolkit("Anxiety", "Breathe"), _toolkit("Sadness", "Journal")],
            [_toolkit("anxious", "Call mom"), _toolkit("Anger", "Run")],
        )

        assert [item.emotion for item in merged] == ["anxious", "Sadness", "Anger"]
        assert merged[0].actions == ["Call mom"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
