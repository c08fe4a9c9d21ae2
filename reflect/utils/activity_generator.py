"""
Activity Suggestion Module
===========================

Builds the coping-activity list shown after an analysis:

1. The user's own toolkit actions for the detected emotion (always first)
2. The curated catalog for that emotion (``anxious`` when it has none)
3. Extras triggered by what the entry talks about (work, people, sleep)

The merged list is de-duplicated by case-insensitive title, keeping
the first occurrence, and truncated.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Optional, Sequence

from reflect.schemas.analysis import ActivitySuggestion, EmotionalToolkitItem
from reflect.utils.text_cleaning import contains_any, normalize_for_matching, normalize_whitespace, string_or
from reflect.utils.wellness_lexicon import normalize_emotion_label

MAX_ACTIVITIES = 6
MAX_REMOTE_ACTIVITIES = 4
DEFAULT_CATALOG_EMOTION = "anxious"
PERSONAL_CATEGORY = "personal"


def _activity(activity_id: str, title: str, description: str, duration: str, category: str) -> ActivitySuggestion:
    return ActivitySuggestion(id=activity_id, title=title, description=description, duration=duration, category=category)


# =============================================================================
# ACTIVITY CATALOG
# =============================================================================

BASE_ACTIVITIES: Dict[str, List[ActivitySuggestion]] = {
    "anxious": [
        _activity(
            "breathing-box", "Box Breathing",
            "Breathe in for 4, hold for 4, out for 4, hold for 4. This can help calm your "
            "nervous system when feeling anxious.",
            "3-5 minutes", "breathing",
        ),
        _activity(
            "grounding-5-4-3-2-1", "5-4-3-2-1 Grounding",
            "Name 5 things you see, 4 you can touch, 3 you hear, 2 you smell, 1 you taste. "
            "This brings you back to the present moment.",
            "5 minutes", "grounding",
        ),
    ],
    "sad": [
        _activity(
            "self-compassion", "Self-Compassion Break",
            "Speak to yourself with the same kindness you'd show a good friend going through "
            "this difficult time.",
            "5-10 minutes", "self-care",
        ),
        _activity(
            "gentle-movement", "Gentle Movement",
            "Take a slow walk or do some gentle stretching to help process these emotions physically.",
            "10-15 minutes", "movement",
        ),
    ],
    "angry": [
        _activity(
            "physical-release", "Physical Release",
            "Do jumping jacks, punch a pillow, or go for a brisk walk to release the physical "
            "tension from anger.",
            "5-10 minutes", "physical",
        ),
        _activity(
            "cooling-breath", "Cooling Breath",
            "Take slow, deep breaths while counting backwards from 10 to help cool down intense emotions.",
            "3-5 minutes", "breathing",
        ),
    ],
    "stressed": [
        _activity(
            "priority-reset", "Priority Reset",
            "List what's stressing you and identify just the top 2 most important things to "
            "focus on right now.",
            "10 minutes", "organization",
        ),
        _activity(
            "stress-walk", "Mindful Walk",
            "Take a 10-minute walk while focusing on your surroundings rather than your stressors.",
            "10-15 minutes", "movement",
        ),
    ],
    "frustrated": [
        _activity(
            "frustration-release", "Frustration Release",
            "Write down what's frustrating you, then crumple up the paper and throw it away as "
            "a symbolic release.",
            "5-10 minutes", "expression",
        ),
        _activity(
            "progressive-relaxation", "Progressive Muscle Relaxation",
            "Tense and release each muscle group to help release physical tension from frustration.",
            "10-15 minutes", "relaxation",
        ),
    ],
    "happy": [
        _activity(
            "savor-moment", "Savor This Feeling",
            "Take a few minutes to fully experience and appreciate this positive emotion.",
            "5 minutes", "mindfulness",
        ),
        _activity(
            "gratitude-expansion", "Expand Your Gratitude",
            "Write about what specifically made you feel this way and how you can create more "
            "moments like this.",
            "10 minutes", "gratitude",
        ),
    ],
    "calm": [
        _activity(
            "mindful-observation", "Mindful Observation",
            "Spend time observing something beautiful in your environment with full attention.",
            "10 minutes", "mindfulness",
        ),
    ],
}

WORK_BOUNDARY = _activity(
    "work-boundary", "Work Boundary Setting",
    "Take 5 minutes to step away from work thoughts and do something just for you.",
    "5 minutes", "boundaries",
)
REACH_OUT = _activity(
    "connection-reach", "Reach Out",
    "Consider connecting with someone who makes you feel supported and understood.",
    "10-20 minutes", "connection",
)
REST_RITUAL = _activity(
    "rest-ritual", "Rest Preparation",
    "Create a calming environment and prepare your mind and body for quality rest.",
    "15 minutes", "rest",
)

# (activity, words looked for in the entry, words looked for in the auxiliary text)
CONTEXTUAL_TRIGGERS = (
    (WORK_BOUNDARY, ("work", "job"), ("work",)),
    (REACH_OUT, ("relationship", "friend"), ("social",)),
    (REST_RITUAL, ("sleep", "tired"), ("rest",)),
)

DEFAULT_REMOTE_TITLE = "Mindful Activity"
DEFAULT_REMOTE_DESCRIPTION = "A helpful activity based on your current state."
DEFAULT_REMOTE_DURATION = "5-10 minutes"
DEFAULT_REMOTE_CATEGORY = "mindfulness"


class ActivityGenerator:
    """Merges personal toolkit actions with the curated catalog."""

    def __init__(self, max_activities: int = MAX_ACTIVITIES, max_remote_activities: int = MAX_REMOTE_ACTIVITIES):
        self.max_activities = max_activities
        self.max_remote_activities = max_remote_activities

    def generate_contextual_activities(
        self,
        entry_text: str,
        emotion: str,
        auxiliary_text: str = "",
        user_toolkit: Optional[Sequence[EmotionalToolkitItem]] = None,
        ai_enabled: bool = True,
    ) -> List[ActivitySuggestion]:
        """Personal actions first, then catalog and contextual extras.

        Auxiliary text (the remote model's raw answer) only triggers extras
        when AI analysis is enabled.
        """
        user_activities = self.user_activities(user_toolkit, emotion)
        catalog = self.catalog_activities(entry_text, emotion, auxiliary_text if ai_enabled else "")
        return dedupe_by_title(user_activities + catalog)[: self.max_activities]

    def user_activities(
        self,
        user_toolkit: Optional[Sequence[EmotionalToolkitItem]],
        emotion: str,
    ) -> List[ActivitySuggestion]:
        wanted = normalize_emotion_label(emotion)
        if not wanted or not user_toolkit:
            return []

        activities: List[ActivitySuggestion] = []
        for item in user_toolkit:
            if normalize_emotion_label(item.emotion) != wanted:
                continue
            for action in item.actions:
                title = normalize_whitespace(action or "")
                if not title:
                    continue
                activities.append(
                    _activity(
                        f"user-{_slug(wanted)}-{len(activities)}",
                        title,
                        f"One of your personal strategies for when you feel {wanted}.",
                        "As long as you need",
                        PERSONAL_CATEGORY,
                    )
                )
        return activities

    def catalog_activities(self, entry_text: str, emotion: str, auxiliary_text: str = "") -> List[ActivitySuggestion]:
        lower_text = normalize_for_matching(entry_text)
        lower_aux = normalize_for_matching(auxiliary_text)

        key = normalize_emotion_label(emotion)
        activities = list(BASE_ACTIVITIES.get(key) or BASE_ACTIVITIES[DEFAULT_CATALOG_EMOTION])
        for activity, text_words, aux_words in CONTEXTUAL_TRIGGERS:
            if contains_any(lower_text, text_words) or contains_any(lower_aux, aux_words):
                activities.append(activity)
        return activities

    def parse_activities_from_ai(self, activities_data: Any) -> List[ActivitySuggestion]:
        """Map remote-model activities onto the local shape; never raises."""
        if not isinstance(activities_data, list):
            return []

        activities = []
        for index, item in enumerate(activities_data):
            data = item if isinstance(item, Mapping) else {}
            activities.append(
                _activity(
                    f"ai-activity-{index}",
                    string_or(data.get("title"), DEFAULT_REMOTE_TITLE),
                    string_or(data.get("description"), DEFAULT_REMOTE_DESCRIPTION),
                    string_or(data.get("duration"), DEFAULT_REMOTE_DURATION),
                    string_or(data.get("category"), DEFAULT_REMOTE_CATEGORY),
                )
            )
        return dedupe_by_title(activities)[: self.max_remote_activities]


def dedupe_by_title(activities: Sequence[ActivitySuggestion]) -> List[ActivitySuggestion]:
    seen = set()
    unique = []
    for activity in activities:
        key = activity.title.strip().casefold()
        if key in seen:
            continue
        seen.add(key)
        unique.append(activity)
    return unique


def merge_toolkit(
    old_toolkit: Sequence[EmotionalToolkitItem],
    new_toolkit: Sequence[EmotionalToolkitItem],
) -> List[EmotionalToolkitItem]:
    """Union keyed by normalized emotion; newer items replace older ones in place."""
    merged: Dict[str, EmotionalToolkitItem] = {}
    for item in list(old_toolkit) + list(new_toolkit):
        merged[normalize_emotion_label(item.emotion)] = item
    return list(merged.values())


def _slug(value: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-") or "emotion"


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_activity_generator: Optional[ActivityGenerator] = None


def get_activity_generator() -> ActivityGenerator:
    """Get or create the activity generator singleton."""
    global _activity_generator
    if _activity_generator is None:
        _activity_generator = ActivityGenerator()
    return _activity_generator
