"""
Journal Wellness Lexicon for Reflect
=====================================
Keyword and phrase tables shared by the rule-based analyzers.

- Emotion indicators (single-word keywords, multi-word context phrases, emoji)
- Emoji table for emotion labels returned by the remote model
- Onboarding emotion names mapped onto the detector vocabulary
- Distortion keywords used to recover sentences for remote-model distortions
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True, slots=True)
class EmotionIndicator:
    keywords: Tuple[str, ...]
    context_phrases: Tuple[str, ...]
    emoji: str


NEUTRAL_EMOTION = "neutral"
NEUTRAL_EMOJI = "😐"


# =============================================================================
# EMOTION INDICATORS
# =============================================================================
# Evaluation order matters: on equal scores the earlier emotion wins.
EMOTION_INDICATORS: Dict[str, EmotionIndicator] = {
    "happy": EmotionIndicator(
        keywords=(
            "happy", "joy", "excited", "grateful", "amazing", "wonderful", "great",
            "fantastic", "love", "blessed", "thrilled", "delighted", "cheerful",
            "elated", "content", "proud", "accomplished", "successful",
        ),
        context_phrases=(
            "feeling good", "went well", "so glad", "really enjoyed", "made me smile",
            "feel blessed", "grateful for",
        ),
        emoji="😊",
    ),
    "sad": EmotionIndicator(
        keywords=(
            "sad", "upset", "down", "depressed", "lonely", "empty", "hopeless",
            "disappointed", "hurt", "crying", "tears", "melancholy", "sorrowful",
            "heartbroken", "devastated",
        ),
        context_phrases=(
            "feeling down", "really sad", "want to cry", "feel empty", "so disappointed",
            "breaks my heart",
        ),
        emoji="😢",
    ),
    "angry": EmotionIndicator(
        keywords=("angry", "frustrated", "mad", "furious", "irritated", "annoyed", "rage", "outraged"),
        context_phrases=(
            "so frustrated", "really angry", "makes me mad", "can't stand",
            "drives me crazy", "fed up",
        ),
        emoji="😠",
    ),
    "anxious": EmotionIndicator(
        keywords=(
            "anxious", "worried", "nervous", "scared", "afraid", "panic", "stress",
            "overwhelmed", "tense", "uneasy", "apprehensive", "restless", "fearful",
        ),
        context_phrases=(
            "so worried", "really anxious", "can't stop thinking", "what if",
            "scared that", "nervous about",
        ),
        emoji="😰",
    ),
    "stressed": EmotionIndicator(
        keywords=(
            "stressed", "overwhelmed", "pressure", "deadline", "busy", "exhausted",
            "tired", "burnt out", "frazzled", "strained", "swamped",
        ),
        context_phrases=(
            "so much to do", "feeling overwhelmed", "too much pressure", "can't handle",
            "burning out",
        ),
        emoji="😫",
    ),
    "frustrated": EmotionIndicator(
        keywords=("frustrated", "annoyed", "irritated", "fed up", "stuck", "blocked", "hindered", "thwarted"),
        context_phrases=("so frustrated", "really annoying", "can't get", "not working", "keeps failing"),
        emoji="😤",
    ),
    "calm": EmotionIndicator(
        keywords=(
            "calm", "peaceful", "serene", "relaxed", "tranquil", "centered", "balanced",
            "content", "zen", "composed", "still", "quiet",
        ),
        context_phrases=("feeling calm", "so peaceful", "really relaxed", "at peace", "centered myself"),
        emoji="😌",
    ),
}


# Labels the remote model may return (a wider vocabulary than the local detector).
EMOTION_EMOJIS: Dict[str, str] = {
    "happy": "😊",
    "sad": "😢",
    "angry": "😠",
    "anxious": "😰",
    "stressed": "😫",
    "calm": "😌",
    "frustrated": "😤",
    "excited": "🤗",
    "lonely": "😔",
    "grateful": "🙏",
    "confused": "😕",
    "hopeful": "🌟",
    "disappointed": "😞",
    "content": "😊",
    "overwhelmed": "😵‍💫",
    "neutral": NEUTRAL_EMOJI,
}


# =============================================================================
# EMOTION LABEL ALIASES
# =============================================================================
# Onboarding lets users name emotions freely ("Anxiety", "Sadness", ...).
EMOTION_LABEL_ALIASES: Dict[str, str] = {
    "anxiety": "anxious",
    "anxiousness": "anxious",
    "worry": "anxious",
    "nervous": "anxious",
    "fear": "anxious",
    "sadness": "sad",
    "grief": "sad",
    "anger": "angry",
    "mad": "angry",
    "stress": "stressed",
    "overwhelm": "overwhelmed",
    "loneliness": "lonely",
    "frustration": "frustrated",
    "happiness": "happy",
    "joy": "happy",
    "calmness": "calm",
    "peace": "calm",
    "gratitude": "grateful",
    "guilt": "guilty",
    "numbness": "numb",
    "excitement": "excited",
    "hope": "hopeful",
    "disappointment": "disappointed",
    "confusion": "confused",
}


POSITIVE_EMOTIONS = frozenset({"happy", "grateful", "excited", "content", "calm"})
NEGATIVE_EMOTIONS = frozenset({"sad", "angry", "anxious", "stressed", "frustrated", "lonely", "overwhelmed"})


# =============================================================================
# DISTORTION SENTENCE-RECOVERY KEYWORDS
# =============================================================================
# Used when remote-model quotes cannot be verified against the entry.
DISTORTION_KEYWORDS: Dict[str, List[str]] = {
    "Catastrophizing": ["always", "never", "worst", "terrible", "disaster", "ruined", "doomed", "hopeless"],
    "All-or-Nothing Thinking": ["completely", "totally", "perfect", "failure", "useless", "worthless", "all", "none"],
    "Mind Reading": ["they think", "he thinks", "she thinks", "everyone thinks", "they hate", "they judge"],
    "Fortune Telling": ["will never", "going to fail", "won't work", "always happen", "bound to"],
    "Emotional Reasoning": ["feel like", "must be true", "because i feel", "feeling means"],
}


def normalize_emotion_label(label: str | None) -> str:
    """Map a free-text emotion name onto the detector vocabulary.

    Trims and lowercases, then resolves onboarding names through
    ``EMOTION_LABEL_ALIASES``. Unknown labels are returned lowercased.
    """
    if not label:
        return ""
    lowered = label.strip().lower()
    return EMOTION_LABEL_ALIASES.get(lowered, lowered)
