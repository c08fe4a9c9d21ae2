"""
Reflection Generation Module
=============================

Produces a single empathetic sentence about an entry:

1. Situation-specific templates when a subject cluster and a compatible
   emotion appear together (checked in priority order).
2. Otherwise a per-emotion template filled with the entry's main subject
   ("work", "your relationships", ... or "this situation").

Template choice within a set is uniform random; pass a seeded
``random.Random`` for reproducible output.
"""

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from reflect.utils.text_cleaning import normalize_for_matching, split_sentences

DEFAULT_SUBJECT = "this situation"
VAGUE_SUBJECT = "what you're going through"

EMPATHY_KEYWORDS = ("feel", "understand", "valid", "natural", "makes sense", "okay", "normal", "hear you")
MAX_SALVAGED_SENTENCES = 2


@dataclass(frozen=True, slots=True)
class SituationTemplate:
    cluster: Tuple[str, ...]
    emotions: Optional[Tuple[str, ...]]  # None matches any emotion
    templates: Tuple[str, ...]


# =============================================================================
# SITUATION-SPECIFIC TEMPLATES (priority order)
# =============================================================================

SITUATION_TEMPLATES: Tuple[SituationTemplate, ...] = (
    SituationTemplate(
        cluster=("meeting", "presentation", "speaking"),
        emotions=("anxious", "nervous"),
        templates=(
            "I can understand how speaking up in meetings would feel nerve-wracking - your heart "
            "racing shows how much you care about contributing meaningfully.",
            "Standing in front of others can make anyone's nerves spike - the fact that it matters "
            "this much to you says a lot about how seriously you take your contribution.",
        ),
    ),
    SituationTemplate(
        cluster=("work", "job", "deadline"),
        emotions=("stressed", "overwhelmed"),
        templates=(
            "The work pressure you're describing sounds genuinely challenging - feeling overwhelmed "
            "when juggling multiple demands is completely natural.",
            "Carrying this many work demands at once would weigh on anyone - it makes sense that "
            "you're feeling stretched thin right now.",
        ),
    ),
    SituationTemplate(
        cluster=("work", "job", "deadline"),
        emotions=("frustrated",),
        templates=(
            "Your frustration with the work situation comes through clearly - it's understandable "
            "when professional challenges feel blocking or difficult.",
            "It sounds like work keeps putting obstacles in your way - feeling frustrated when your "
            "effort doesn't translate into progress is completely understandable.",
        ),
    ),
    SituationTemplate(
        cluster=("friend", "relationship", "family"),
        emotions=("sad", "hurt"),
        templates=(
            "The pain you're feeling in this relationship situation is real - interpersonal "
            "challenges can be some of the most difficult to navigate.",
            "When someone close to us is part of what hurts, it cuts deeper - your sadness here "
            "reflects how much this connection matters.",
        ),
    ),
    SituationTemplate(
        cluster=("friend", "relationship", "family"),
        emotions=("happy", "grateful"),
        templates=(
            "The joy you're experiencing in your relationships really shines through - these "
            "connections clearly mean a lot to you.",
            "The warmth you feel toward the people in your life comes through in every line - "
            "these bonds are clearly a source of strength for you.",
        ),
    ),
    SituationTemplate(
        cluster=("sleep", "tired", "exhausted"),
        emotions=None,
        templates=(
            "The exhaustion you're describing sounds draining - your body and mind are telling you "
            "something important about needing rest.",
            "Running on empty like this is hard - your tiredness is a real signal that you deserve "
            "some genuine rest.",
        ),
    ),
    SituationTemplate(
        cluster=("progress", "routine", "consistent"),
        emotions=("happy", "content"),
        templates=(
            "Your awareness of the positive changes in your routine is wonderful - recognizing "
            "progress, even small steps, shows real self-awareness.",
            "The consistency you're building is paying off - noticing these small wins is exactly "
            "how lasting change takes root.",
        ),
    ),
)


# =============================================================================
# GENERIC PER-EMOTION TEMPLATES
# =============================================================================

EMOTION_REFLECTIONS: Dict[str, Tuple[str, ...]] = {
    "anxious": (
        "The worry you're expressing about {subject} shows how much this matters to you - anxiety often reflects our deepest cares.",
        "I can feel the tension you're carrying about {subject} - these concerns make sense given what you're facing.",
        "Your nervousness around {subject} is completely understandable - it takes courage to acknowledge these feelings.",
    ),
    "sad": (
        "The sadness you're feeling about {subject} comes through in your words - these emotions deserve acknowledgment and space.",
        "I can sense the weight you're carrying regarding {subject} - it's natural to feel this way when facing difficult situations.",
        "Your pain around {subject} is valid - allowing yourself to feel these emotions is part of processing them.",
    ),
    "angry": (
        "The frustration you're experiencing with {subject} is palpable - anger often signals that something important to you has been affected.",
        "Your strong feelings about {subject} show how much this situation matters to you - these emotions are completely valid.",
        "I can understand why {subject} would trigger such intense feelings - sometimes anger is our way of protecting what we value.",
    ),
    "frustrated": (
        "The frustration you're feeling with {subject} is completely understandable - it's natural when things aren't going as hoped.",
        "Your sense of being stuck with {subject} comes through clearly - these feelings of blockage are valid and worth acknowledging.",
        "The tension you're experiencing around {subject} makes perfect sense - frustration often arises when we care deeply about outcomes.",
    ),
    "stressed": (
        "The overwhelm you're feeling about {subject} sounds genuinely challenging - you're managing a lot right now.",
        "Your stress regarding {subject} is completely valid - it's natural to feel this way when facing pressure.",
        "The burden you're carrying with {subject} comes through in your words - recognizing this stress is an important first step.",
    ),
    "happy": (
        "The joy you're experiencing with {subject} is beautiful to witness - your positive energy really shines through.",
        "Your happiness about {subject} is wonderful to read about - these moments of joy are worth celebrating.",
        "The contentment you're feeling around {subject} is lovely - it's clear this brings you genuine satisfaction.",
    ),
    "calm": (
        "The peace you've found in {subject} is beautiful - these moments of tranquility are precious and worth savoring.",
        "Your sense of calm regarding {subject} shows your ability to find balance - this inner peace is a real strength.",
        "The serenity you're experiencing with {subject} comes through clearly - it's wonderful when we can find this stillness.",
    ),
    "grateful": (
        "The gratitude you're expressing about {subject} is touching - your appreciation for these moments shows real awareness.",
        "Your thankfulness regarding {subject} really shines through - this perspective is a beautiful way to approach life.",
        "The appreciation you're feeling for {subject} is wonderful - recognizing these gifts shows emotional wisdom.",
    ),
}

DEFAULT_REFLECTIONS: Tuple[str, ...] = (
    "Your feelings about {subject} are completely valid - the way you've expressed this shows real emotional awareness.",
    "What you're experiencing with {subject} makes perfect sense - your ability to reflect on this shows insight.",
    "The emotions you're processing around {subject} deserve acknowledgment - this kind of self-reflection is valuable.",
)


# =============================================================================
# SUBJECT EXTRACTION
# =============================================================================

SUBJECT_PATTERNS: Tuple[Tuple[re.Pattern, str], ...] = tuple(
    (re.compile(pattern), subject)
    for pattern, subject in (
        (r"\b(meeting|presentation|speaking|conference|interview)\b", "the meeting situation"),
        (r"\b(work|job|career|office|deadline|project|boss|colleague)\b", "work"),
        (r"\b(friend|friendship|relationship|partner|spouse|family|parent|sibling)\b", "your relationships"),
        (r"\b(school|study|exam|class|university|college|homework)\b", "your studies"),
        (r"\b(health|doctor|medical|illness|pain|therapy)\b", "your health"),
        (r"\b(sleep|tired|exhausted|insomnia|rest)\b", "your sleep and energy"),
        (r"\b(money|financial|budget|bills|debt|income)\b", "financial matters"),
        (r"\b(future|goals|dreams|plans|decisions|choice)\b", "your future plans"),
        (r"\b(routine|habit|progress|improvement|change)\b", "your personal growth"),
        (r"\b(home|house|apartment|moving|living)\b", "your living situation"),
    )
)


def extract_main_subjects(text: str) -> List[str]:
    """Subjects mentioned in ``text`` in table order; never empty."""
    lower_text = normalize_for_matching(text)
    subjects = [subject for pattern, subject in SUBJECT_PATTERNS if pattern.search(lower_text)]
    if subjects:
        return subjects

    sentences = split_sentences(text, 10)
    if sentences and any(len(word) > 4 for word in sentences[0].split()):
        return [VAGUE_SUBJECT]
    return [DEFAULT_SUBJECT]


def extract_empathetic_sentences(raw_text: str) -> str:
    """Recover a reflection from free-form model output.

    Keeps the first sentences that sound empathetic; returns "" when none do.
    """
    sentences = [
        sentence for sentence in split_sentences(raw_text, 10)
        if any(keyword in normalize_for_matching(sentence) for keyword in EMPATHY_KEYWORDS)
    ]
    if not sentences:
        return ""
    return ". ".join(sentences[:MAX_SALVAGED_SENTENCES]) + "."


class ReflectionGenerator:
    """Templated empathetic reflections keyed by emotion and subject."""

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def generate_content_based_reflection(self, entry_text: str, emotion: str) -> str:
        emotion = (emotion or "").strip().lower()
        lower_text = normalize_for_matching(entry_text)

        for situation in SITUATION_TEMPLATES:
            if not any(word in lower_text for word in situation.cluster):
                continue
            if situation.emotions is None or emotion in situation.emotions:
                return self._rng.choice(situation.templates)

        subject = extract_main_subjects(entry_text or "")[0]
        templates = EMOTION_REFLECTIONS.get(emotion, DEFAULT_REFLECTIONS)
        return self._rng.choice(templates).format(subject=subject)


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_reflection_generator: Optional[ReflectionGenerator] = None


def get_reflection_generator() -> ReflectionGenerator:
    """Get or create the reflection generator singleton."""
    global _reflection_generator
    if _reflection_generator is None:
        _reflection_generator = ReflectionGenerator()
    return _reflection_generator
