"""
Emotion Detection Module
=========================

Keyword/phrase scoring of journal text against the emotion indicator
table, plus a tolerant decoder for the remote model's emotion block.

Scoring per emotion:
    score = keyword_weight * (whole-word keyword hits) + phrase_weight * (distinct phrases found)

The highest score wins. Ties go to the emotion listed first in
``EMOTION_INDICATORS`` so the result is deterministic.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from reflect.schemas.analysis import EmotionResult
from reflect.utils.text_cleaning import count_whole_word, normalize_for_matching
from reflect.utils.wellness_lexicon import (
    EMOTION_EMOJIS,
    EMOTION_INDICATORS,
    NEUTRAL_EMOJI,
    NEUTRAL_EMOTION,
    EmotionIndicator,
)


@dataclass(frozen=True, slots=True)
class EmotionScoring:
    keyword_weight: int = 2
    phrase_weight: int = 5
    base_confidence: float = 0.7
    confidence_step: float = 0.05
    max_confidence: float = 0.95
    neutral_confidence: float = 0.6
    default_remote_confidence: float = 0.7
    min_remote_confidence: float = 0.1
    max_remote_confidence: float = 1.0


class EmotionDetector:
    """Stateless emotion classifier; safe to share across concurrent analyses."""

    def __init__(
        self,
        scoring: EmotionScoring = EmotionScoring(),
        indicators: Optional[Mapping[str, EmotionIndicator]] = None,
    ):
        self.scoring = scoring
        self.indicators = dict(indicators or EMOTION_INDICATORS)

    def score_emotions(self, text: str, auxiliary_text: str = "") -> Dict[str, int]:
        """Return the raw score of every emotion, in table order."""
        full_text = normalize_for_matching(f"{text or ''} {auxiliary_text or ''}")
        scores: Dict[str, int] = {}
        for emotion, indicator in self.indicators.items():
            score = 0
            for keyword in indicator.keywords:
                score += count_whole_word(full_text, keyword) * self.scoring.keyword_weight
            for phrase in indicator.context_phrases:
                if phrase in full_text:
                    score += self.scoring.phrase_weight
            scores[emotion] = score
        return scores

    def detect_emotion(self, text: str, auxiliary_text: str = "") -> EmotionResult:
        max_score = 0
        detected = NEUTRAL_EMOTION
        for emotion, score in self.score_emotions(text, auxiliary_text).items():
            # Strictly greater: earlier emotions keep ties.
            if score > max_score:
                max_score = score
                detected = emotion

        if detected == NEUTRAL_EMOTION:
            return EmotionResult(
                emotion=NEUTRAL_EMOTION,
                confidence=self.scoring.neutral_confidence,
                emoji=NEUTRAL_EMOJI,
            )

        confidence = min(
            self.scoring.max_confidence,
            self.scoring.base_confidence + max_score * self.scoring.confidence_step,
        )
        return EmotionResult(
            emotion=detected,
            confidence=round(confidence, 4),
            emoji=self.indicators[detected].emoji,
        )

    def parse_emotion_from_ai(self, emotion_data: Any) -> EmotionResult:
        """Decode the remote model's ``{"primary_emotion", "confidence"}`` block.

        Every field is optional: a missing label becomes ``neutral``, a missing
        or non-numeric confidence (NaN and infinities included) becomes the
        default, and the value is clamped.
        """
        data = emotion_data if isinstance(emotion_data, Mapping) else {}

        label = data.get("primary_emotion")
        emotion = label.strip().lower() if isinstance(label, str) and label.strip() else NEUTRAL_EMOTION

        confidence = data.get("confidence")
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            confidence = self.scoring.default_remote_confidence
        elif isinstance(confidence, float) and not math.isfinite(confidence):
            confidence = self.scoring.default_remote_confidence
        # Clamp before float(): int/float comparison is exact, so huge ints cannot overflow.
        confidence = float(min(
            self.scoring.max_remote_confidence,
            max(self.scoring.min_remote_confidence, confidence),
        ))

        return EmotionResult(
            emotion=emotion,
            confidence=confidence,
            emoji=EMOTION_EMOJIS.get(emotion, NEUTRAL_EMOJI),
        )


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_emotion_detector: Optional[EmotionDetector] = None


def get_emotion_detector() -> EmotionDetector:
    """Get or create the emotion detector singleton."""
    global _emotion_detector
    if _emotion_detector is None:
        _emotion_detector = EmotionDetector()
    return _emotion_detector


def detect_emotion(text: str, auxiliary_text: str = "") -> EmotionResult:
    """Convenience function for emotion detection."""
    return get_emotion_detector().detect_emotion(text, auxiliary_text)
