"""
Tests for keyword/phrase emotion detection and remote emotion decoding.

Run with: python -m pytest tests/test_emotion_detector.py -v
"""

import pytest


# =============================================================================
# LOCAL DETECTION
# =============================================================================

class TestDetectEmotion:
    """Scoring, tie-breaking and confidence of the local detector."""

    def test_keywords_pick_emotion(self):
        from reflect.utils.emotion_detector import detect_emotion

        result = detect_emotion("I am so happy and grateful today")

        assert result.emotion == "happy"
        assert result.emoji == "😊"
        # two keywords: 0.7 + 0.05 * 4
        assert result.confidence == pytest.approx(0.9)

    def test_phrase_outweighs_keyword(self):
        from reflect.utils.emotion_detector import EmotionDetector

        scores = EmotionDetector().score_emotions("I was feeling down after lunch")

        assert scores["sad"] == 7  # "down" keyword + "feeling down" phrase
        assert scores["happy"] == 0

    def test_no_match_is_neutral(self):
        from reflect.utils.emotion_detector import detect_emotion

        result = detect_emotion("The bus arrived at noon.")

        assert result.emotion == "neutral"
        assert result.confidence == 0.6
        assert result.emoji == "😐"

    def test_tie_goes_to_first_listed_emotion(self):
        from reflect.utils.emotion_detector import detect_emotion

        assert detect_emotion("I feel happy but also sad").emotion == "happy"

    def test_confidence_is_capped(self):
        from reflect.utils.emotion_detector import detect_emotion

        result = detect_emotion("happy happy happy happy happy happy")

        assert result.confidence == pytest.approx(0.95)

    def test_auxiliary_text_contributes(self):
        from reflect.utils.emotion_detector import detect_emotion

        assert detect_emotion("Today happened.", "you seem anxious").emotion == "anxious"

    def test_curly_apostrophes_match_phrases(self):
        from reflect.utils.emotion_detector import detect_emotion

        assert detect_emotion("I can’t handle it").emotion == "stressed"

    def test_custom_scoring(self):
        from reflect.utils.emotion_detector import EmotionDetector, EmotionScoring

        detector = EmotionDetector(EmotionScoring(neutral_confidence=0.5))

        assert detector.detect_emotion("nothing here").confidence == 0.5

    @pytest.mark.parametrize("text", [
        "",
        "The bus arrived at noon.",
        "I'm so worried, what if everything goes wrong",
        "happy " * 50,
        "Feeling calm and at peace, so peaceful",
    ])
    def test_result_is_bounded_and_idempotent(self, text):
        from reflect.utils.emotion_detector import detect_emotion

        first = detect_emotion(text)
        second = detect_emotion(text)

        assert 0.1 <= first.confidence <= 1.0
        assert first.emotion
        assert first == second


# =============================================================================
# REMOTE DECODING
# =============================================================================

class TestParseEmotionFromAI:
    """Tolerant decoding of the model's emotion block."""

    def test_well_formed(self):
        from reflect.utils.emotion_detector import get_emotion_detector

        result = get_emotion_detector().parse_emotion_from_ai({"primary_emotion": "Anxious", "confidence": 0.85})

        assert result.emotion == "anxious"
        assert result.confidence == pytest.approx(0.85)
        assert result.emoji == "😰"

    def test_missing_fields_use_defaults(self):
        from reflect.utils.emotion_detector import get_emotion_detector

        result = get_emotion_detector().parse_emotion_from_ai({})

        assert result.emotion == "neutral"
        assert result.confidence == pytest.approx(0.7)
        assert result.emoji == "😐"

    def test_not_a_mapping(self):
        from reflect.utils.emotion_detector import get_emotion_detector

        result = get_emotion_detector().parse_emotion_from_ai(["happy"])

        assert result.emotion == "neutral"

    @pytest.mark.parametrize("raw, expected", [
        (5, 1.0),
        (0, 0.1),
        (-3.2, 0.1),
        ("high", 0.7),
        ("0.9", 0.7),
        (True, 0.7),
        (None, 0.7),
        (float("nan"), 0.7),
        (float("inf"), 0.7),
        (float("-inf"), 0.7),
        (10 ** 400, 1.0),
        (-(10 ** 400), 0.1),
    ])
    def test_confidence_clamped(self, raw, expected):
        from reflect.utils.emotion_detector import get_emotion_detector

        result = get_emotion_detector().parse_emotion_from_ai({"primary_emotion": "sad", "confidence": raw})

        assert result.confidence == pytest.approx(expected)

    def test_wider_vocabulary_emoji(self):
        from reflect.utils.emotion_detector import get_emotion_detector

        detector = get_emotion_detector()

        assert detector.parse_emotion_from_ai({"primary_emotion": "grateful"}).emoji == "🙏"
        assert detector.parse_emotion_from_ai({"primary_emotion": "bored"}).emoji == "😐"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
