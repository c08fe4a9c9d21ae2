from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from reflect.schemas.insight import (
    EmotionCount,
    EmotionSummary,
    HealingStrength,
    JournalEntry,
    PatternTrend,
)
from reflect.utils.distortion_detector import DistortionDetector, get_distortion_detector
from reflect.utils.emotion_detector import EmotionDetector, get_emotion_detector
from reflect.utils.wellness_lexicon import NEGATIVE_EMOTIONS, NEUTRAL_EMOTION, POSITIVE_EMOTIONS


class InsightService:
    """Statistics over a user's saved entries; pure functions of their input."""

    TIMEFRAME_DAYS: Dict[str, int] = {"week": 7, "month": 30}
    TOP_EMOTIONS = 6
    TREND_DELTA = 10.0
    MAX_WEIGHT = 0.3
    NO_PATTERN_SCORE = 85

    POSITIVE_WEEK_MESSAGE = "You've had more positive emotions this week. Keep nurturing what brings you joy!"
    NEGATIVE_WEEK_MESSAGE = (
        "This week has been challenging emotionally. Remember to be kind to yourself and use your coping strategies."
    )
    BALANCED_WEEK_MESSAGE = "Your emotions have been balanced this week. This shows good emotional regulation."

    PATTERN_DESCRIPTIONS: Dict[str, str] = {
        "Catastrophizing": "Imagining worst-case scenarios",
        "All-or-Nothing Thinking": "Black and white thinking",
        "Mind Reading": "Assuming others' thoughts",
        "Fortune Telling": "Predicting negative outcomes",
        "Emotional Reasoning": "Feelings as facts",
    }

    def __init__(
        self,
        emotion_detector: Optional[EmotionDetector] = None,
        distortion_detector: Optional[DistortionDetector] = None,
    ):
        self.emotion_detector = emotion_detector or get_emotion_detector()
        self.distortion_detector = distortion_detector or get_distortion_detector()

    # ------------------------------------------------------------------
    # Emotions
    # ------------------------------------------------------------------

    def summarize_emotions(
        self,
        entries: Sequence[JournalEntry],
        timeframe: str = "week",
        now: Optional[datetime] = None,
    ) -> EmotionSummary:
        today = (now or datetime.now()).date()
        if timeframe not in self.TIMEFRAME_DAYS:
            timeframe = "week"
        days = self.TIMEFRAME_DAYS[timeframe]

        daily: Dict[str, List[str]] = {
            (today - timedelta(days=offset)).isoformat(): [] for offset in range(days - 1, -1, -1)
        }
        counts: Counter = Counter()
        for entry in entries:
            key = entry.created_at.date().isoformat()
            if key not in daily:
                continue
            emotion = self.emotion_detector.detect_emotion(entry.content).emotion or entry.mood or NEUTRAL_EMOTION
            daily[key].append(emotion)
            counts[emotion] += 1

        total = sum(counts.values())
        top = [EmotionCount(emotion=e, count=c) for e, c in counts.most_common(self.TOP_EMOTIONS)]
        return EmotionSummary(
            timeframe=timeframe,
            counts=dict(counts),
            daily=daily,
            top_emotions=top,
            total_entries=total,
            trend_message=self._week_trend_message(daily) if timeframe == "week" and total else "",
        )

    def _week_trend_message(self, daily: Dict[str, List[str]]) -> str:
        emotions = [e for day in daily.values() for e in day]
        positive = sum(1 for e in emotions if e in POSITIVE_EMOTIONS)
        negative = sum(1 for e in emotions if e in NEGATIVE_EMOTIONS)
        if positive > negative:
            return self.POSITIVE_WEEK_MESSAGE
        if negative > positive:
            return self.NEGATIVE_WEEK_MESSAGE
        return self.BALANCED_WEEK_MESSAGE

    # ------------------------------------------------------------------
    # Thinking patterns
    # ------------------------------------------------------------------

    def _patterns_in(self, entry: JournalEntry) -> set:
        return {d.type for d in self.distortion_detector.detect_all(entry.content)}

    def count_thinking_patterns(self, entries: Sequence[JournalEntry]) -> Dict[str, int]:
        """Number of entries showing each pattern; every known pattern is listed."""
        counts = {rule.type: 0 for rule in self.distortion_detector.rules}
        for entry in entries:
            for pattern in self._patterns_in(entry):
                counts[pattern] = counts.get(pattern, 0) + 1
        return counts

    def analyze_healing_strength(
        self,
        entries: Sequence[JournalEntry],
        weeks: int = 4,
        now: Optional[datetime] = None,
    ) -> HealingStrength:
        today = (now or datetime.now()).date()
        buckets = self._weekly_buckets(entries, weeks, today)
        detected = [[self._patterns_in(entry) for entry in bucket] for bucket in buckets]

        trends: List[PatternTrend] = []
        for rule in self.distortion_detector.rules:
            weekly = [
                (sum(1 for found in week if rule.type in found) / len(week)) * 100 if week else 0.0
                for week in detected
            ]
            if not any(value > 0 for value in weekly):
                continue
            trends.append(
                PatternTrend(
                    pattern=rule.type,
                    weekly_data=weekly,
                    trend=self._trend(weekly),
                    healing_score=self._healing_score(weekly),
                    description=self.PATTERN_DESCRIPTIONS.get(rule.type, rule.type),
                )
            )

        overall = (
            round(sum(t.healing_score for t in trends) / len(trends)) if trends else self.NO_PATTERN_SCORE
        )
        return HealingStrength(patterns=trends, overall_score=overall, insight=self._healing_insight(trends))

    @staticmethod
    def _weekly_buckets(entries: Sequence[JournalEntry], weeks: int, today: date) -> List[List[JournalEntry]]:
        """Oldest week first; each week is the seven calendar days ending ``i`` weeks before today."""
        buckets = []
        for i in range(weeks - 1, -1, -1):
            end = today - timedelta(days=i * 7)
            start = end - timedelta(days=6)
            buckets.append([e for e in entries if start <= e.created_at.date() <= end])
        return buckets

    def _trend(self, weekly: List[float]) -> str:
        middle = len(weekly) // 2
        first, second = weekly[:middle], weekly[middle:]
        first_avg = sum(first) / len(first) if first else 0.0
        second_avg = sum(second) / len(second) if second else 0.0
        improvement = first_avg - second_avg
        if improvement > self.TREND_DELTA:
            return "improving"
        if improvement < -self.TREND_DELTA:
            return "concerning"
        return "stable"

    def _healing_score(self, weekly: List[float]) -> int:
        latest = weekly[-1] if weekly else 0.0
        peak = max(weekly) if weekly else 0.0
        return round(max(0.0, 100 - latest - peak * self.MAX_WEIGHT))

    @staticmethod
    def _healing_insight(trends: List[PatternTrend]) -> str:
        if not trends:
            return (
                "Excellent mental resilience! No concerning thought patterns detected. "
                "Your thinking shows healthy balance and perspective."
            )
        improving = sum(1 for t in trends if t.trend == "improving")
        concerning = sum(1 for t in trends if t.trend == "concerning")
        if improving > concerning:
            verb = "patterns are" if improving > 1 else "pattern is"
            return f"Great progress! {improving} {verb} improving. Your healing journey shows positive momentum."
        if concerning > 0:
            verb = "patterns need" if concerning > 1 else "pattern needs"
            return f"{concerning} {verb} attention. Focus on reframing techniques and self-compassion practices."
        return (
            "Your thought patterns are stable. Continue with your current coping strategies "
            "and mindfulness practices."
        )


_insight_service: Optional[InsightService] = None


def get_insight_service() -> InsightService:
    global _insight_service
    if _insight_service is None:
        _insight_service = InsightService()
    return _insight_service


def summarize_emotions(entries: Sequence[JournalEntry], timeframe: str = "week", now: Optional[datetime] = None) -> EmotionSummary:
    return get_insight_service().summarize_emotions(entries, timeframe, now)


def count_thinking_patterns(entries: Sequence[JournalEntry]) -> Dict[str, int]:
    return get_insight_service().count_thinking_patterns(entries)


def analyze_healing_strength(entries: Sequence[JournalEntry], weeks: int = 4, now: Optional[datetime] = None) -> HealingStrength:
    return get_insight_service().analyze_healing_strength(entries, weeks, now)
