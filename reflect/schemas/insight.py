"""Pydantic schemas for journal-history insights."""
from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JournalEntry(_CamelModel):
    """A saved journal entry as handed over by the entries store."""
    id: int
    content: str
    created_at: datetime
    mood: Optional[str] = None
    title: Optional[str] = None


class EmotionCount(_CamelModel):
    emotion: str
    count: int = Field(ge=0)


class EmotionSummary(_CamelModel):
    """Emotion distribution over a recent window."""
    timeframe: str = Field(pattern=r"^(week|month)$", default="week")
    counts: Dict[str, int] = Field(default_factory=dict)
    daily: Dict[str, List[str]] = Field(default_factory=dict)
    top_emotions: List[EmotionCount] = Field(default_factory=list, max_length=6)
    total_entries: int = Field(ge=0, default=0)
    trend_message: str = ""


class PatternTrend(_CamelModel):
    pattern: str
    weekly_data: List[float] = Field(default_factory=list)
    trend: str = Field(pattern=r"^(improving|stable|concerning)$", default="stable")
    healing_score: int = Field(ge=0, le=100)
    description: str = ""


class HealingStrength(_CamelModel):
    patterns: List[PatternTrend] = Field(default_factory=list)
    overall_score: int = Field(ge=0, le=100, default=85)
    insight: str = ""


# =============================================================================
# REQUEST BODIES
# =============================================================================

class EmotionSummaryRequest(_CamelModel):
    entries: List[JournalEntry] = Field(default_factory=list)
    timeframe: str = Field(pattern=r"^(week|month)$", default="week")


class ThinkingPatternsRequest(_CamelModel):
    entries: List[JournalEntry] = Field(default_factory=list)


class HealingStrengthRequest(_CamelModel):
    entries: List[JournalEntry] = Field(default_factory=list)
    weeks: int = Field(ge=1, le=52, default=4)
