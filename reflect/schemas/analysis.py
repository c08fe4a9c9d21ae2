"""Pydantic schemas for journal entry analysis results."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ValueObject(BaseModel):
    """Immutable model serialised with camelCase keys."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class EmotionResult(_ValueObject):
    emotion: str = "neutral"
    confidence: float = Field(ge=0.1, le=1.0, default=0.6)
    emoji: str = "😐"


class CognitiveDistortion(_ValueObject):
    type: str
    description: str
    detected_text: List[str] = Field(default_factory=list, max_length=2)
    user_quotes: List[str] = Field(default_factory=list, max_length=2)
    evidence: List[str] = Field(default_factory=list)
    reframing_prompt: str
    severity: str = Field(pattern=r"^(low|medium|high)$", default="medium")


class ActivitySuggestion(_ValueObject):
    id: str
    title: str
    description: str
    duration: str
    category: str


class AnalysisResult(_ValueObject):
    emotion: EmotionResult
    distortions: List[CognitiveDistortion] = Field(default_factory=list, max_length=3)
    activities: List[ActivitySuggestion] = Field(default_factory=list)
    suggested_emoji: str
    reflection: str = Field(min_length=1)


class EmotionalToolkitItem(_ValueObject):
    """A user's saved coping actions for one emotion (owned by the profile store)."""
    emotion: str
    actions: List[str] = Field(default_factory=list)


# =============================================================================
# REQUEST / RESPONSE BODIES
# =============================================================================

class AnalyzeRequest(_ValueObject):
    text: str = Field(min_length=1)
    toolkit: List[EmotionalToolkitItem] = Field(default_factory=list)
    ai_enabled: bool = True


class ReframeRequest(_ValueObject):
    original_thought: str = Field(min_length=1)
    distortion_type: str
    user_context: Optional[str] = ""


class ReframeResponse(_ValueObject):
    reframed_thought: str
