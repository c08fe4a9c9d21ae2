from typing import Dict

from fastapi import APIRouter

from reflect.schemas.insight import (
    EmotionSummary,
    EmotionSummaryRequest,
    HealingStrength,
    HealingStrengthRequest,
    ThinkingPatternsRequest,
)
from reflect.services.insight_service import get_insight_service

router = APIRouter()


@router.post("/emotions", response_model=EmotionSummary)
def emotions(body: EmotionSummaryRequest):
    return get_insight_service().summarize_emotions(body.entries, body.timeframe)


@router.post("/thinking-patterns", response_model=Dict[str, int])
def thinking_patterns(body: ThinkingPatternsRequest):
    return get_insight_service().count_thinking_patterns(body.entries)


@router.post("/healing-strength", response_model=HealingStrength)
def healing_strength(body: HealingStrengthRequest):
    return get_insight_service().analyze_healing_strength(body.entries, body.weeks)
