"""
Journal Entry Analysis Orchestrator
====================================

Combines the rule-based analyzers with an optional remote language model.

Tiers, tried in order:
    1. Remote: one chat-completion call, JSON parsed and validated
    2. Salvage: the remote answer was unusable, local analysis with the raw
       answer as extra context
    3. Local: no remote call at all (AI disabled or no API key)
    4. Minimal: neutral emotion and the default catalog, if all else fails

``analyze_entry`` always returns a complete AnalysisResult.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from reflect.core.config import settings
from reflect.schemas.analysis import AnalysisResult, EmotionalToolkitItem, EmotionResult
from reflect.services.llm_client import ChatCompletionClient, LLMError, get_chat_client
from reflect.utils.activity_generator import (
    BASE_ACTIVITIES,
    DEFAULT_CATALOG_EMOTION,
    ActivityGenerator,
    get_activity_generator,
)
from reflect.utils.distortion_detector import DistortionDetector, get_distortion_detector
from reflect.utils.emotion_detector import EmotionDetector, get_emotion_detector
from reflect.utils.reflection_generator import (
    ReflectionGenerator,
    extract_empathetic_sentences,
    get_reflection_generator,
)

logger = logging.getLogger(__name__)

ANALYSIS_SYSTEM_PROMPT = (
    "You are a compassionate mental health assistant trained in cognitive behavioral therapy. "
    "You analyze journal entries and respond with valid JSON only."
)

ANALYSIS_USER_PROMPT = """Analyze this journal entry and respond with a JSON object.

JOURNAL ENTRY: "{entry_text}"

Use exactly this structure:
{{
  "emotion": {{"primary_emotion": "one word such as anxious, sad, happy, stressed, calm", "confidence": 0.0}},
  "cognitive_distortions": [
    {{
      "type": "Catastrophizing | All-or-Nothing Thinking | Mind Reading | Fortune Telling | Emotional Reasoning",
      "description": "short explanation",
      "user_quotes": ["exact words copied from the entry"],
      "evidence_against": ["gentle counter-evidence"],
      "reframing_question": "a gentle question",
      "severity": "low | medium | high"
    }}
  ],
  "key_themes": ["theme"],
  "reflection": "one or two empathetic sentences about the entry",
  "suggested_activities": [
    {{"title": "", "description": "", "duration": "", "category": ""}}
  ]
}}

Only list a distortion if it is clearly present, and only quote words that appear verbatim in the entry."""

MINIMAL_REFLECTION = "Thank you for taking the time to reflect - putting your feelings into words is a meaningful step."


def extract_json_object(raw_text: str) -> Optional[Dict[str, Any]]:
    """Parse the text between the first ``{`` and the last ``}``; None if that is not a JSON object."""
    start = raw_text.find("{")
    end = raw_text.rfind("}") + 1
    if start < 0 or end <= start:
        return None
    try:
        data = json.loads(raw_text[start:end])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _emotion_block(data: Dict[str, Any]) -> Any:
    """The emotion object, accepting a nested block, a bare label or flat fields."""
    emotion = data.get("emotion")
    if isinstance(emotion, str):
        return {"primary_emotion": emotion, "confidence": data.get("confidence")}
    return emotion or data


class AnalysisService:
    """Stateless orchestrator; holds only its collaborators."""

    def __init__(
        self,
        client: Optional[ChatCompletionClient] = None,
        emotion_detector: Optional[EmotionDetector] = None,
        distortion_detector: Optional[DistortionDetector] = None,
        activity_generator: Optional[ActivityGenerator] = None,
        reflection_generator: Optional[ReflectionGenerator] = None,
    ):
        self.client = client or get_chat_client()
        self.emotion_detector = emotion_detector or get_emotion_detector()
        self.distortion_detector = distortion_detector or get_distortion_detector()
        self.activity_generator = activity_generator or get_activity_generator()
        self.reflection_generator = reflection_generator or get_reflection_generator()

    async def analyze_entry(
        self,
        entry_text: str,
        user_toolkit: Optional[Sequence[EmotionalToolkitItem]] = None,
        ai_enabled: bool = True,
    ) -> AnalysisResult:
        toolkit = list(user_toolkit or [])
        try:
            if not ai_enabled:
                return self.local_analysis(entry_text, toolkit, ai_enabled=False)
            if not self.client.is_configured:
                logger.info("No LLM API key configured; using local analysis")
                return self.local_analysis(entry_text, toolkit, ai_enabled=True)
            return await self._remote_analysis(entry_text, toolkit)
        except Exception:
            logger.exception("Analysis failed (entry length %d); returning minimal result", len(entry_text or ""))
            return self.minimal_result()

    # ------------------------------------------------------------------
    # Tiers
    # ------------------------------------------------------------------

    async def _remote_analysis(self, entry_text: str, toolkit: List[EmotionalToolkitItem]) -> AnalysisResult:
        raw_text = ""
        try:
            raw_text = await self.client.complete(
                [
                    {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
                    {"role": "user", "content": ANALYSIS_USER_PROMPT.format(entry_text=entry_text)},
                ],
                temperature=settings.LLM_ANALYSIS_TEMPERATURE,
                max_tokens=settings.LLM_ANALYSIS_MAX_TOKENS,
                timeout=settings.LLM_ANALYSIS_TIMEOUT,
            )
        except LLMError as e:
            logger.warning(f"Remote analysis unavailable: {e}")
            return self.salvage_analysis(entry_text, "", toolkit)

        data = extract_json_object(raw_text)
        if data is None:
            logger.warning("Remote analysis was not valid JSON (%d chars); salvaging", len(raw_text))
            return self.salvage_analysis(entry_text, raw_text, toolkit)

        try:
            return self.parse_remote_analysis(entry_text, raw_text, data, toolkit)
        except Exception:
            logger.exception("Could not use remote analysis; salvaging")
            return self.salvage_analysis(entry_text, raw_text, toolkit)

    def parse_remote_analysis(
        self,
        entry_text: str,
        raw_text: str,
        data: Dict[str, Any],
        toolkit: Sequence[EmotionalToolkitItem],
    ) -> AnalysisResult:
        emotion = self.emotion_detector.parse_emotion_from_ai(_emotion_block(data))
        distortions = self.distortion_detector.parse_distortions_from_ai(
            data.get("cognitive_distortions", []), entry_text
        )
        activities = self.activity_generator.generate_contextual_activities(
            entry_text, emotion.emotion, raw_text, toolkit, ai_enabled=True
        )

        reflection = data.get("reflection")
        if not isinstance(reflection, str) or not reflection.strip():
            reflection = self.reflection_generator.generate_content_based_reflection(entry_text, emotion.emotion)

        return AnalysisResult(
            emotion=emotion,
            distortions=distortions,
            activities=activities,
            suggested_emoji=emotion.emoji,
            reflection=reflection.strip(),
        )

    def salvage_analysis(
        self,
        entry_text: str,
        raw_text: str,
        toolkit: Sequence[EmotionalToolkitItem],
    ) -> AnalysisResult:
        try:
            emotion = self.emotion_detector.detect_emotion(entry_text, raw_text)
            distortions = self.distortion_detector.detect_cognitive_distortions(entry_text)
            activities = self.activity_generator.generate_contextual_activities(
                entry_text, emotion.emotion, raw_text, toolkit, ai_enabled=True
            )
            reflection = extract_empathetic_sentences(raw_text) or (
                self.reflection_generator.generate_content_based_reflection(entry_text, emotion.emotion)
            )
            return AnalysisResult(
                emotion=emotion,
                distortions=distortions,
                activities=activities,
                suggested_emoji=emotion.emoji,
                reflection=reflection,
            )
        except Exception:
            logger.exception("Salvage analysis failed; using local analysis")
            return self.local_analysis(entry_text, toolkit, ai_enabled=True)

    def local_analysis(
        self,
        entry_text: str,
        toolkit: Sequence[EmotionalToolkitItem],
        ai_enabled: bool,
    ) -> AnalysisResult:
        emotion = self.emotion_detector.detect_emotion(entry_text)
        distortions = self.distortion_detector.detect_cognitive_distortions(entry_text) if ai_enabled else []
        activities = self.activity_generator.generate_contextual_activities(
            entry_text, emotion.emotion, "", toolkit, ai_enabled=ai_enabled
        )
        reflection = self.reflection_generator.generate_content_based_reflection(entry_text, emotion.emotion)
        return AnalysisResult(
            emotion=emotion,
            distortions=distortions,
            activities=activities,
            suggested_emoji=emotion.emoji,
            reflection=reflection,
        )

    @staticmethod
    def minimal_result() -> AnalysisResult:
        emotion = EmotionResult()
        return AnalysisResult(
            emotion=emotion,
            distortions=[],
            activities=list(BASE_ACTIVITIES[DEFAULT_CATALOG_EMOTION]),
            suggested_emoji=emotion.emoji,
            reflection=MINIMAL_REFLECTION,
        )


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_analysis_service: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Get or create the analysis service singleton."""
    global _analysis_service
    if _analysis_service is None:
        _analysis_service = AnalysisService()
    return _analysis_service


async def analyze_entry(
    entry_text: str,
    user_toolkit: Optional[Sequence[EmotionalToolkitItem]] = None,
    ai_enabled: bool = True,
) -> AnalysisResult:
    """Convenience function for entry analysis."""
    return await get_analysis_service().analyze_entry(entry_text, user_toolkit, ai_enabled)
