"""
Thought reframing.
Asks the remote model for one gentle first-person reframe and falls back
to per-distortion templates whenever that is not possible.
"""

import logging
import random
from typing import Dict, List, Optional

from reflect.core.config import settings
from reflect.services.llm_client import ChatCompletionClient, LLMError, get_chat_client

logger = logging.getLogger(__name__)

REFRAME_SYSTEM_PROMPT = (
    "You are a cognitive behavioral therapist helping someone reframe unhelpful thoughts "
    "gently. Respond with only the reframed thought, nothing else."
)

REFRAME_USER_PROMPT = """As a cognitive behavioral therapist, help gently reframe this unhelpful thought:

ORIGINAL THOUGHT: "{original_thought}"
DISTORTION TYPE: {distortion_type}
USER CONTEXT: "{user_context}"

Provide a gentle, compassionate, and supportive reframe that:
1. Acknowledges the person's feelings with empathy
2. When challenging the distortion or presenting evidence, do so by asking gentle questions (e.g., "Is it possible that...?", "Could there be another way to see this?")
3. Offers a more balanced, realistic perspective
4. Is written in first person ("I" statements)

Respond with ONLY the reframed thought, no additional text:"""

DEFAULT_REFRAME_TYPE = "Catastrophizing"

REFRAME_TEMPLATES: Dict[str, List[str]] = {
    "Catastrophizing": [
        "This feels overwhelming right now, but is it possible that things might not turn out as badly as I fear?",
        "I know I am worried, but could there be more than one possible outcome here?",
        "Is it possible that I have handled difficult situations before, and I might be able to handle this too, one step at a time?",
    ],
    "All-or-Nothing Thinking": [
        "I feel like this is all or nothing, but could there be some gray areas I am not seeing?",
        "Is it possible that even small steps forward are still progress?",
        "Could there be aspects of this situation that are both challenging and positive?",
    ],
    "Mind Reading": [
        "I feel like I know what others are thinking, but is it possible I don't have all the information?",
        "Could there be other explanations for their behavior that have nothing to do with me?",
        "Is it possible that I am focusing on what I imagine, rather than what I actually know?",
    ],
    "Fortune Telling": [
        "I am worried about what might happen, but is it possible that I can't predict the future with certainty?",
        "Could things turn out differently than I expect?",
        "Is it possible that I can focus on what I can control right now, even if I feel uncertain?",
    ],
    "Emotional Reasoning": [
        "I feel strongly about this, but could my feelings be just one part of the picture?",
        "Is it possible that my emotions are valid, but they might not tell the whole story?",
        "Could there be evidence that gently challenges how I'm feeling right now?",
    ],
}

_TEMPLATES_BY_KEY = {name.lower(): templates for name, templates in REFRAME_TEMPLATES.items()}
_WRAPPING_QUOTES = "\"'“”‘’"


class ReframingService:
    def __init__(
        self,
        client: Optional[ChatCompletionClient] = None,
        rng: Optional[random.Random] = None,
    ):
        self.client = client or get_chat_client()
        self._rng = rng or random.Random()

    async def generate_reframed_thought(
        self,
        original_thought: str,
        distortion_type: str,
        user_context: Optional[str] = "",
    ) -> str:
        """Return a reframe; never raises."""
        if not self.client.is_configured:
            logger.info("No LLM API key configured; using template reframe")
            return self.fallback_reframe(distortion_type)

        messages = [
            {"role": "system", "content": REFRAME_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": REFRAME_USER_PROMPT.format(
                    original_thought=original_thought,
                    distortion_type=distortion_type,
                    user_context=user_context or "",
                ),
            },
        ]
        try:
            content = await self.client.complete(
                messages,
                temperature=settings.LLM_REFRAME_TEMPERATURE,
                max_tokens=settings.LLM_REFRAME_MAX_TOKENS,
                timeout=settings.LLM_REFRAME_TIMEOUT,
            )
            reframed = content.strip().strip(_WRAPPING_QUOTES).strip()
            if reframed:
                return reframed
            logger.warning("Model returned an empty reframe; using template")
        except LLMError as e:
            logger.warning(f"Failed to generate reframe from model: {e}")
        except Exception:
            logger.exception("Unexpected error while generating reframe")

        return self.fallback_reframe(distortion_type)

    def fallback_reframe(self, distortion_type: str) -> str:
        key = (distortion_type or "").strip().lower()
        templates = _TEMPLATES_BY_KEY.get(key) or REFRAME_TEMPLATES[DEFAULT_REFRAME_TYPE]
        return self._rng.choice(templates)


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_reframing_service: Optional[ReframingService] = None


def get_reframing_service() -> ReframingService:
    global _reframing_service
    if _reframing_service is None:
        _reframing_service = ReframingService()
    return _reframing_service
