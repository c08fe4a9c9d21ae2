"""
Cognitive Distortion Detection Module
======================================

Rule-based detection of unhelpful thinking patterns in journal text,
and validation of distortions proposed by the remote model.

Categories are evaluated in a fixed order:
    Catastrophizing, Mind Reading, All-or-Nothing Thinking,
    Fortune Telling, Emotional Reasoning

Every quote attributed to the user must be found (case-insensitively)
in the entry itself. Remote-model quotes that cannot be found are
dropped; a distortion without any supporting sentence is dropped too.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from reflect.schemas.analysis import CognitiveDistortion
from reflect.utils.text_cleaning import (
    contains_whole_word,
    find_verbatim,
    normalize_for_matching,
    split_sentences,
    string_or,
)
from reflect.utils.wellness_lexicon import DISTORTION_KEYWORDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DistortionThresholds:
    min_keyword_matches: int = 2
    min_phrase_matches: int = 1
    high_severity_matches: int = 4
    high_severity_sentences: int = 2
    min_sentence_length: int = 5
    recovery_sentence_length: int = 10
    max_quotes: int = 2
    max_distortions: int = 3


@dataclass(frozen=True, slots=True)
class DistortionRule:
    type: str
    terms: Tuple[str, ...]
    kind: str  # "keywords" (needs several distinct hits) or "phrases" (one is enough)
    description: str  # formatted with {terms}
    evidence: Tuple[str, ...]
    reframing_prompt: str
    whole_word: bool = False
    severity_basis: str = "fixed"  # "matches", "sentences" or "fixed"
    requires_any: Tuple[str, ...] = field(default_factory=tuple)


# =============================================================================
# DISTORTION RULES
# =============================================================================

CATASTROPHIZING = DistortionRule(
    type="Catastrophizing",
    terms=(
        "always", "never", "worst", "terrible", "disaster", "ruined", "doomed",
        "hopeless", "everything", "nothing", "completely destroyed", "total failure",
    ),
    kind="keywords",
    description=(
        "You're imagining the worst-case scenario. Words like {terms} suggest you "
        "might be thinking in extremes about this situation."
    ),
    evidence=(
        "Most situations have multiple possible outcomes, not just the worst one",
        "You have successfully navigated difficult situations before",
        "Even challenging situations often have solutions or ways to cope",
        "Extreme outcomes are statistically less likely than moderate ones",
    ),
    reframing_prompt=(
        "What evidence do I have that this worst-case scenario will actually happen? "
        "What are some more realistic outcomes?"
    ),
    severity_basis="matches",
)

MIND_READING = DistortionRule(
    type="Mind Reading",
    terms=(
        "they think", "he thinks", "she thinks", "everyone thinks", "they hate",
        "they judge", "they must think", "probably thinks", "they're thinking",
    ),
    kind="phrases",
    description=(
        "You're assuming you know what others are thinking without concrete evidence. "
        "Phrases like {terms} suggest you might be mind reading."
    ),
    evidence=(
        "You cannot know for certain what others are thinking",
        "People often have their own concerns and may not be focused on judging you",
        "There could be many explanations for someone's behavior that have nothing to do with you",
        "Most people are more focused on themselves than on judging others",
    ),
    reframing_prompt=(
        "What evidence do I actually have about what this person is thinking? "
        "What other explanations could there be for their behavior?"
    ),
    severity_basis="sentences",
)

ALL_OR_NOTHING = DistortionRule(
    type="All-or-Nothing Thinking",
    terms=(
        "completely", "totally", "perfect", "failure", "useless", "worthless",
        "all", "none", "entirely", "absolutely",
    ),
    kind="keywords",
    description=(
        "You're seeing this situation in black and white terms. Words like {terms} "
        "suggest you might be missing the gray areas and partial successes."
    ),
    evidence=(
        "Most situations exist on a spectrum rather than being completely good or bad",
        "Partial success is still success and worth acknowledging",
        "Learning and growth happen gradually, with ups and downs along the way",
        'Very few things in life are truly "all" or "nothing"',
    ),
    reframing_prompt=(
        "Instead of seeing this as completely good or bad, what middle ground or "
        "partial success can I acknowledge?"
    ),
    whole_word=True,
    severity_basis="matches",
)

FORTUNE_TELLING = DistortionRule(
    type="Fortune Telling",
    terms=(
        "will never", "going to fail", "won't work", "always happen", "bound to",
        "definitely will", "for sure will",
    ),
    kind="phrases",
    description=(
        "You're predicting negative outcomes without sufficient evidence. Phrases like "
        "{terms} suggest you might be fortune telling."
    ),
    evidence=(
        "The future is uncertain and has many possible outcomes",
        "You cannot predict the future with complete accuracy",
        "Past negative experiences don't guarantee future negative outcomes",
        "You have influence over many factors that affect outcomes",
    ),
    reframing_prompt=(
        "What evidence do I have that this prediction will come true? What positive "
        "actions can I take to influence the outcome?"
    ),
)

EMOTIONAL_REASONING = DistortionRule(
    type="Emotional Reasoning",
    terms=("i feel like", "i feel that", "it feels like", "because i feel", "must be true", "feeling means"),
    kind="phrases",
    description=(
        "You might be treating a feeling as proof of a fact. Phrases like {terms} "
        "suggest that because it feels true, you're assuming it must be true."
    ),
    evidence=(
        "Feelings are valid but they don't always reflect facts",
        "Emotions can be influenced by many factors like stress, fatigue, or past experiences",
        "You can feel something strongly and still question whether it's accurate",
    ),
    reframing_prompt=(
        "Just because I feel this way doesn't mean it's true. What facts support or "
        "contradict this feeling?"
    ),
    requires_any=("failure", "stupid", "worthless"),
)

DISTORTION_RULES: Tuple[DistortionRule, ...] = (
    CATASTROPHIZING,
    MIND_READING,
    ALL_OR_NOTHING,
    FORTUNE_TELLING,
    EMOTIONAL_REASONING,
)

DEFAULT_REMOTE_TYPE = "Unhelpful Thinking Pattern"
DEFAULT_REMOTE_DESCRIPTION = "An unhelpful thinking pattern was detected in your entry."
DEFAULT_REMOTE_REFRAMING_PROMPT = "How might I view this situation more objectively?"
DEFAULT_REMOTE_EVIDENCE = (
    "Consider alternative perspectives on this situation",
    "Look for evidence that contradicts this thought",
    "Remember past experiences that challenge this pattern",
)
SEVERITIES = ("low", "medium", "high")


class DistortionDetector:
    """Stateless detector; rules and thresholds are fixed at construction."""

    def __init__(
        self,
        thresholds: DistortionThresholds = DistortionThresholds(),
        rules: Sequence[DistortionRule] = DISTORTION_RULES,
    ):
        self.thresholds = thresholds
        self.rules = tuple(rules)
        self._recovery_keywords = {
            name.lower(): keywords for name, keywords in DISTORTION_KEYWORDS.items()
        }

    # ------------------------------------------------------------------
    # Local detection
    # ------------------------------------------------------------------

    def detect_cognitive_distortions(self, text: str) -> List[CognitiveDistortion]:
        """Return at most ``max_distortions`` distortions in rule order."""
        distortions: List[CognitiveDistortion] = []
        for distortion in self._iter_distortions(text):
            distortions.append(distortion)
            if len(distortions) >= self.thresholds.max_distortions:
                break
        return distortions

    def detect_all(self, text: str) -> List[CognitiveDistortion]:
        """Every firing category without the cap; used for history statistics."""
        return list(self._iter_distortions(text))

    def _iter_distortions(self, text: str):
        if not text:
            return
        lower_text = normalize_for_matching(text)
        sentences = split_sentences(text, self.thresholds.min_sentence_length)
        for rule in self.rules:
            distortion = self._evaluate(rule, lower_text, sentences)
            if distortion is not None:
                yield distortion

    def _matches(self, rule: DistortionRule, lower_text: str, term: str) -> bool:
        if rule.whole_word:
            return contains_whole_word(lower_text, term)
        return term in lower_text

    def _evaluate(
        self,
        rule: DistortionRule,
        lower_text: str,
        sentences: List[str],
    ) -> Optional[CognitiveDistortion]:
        found = [term for term in rule.terms if self._matches(rule, lower_text, term)]

        if rule.kind == "keywords":
            required = self.thresholds.min_keyword_matches
        else:
            required = self.thresholds.min_phrase_matches
        if len(found) < required:
            return None
        if rule.requires_any and not any(word in lower_text for word in rule.requires_any):
            return None

        matching_sentences = [
            sentence for sentence in sentences
            if any(self._matches(rule, normalize_for_matching(sentence), term) for term in found)
        ]
        quotes = matching_sentences[: self.thresholds.max_quotes]
        if not quotes:
            return None

        return CognitiveDistortion(
            type=rule.type,
            description=rule.description.format(terms=", ".join(f'"{t}"' for t in found)),
            detected_text=quotes,
            user_quotes=list(quotes),
            evidence=list(rule.evidence),
            reframing_prompt=rule.reframing_prompt,
            severity=self._severity(rule, found, matching_sentences),
        )

    def _severity(self, rule: DistortionRule, found: List[str], sentences: List[str]) -> str:
        if rule.severity_basis == "matches" and len(found) >= self.thresholds.high_severity_matches:
            return "high"
        if rule.severity_basis == "sentences" and len(sentences) >= self.thresholds.high_severity_sentences:
            return "high"
        return "medium"

    # ------------------------------------------------------------------
    # Remote-model output
    # ------------------------------------------------------------------

    def parse_distortions_from_ai(
        self,
        distortions_data: Any,
        original_text: str,
    ) -> List[CognitiveDistortion]:
        """Validate remote-model distortions against the entry they describe.

        A payload that is not a list is ignored in favour of local detection.
        """
        if not isinstance(distortions_data, list):
            logger.warning("Remote distortions were not a list; using local detection")
            return self.detect_cognitive_distortions(original_text)

        parsed: List[CognitiveDistortion] = []
        for item in distortions_data:
            distortion = self._parse_one(item, original_text)
            if distortion is None:
                continue
            parsed.append(distortion)
            if len(parsed) >= self.thresholds.max_distortions:
                break
        return parsed

    def _parse_one(self, item: Any, original_text: str) -> Optional[CognitiveDistortion]:
        data = item if isinstance(item, Mapping) else {}

        distortion_type = string_or(data.get("type"), DEFAULT_REMOTE_TYPE)

        raw_quotes = data.get("user_quotes")
        user_quotes: List[str] = []
        if isinstance(raw_quotes, list):
            for quote in raw_quotes:
                verified = find_verbatim(original_text, quote) if isinstance(quote, str) else None
                if verified:
                    user_quotes.append(verified)
        dropped = len(raw_quotes) - len(user_quotes) if isinstance(raw_quotes, list) else 0
        if dropped:
            logger.info("Discarded %d unverifiable quote(s) for %s", dropped, distortion_type)
        user_quotes = user_quotes[: self.thresholds.max_quotes]

        detected_text = user_quotes or self.find_relevant_sentences(original_text, distortion_type)
        if not detected_text:
            return None

        raw_evidence = data.get("evidence_against")
        if isinstance(raw_evidence, list):
            evidence = [e for e in raw_evidence if isinstance(e, str) and e.strip()]
        else:
            evidence = list(DEFAULT_REMOTE_EVIDENCE)

        severity = data.get("severity")
        if not isinstance(severity, str) or severity.strip().lower() not in SEVERITIES:
            severity = "medium"

        return CognitiveDistortion(
            type=distortion_type,
            description=string_or(data.get("description"), DEFAULT_REMOTE_DESCRIPTION),
            detected_text=list(detected_text),
            user_quotes=user_quotes,
            evidence=evidence,
            reframing_prompt=string_or(data.get("reframing_question"), DEFAULT_REMOTE_REFRAMING_PROMPT),
            severity=severity.strip().lower(),
        )

    def find_relevant_sentences(self, text: str, distortion_type: str) -> List[str]:
        """Sentences of ``text`` containing a keyword of ``distortion_type`` (at most two)."""
        keywords = self._recovery_keywords.get((distortion_type or "").strip().lower(), [])
        if not keywords:
            return []
        relevant = [
            sentence
            for sentence in split_sentences(text, self.thresholds.recovery_sentence_length)
            if any(keyword in normalize_for_matching(sentence) for keyword in keywords)
        ]
        return relevant[: self.thresholds.max_quotes]


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

_distortion_detector: Optional[DistortionDetector] = None


def get_distortion_detector() -> DistortionDetector:
    """Get or create the distortion detector singleton."""
    global _distortion_detector
    if _distortion_detector is None:
        _distortion_detector = DistortionDetector()
    return _distortion_detector
