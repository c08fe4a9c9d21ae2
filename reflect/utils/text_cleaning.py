from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, List

_WHITESPACE_RE = re.compile(r"\s+")
_PUNCT_RE = re.compile(r"[“”’‘]")
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def normalize_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_punctuation(text: str) -> str:
    return _PUNCT_RE.sub("'", text)


def normalize_for_matching(text: str | None) -> str:
    """Lowercase text with typographic quotes folded to ASCII apostrophes."""
    if not text:
        return ""
    return normalize_punctuation(text).lower()


def split_sentences(text: str | None, min_length: int = 5) -> List[str]:
    """Split on runs of ``.``, ``!`` and ``?``, keeping stripped fragments longer than ``min_length``."""
    if not text:
        return []
    sentences = []
    for fragment in _SENTENCE_SPLIT_RE.split(text):
        fragment = fragment.strip()
        if len(fragment) > min_length:
            sentences.append(fragment)
    return sentences


@lru_cache(maxsize=512)
def _word_pattern(term: str) -> re.Pattern:
    return re.compile(rf"\b{re.escape(term)}\b")


def count_whole_word(text: str, term: str) -> int:
    """Count whole-word occurrences of ``term`` in already-normalized ``text``."""
    return len(_word_pattern(term).findall(text))


def contains_whole_word(text: str, term: str) -> bool:
    return _word_pattern(term).search(text) is not None


def contains_any(text: str, terms: Iterable[str]) -> bool:
    return any(term in text for term in terms)


def find_verbatim(haystack: str | None, needle: str | None) -> str | None:
    """The span of ``haystack`` that ``needle`` quotes, or None.

    Matching ignores case and typographic quotes; a blank needle never counts.
    """
    if not haystack or not needle or not needle.strip():
        return None
    folded_needle = normalize_for_matching(needle.strip())
    folded_haystack = normalize_for_matching(haystack)
    start = folded_haystack.find(folded_needle)
    if start < 0:
        return None
    # Folding is one-to-one except for rare case mappings; keep the quote's own text then.
    if len(folded_haystack) != len(haystack):
        return needle.strip()
    return haystack[start:start + len(folded_needle)]


def is_verbatim_substring(haystack: str | None, needle: str | None) -> bool:
    """Containment check used to verify quotes against the source entry."""
    return find_verbatim(haystack, needle) is not None


def string_or(value: object, default: str) -> str:
    """Stripped ``value`` when it is a non-blank string, otherwise ``default``."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default
