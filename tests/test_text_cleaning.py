"""
Tests for the text helpers shared by the analyzers.

Run with: python -m pytest tests/test_text_cleaning.py -v
"""

import pytest


class TestNormalization:
    def test_lowercases_and_folds_curly_quotes(self):
        from reflect.utils.text_cleaning import normalize_for_matching

        assert normalize_for_matching("It’s FINE") == "it's fine"

    def test_none_becomes_empty(self):
        from reflect.utils.text_cleaning import normalize_for_matching

        assert normalize_for_matching(None) == ""

    def test_whitespace_collapsed(self):
        from reflect.utils.text_cleaning import normalize_whitespace

        assert normalize_whitespace("  a \n\t b  ") == "a b"


class TestSentenceSplitting:
    def test_short_fragments_dropped(self):
        from reflect.utils.text_cleaning import split_sentences

        assert split_sentences("Hi. This is long enough! Ok?") == ["This is long enough"]

    def test_minimum_length_is_exclusive(self):
        from reflect.utils.text_cleaning import split_sentences

        # "abcde" has exactly 5 characters and is not kept
        assert split_sentences("abcde. abcdef.") == ["abcdef"]


class TestWordMatching:
    def test_whole_word_count(self):
        from reflect.utils.text_cleaning import count_whole_word

        assert count_whole_word("all the alligators ate all of it", "all") == 2

    def test_whole_word_ignores_embedded_terms(self):
        from reflect.utils.text_cleaning import contains_whole_word

        assert contains_whole_word("a small meal", "all") is False


class TestVerbatimSubstring:
    def test_case_insensitive_match(self):
        from reflect.utils.text_cleaning import is_verbatim_substring

        assert is_verbatim_substring("I Always Fail", "always fail") is True

    def test_missing_quote(self):
        from reflect.utils.text_cleaning import is_verbatim_substring

        assert is_verbatim_substring("I always fail", "I never win") is False

    def test_blank_needle_is_not_a_quote(self):
        from reflect.utils.text_cleaning import is_verbatim_substring

        assert is_verbatim_substring("anything", "   ") is False
        assert is_verbatim_substring("anything", None) is False

    def test_surrounding_whitespace_ignored(self):
        from reflect.utils.text_cleaning import is_verbatim_substring

        assert is_verbatim_substring("I always fail", "  always fail ") is True

    def test_typographic_apostrophe_matches_straight_quote(self):
        from reflect.utils.text_cleaning import is_verbatim_substring

        assert is_verbatim_substring("I can’t do anything right.", "I can't do anything right") is True

    def test_find_returns_the_entry_wording(self):
        from reflect.utils.text_cleaning import find_verbatim

        assert find_verbatim("I Can’t Win.", "i can't win") == "I Can’t Win"
        assert find_verbatim("I can’t win.", "I never lose") is None



if __name__ == "__main__":
    pytest.main([__file__, "-v"])
