"""Tests for example-sentence acceptance rules."""

import pytest

from lexicard.services.acceptance import AcceptanceRules, word_count


class TestWordCount:
    def test_counts_whitespace_separated(self):
        assert word_count("The  cat sleeps") == 3


class TestAcceptanceRules:
    """Tests for AcceptanceRules.rejection."""

    @pytest.fixture
    def rules(self):
        return AcceptanceRules()

    def test_accepts_good_sentence(self, rules):
        """Should accept a sentence within bounds containing the word."""
        assert rules.accepts("The cat sleeps on the sofa.", "cat")

    def test_rejects_empty(self, rules):
        """Should reject empty text."""
        assert rules.rejection(None, "cat") == "empty"
        assert rules.rejection("", "cat") == "empty"

    def test_rejects_too_short(self, rules):
        """Should reject fewer than four words."""
        assert rules.rejection("The cat sleeps", "cat") == "too short (3 words)"

    def test_rejects_too_long(self, rules):
        """Should reject more than twenty words."""
        text = "cat " + " ".join(["word"] * 20)
        assert rules.rejection(text, "cat") == "too long (21 words)"

    def test_word_limits_are_inclusive(self, rules):
        """Should accept exactly four and exactly twenty words."""
        assert rules.accepts("my cat is here", "cat")
        assert rules.accepts("cat " + " ".join(["word"] * 19), "cat")

    def test_requires_word_case_insensitive(self, rules):
        """Should require the target word, ignoring case."""
        assert rules.accepts("Cats are very independent animals.", "cat")
        assert "does not contain" in rules.rejection("The dog sleeps on the sofa.", "cat")

    @pytest.mark.parametrize(
        "text",
        [
            "Example not found for cat here",
            "Click here to see the cat",
            "See the cat at https://example.com now",
            "Visit www.cats.org for a cat",
            "Write to cat@example.net about it",
            "The cat &amp; the dog play",
        ],
    )
    def test_rejects_patterns(self, rules, text):
        """Should reject template phrases, URLs and raw HTML entities."""
        assert not rules.accepts(text, "cat")

    def test_patterns_can_be_disabled(self):
        """Should skip pattern checks when disabled."""
        rules = AcceptanceRules(check_patterns=False)
        assert rules.accepts("Click here to see the cat", "cat")

    def test_rejects_other_language_leak(self):
        """Should reject sentences with several foreign indicator tokens."""
        rules = AcceptanceRules().with_leak_indicators({"el", "la", "de"})
        assert rules.rejection("the cat el gato de la casa", "cat") == "other language"

    def test_single_leak_token_is_tolerated(self):
        """Should tolerate one indicator token."""
        rules = AcceptanceRules().with_leak_indicators({"el", "la", "de"})
        assert rules.accepts("The cat named El Niño sleeps", "cat")

    def test_with_leak_indicators_keeps_bounds(self):
        """Should copy the other fields."""
        base = AcceptanceRules(min_words=2, max_words=5, check_patterns=False)
        rules = base.with_leak_indicators(["x"])
        assert (rules.min_words, rules.max_words, rules.check_patterns) == (2, 5, False)
        assert rules.leak_indicators == frozenset({"x"})
