"""Tests for example-sentence resolution."""

import asyncio
from unittest.mock import MagicMock

import pytest

from conftest import StubSentenceSource
from lexicard.config import Settings
from lexicard.models import SourceResult
from lexicard.services.examples import ExampleResolver, build_sentence_chains
from lexicard.services.normalizer import TextNormalizer


def make_resolver(tables, sources, language="en", **kwargs):
    return ExampleResolver(
        TextNormalizer(),
        {language: sources},
        sentinels=tables.sentinels,
        leak_indicators=tables.leak_indicators,
        **kwargs,
    )


class TestExampleResolver:
    """Tests for ExampleResolver.resolve."""

    async def test_short_circuits_on_first_acceptable(self, tables):
        """Should skip a too-short result and never call later sources."""
        first = StubSentenceSource("first", SourceResult.hit("Hello there"))
        second = StubSentenceSource("second", SourceResult.hit("She said hello to everyone."))
        third = StubSentenceSource("third", SourceResult.hit("Hello hello hello hello."))
        resolver = make_resolver(tables, [first, second, third])

        example = await resolver.resolve("hello", "en")

        assert example == "She said hello to everyone."
        assert first.calls == [("hello", "en")]
        assert second.calls == [("hello", "en")]
        assert third.calls == []

    async def test_primary_candidate_wins(self, tables):
        """Should prefer the dictionary's own example."""
        source = StubSentenceSource("chain", SourceResult.hit("A chain sentence with cat."))
        resolver = make_resolver(tables, [source])

        example = await resolver.resolve("cat", "en", "The cat sat on the mat.")

        assert example == "The cat sat on the mat."
        assert source.calls == []

    async def test_primary_candidate_is_normalized(self, tables):
        """Should clean the primary candidate before accepting it."""
        resolver = make_resolver(tables, [])
        example = await resolver.resolve("cat", "en", "  The cat sat  on the mat — El gato")
        assert example == "The cat sat on the mat"

    async def test_short_primary_falls_through(self, tables):
        """Should reject a three-word primary example."""
        source = StubSentenceSource("chain", SourceResult.hit("My cat likes warm milk."))
        resolver = make_resolver(tables, [source])

        example = await resolver.resolve("cat", "en", "Feed the cat")

        assert example == "My cat likes warm milk."

    async def test_sentinel_when_nothing_found(self, tables):
        """Should return the language sentinel when every source fails."""
        sources = [
            StubSentenceSource("miss", SourceResult.miss()),
            StubSentenceSource("fail", SourceResult.failure("boom")),
            StubSentenceSource("raise", RuntimeError("unexpected")),
        ]
        resolver = make_resolver(tables, sources, language="es")

        assert await resolver.resolve("gato", "es") == "Ejemplo no encontrado"
        assert all(len(s.calls) == 1 for s in sources)

    async def test_unknown_language_returns_default_sentinel(self, tables):
        """Should return a sentinel without any chain."""
        resolver = make_resolver(tables, [])
        assert await resolver.resolve("word", "en") == "Example not found"

    async def test_rejects_other_language_sentence(self, tables):
        """Should skip Spanish text for an English word."""
        leaky = StubSentenceSource("leaky", SourceResult.hit("El taco de la casa es muy bueno."))
        good = StubSentenceSource("good", SourceResult.hit("I ate a taco for lunch today."))
        resolver = make_resolver(tables, [leaky, good])

        assert await resolver.resolve("taco", "en") == "I ate a taco for lunch today."

    async def test_timeout_moves_on(self, tables):
        """Should skip a source that exceeds its timeout."""

        class SlowSource(StubSentenceSource):
            async def fetch(self, word, language_code):
                await asyncio.sleep(1)
                return SourceResult.hit("never used")

        slow = SlowSource("slow", SourceResult.miss())
        good = StubSentenceSource("good", SourceResult.hit("The quick fox runs away."))
        resolver = make_resolver(tables, [slow, good], source_timeout=0.01)

        assert await resolver.resolve("fox", "en") == "The quick fox runs away."

    @pytest.mark.parametrize(
        "text",
        [
            "Hello there",
            "hello " + " ".join(["word"] * 25),
            "Nothing relevant in this sentence at all.",
            "hello, hello",
        ],
    )
    async def test_returned_example_shape(self, tables, text):
        """Should only return the sentinel or a 4-20 word sentence with the word."""
        resolver = make_resolver(tables, [StubSentenceSource("s", SourceResult.hit(text))])
        example = await resolver.resolve("hello", "en", primary_candidate=text)

        if example != "Example not found":
            assert "hello" in example.lower()
            assert 4 <= len(example.split()) <= 20


class TestBuildSentenceChains:
    """Tests for the default chain wiring."""

    def test_without_browser(self):
        """Should leave out the browser source when no pool is given."""
        chains = build_sentence_chains(Settings(_env_file=None))
        assert [s.name for s in chains["en"]] == ["linguee"]
        assert [s.name for s in chains["es"]] == [
            "tatoeba-api",
            "spanishdict",
            "reverso",
            "wordreference",
        ]

    def test_with_browser(self):
        """Should add the rendered Tatoeba source after the cheap ones."""
        chains = build_sentence_chains(Settings(_env_file=None, browser_enabled=True), MagicMock())
        assert [s.name for s in chains["en"]] == ["linguee", "tatoeba-browser"]
        assert [s.name for s in chains["es"]][:2] == ["tatoeba-api", "tatoeba-browser"]

    def test_browser_disabled(self):
        """Should honour browser_enabled even with a pool."""
        chains = build_sentence_chains(Settings(_env_file=None, browser_enabled=False), MagicMock())
        assert "tatoeba-browser" not in [s.name for s in chains["en"]]
