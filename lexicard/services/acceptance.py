"""Heuristic acceptance test for candidate example sentences."""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from lexicard.services.normalizer import is_metadata

TEMPLATE_PHRASES = re.compile(
    r"example not found|ejemplo no encontrado|no examples?|sin ejemplos?|"
    r"lorem ipsum|\{\{|\}\}|click here|haz clic|translate this|traducir esto",
    re.IGNORECASE,
)
URL_RE = re.compile(r"https?://|www\.|\.(?:com|org|net)\b", re.IGNORECASE)
HTML_ENTITY_RE = re.compile(r"&(?:[a-z]+|#\d+|#x[0-9a-f]+);", re.IGNORECASE)
TOKEN_RE = re.compile(r"[^\W\d_]+(?:'[^\W\d_]+)?", re.UNICODE)

# Leak indicator tokens needed before a sentence counts as the wrong language
LEAK_THRESHOLD = 2


def word_count(text: str) -> int:
    return len(text.split())


@dataclass(frozen=True)
class AcceptanceRules:
    """Bounds and rejection patterns a candidate sentence must pass."""

    min_words: int = 4
    max_words: int | None = 20
    require_word: bool = True
    check_patterns: bool = True
    leak_indicators: frozenset[str] = field(default_factory=frozenset)

    def with_leak_indicators(self, indicators: Iterable[str]) -> "AcceptanceRules":
        return AcceptanceRules(
            min_words=self.min_words,
            max_words=self.max_words,
            require_word=self.require_word,
            check_patterns=self.check_patterns,
            leak_indicators=frozenset(indicators),
        )

    def rejection(self, text: str | None, word: str) -> str | None:
        """Return why ``text`` is rejected, or None when it is acceptable."""
        if not text:
            return "empty"

        count = word_count(text)
        if count < self.min_words:
            return f"too short ({count} words)"
        if self.max_words is not None and count > self.max_words:
            return f"too long ({count} words)"

        if self.require_word and word.strip().lower() not in text.lower():
            return f"does not contain '{word}'"

        if self.check_patterns:
            if TEMPLATE_PHRASES.search(text):
                return "template phrase"
            if is_metadata(text):
                return "metadata"
            if URL_RE.search(text) or "@" in text:
                return "url or address"
            if HTML_ENTITY_RE.search(text):
                return "raw HTML entity"

        if self.leak_indicators:
            tokens = {t.lower() for t in TOKEN_RE.findall(text)}
            if len(tokens & self.leak_indicators) >= LEAK_THRESHOLD:
                return "other language"

        return None

    def accepts(self, text: str | None, word: str) -> bool:
        return self.rejection(text, word) is None
