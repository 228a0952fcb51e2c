"""Base classes for external data sources."""

from abc import ABC, abstractmethod

import httpx

from lexicard.models import DictionaryEntry, SourceResult

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; LexiCard/0.1; +https://github.com/lexicard)",
    "Accept-Language": "en-US,en;q=0.8,es;q=0.6",
}


class DictionaryBackend(ABC):
    """Abstract base class for primary dictionary backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this dictionary backend."""
        ...  # pragma: no cover

    @abstractmethod
    async def lookup(self, word: str) -> DictionaryEntry | None:
        """
        Look up a word and return dictionary entry or None if not found.

        Transport failures may raise; callers treat them like absence.
        """
        ...  # pragma: no cover


class SentenceSource(ABC):
    """Abstract base class for example-sentence sources."""

    @property
    @abstractmethod
    def name(self) -> str:
        ...  # pragma: no cover

    @abstractmethod
    async def fetch(self, word: str, language_code: str) -> SourceResult:
        """
        Return a candidate sentence containing ``word``.

        Never raises: absence is ``SourceResult.miss`` and transport problems
        are ``SourceResult.failure``.
        """
        ...  # pragma: no cover


class HttpSource:
    """Mixin holding the per-call HTTP client settings."""

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.timeout = timeout
        self.transport = transport
        self.headers = {**DEFAULT_HEADERS, **(headers or {})}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=self.headers,
            transport=self.transport,
            follow_redirects=True,
        )


def contains_word(text: str, word: str) -> bool:
    return word.strip().lower() in text.lower()


def first_sentence_with(candidates: list[str], word: str, min_words: int = 4) -> str | None:
    """Pick the first candidate that mentions ``word`` and has enough words."""
    for candidate in candidates:
        text = " ".join(candidate.split())
        if text and len(text.split()) >= min_words and contains_word(text, word):
            return text
    return None
