"""dictionaryapi.dev backend for English lookups."""

import logging
import re
from typing import Any
from urllib.parse import quote

import httpx

from lexicard.models import DictionaryEntry
from lexicard.services.sources.base import DictionaryBackend, HttpSource

logger = logging.getLogger(__name__)

API_URL = "https://api.dictionaryapi.dev/api/v2/entries/{language}/{word}"
EXAMPLE_MARKER_RE = re.compile(r"example:", re.IGNORECASE)


def parse_entries(data: Any, word: str) -> DictionaryEntry | None:
    """
    Extract IPA, first definition and its example from an API response.

    Returns None when the payload does not have the expected shape.
    """
    try:
        entry = data[0]
        phonetics = entry.get("phonetics") or []
        ipa = next(
            (p["text"] for p in phonetics if isinstance(p, dict) and p.get("text")),
            entry.get("phonetic") or "",
        )

        definition = entry["meanings"][0]["definitions"][0]
        raw_meaning: str = definition["definition"]
        meaning = EXAMPLE_MARKER_RE.split(raw_meaning)[0].strip()
        example = definition.get("example")
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        logger.debug(f"Unexpected dictionaryapi.dev payload for '{word}': {e!r}")
        return None

    if not isinstance(meaning, str) or not meaning:
        return None

    return DictionaryEntry(
        word=word,
        ipa=ipa or None,
        meaning=meaning,
        example=example if isinstance(example, str) and example.strip() else None,
        source="dictionaryapi",
    )


class DictionaryApiBackend(HttpSource, DictionaryBackend):
    """Structured lexical API (https://dictionaryapi.dev)."""

    def __init__(
        self,
        language: str = "en",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.language = language

    @property
    def name(self) -> str:
        return "dictionaryapi"

    async def lookup(self, word: str) -> DictionaryEntry | None:
        url = API_URL.format(language=self.language, word=quote(word))
        async with self._client() as client:
            response = await client.get(url)

        # The API answers 404 with a "No Definitions Found" body
        if response.status_code == 404:
            logger.debug(f"dictionaryapi.dev has no entry for '{word}'")
            return None
        response.raise_for_status()

        try:
            data = response.json()
        except ValueError:
            logger.warning(f"dictionaryapi.dev returned non-JSON for '{word}'")
            return None

        entry = parse_entries(data, word)
        if entry:
            entry.url = url
        return entry
