"""Tatoeba sentence-bank sources (JSON API and rendered search page)."""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from lexicard.models import SourceResult
from lexicard.services.sources.base import HttpSource, SentenceSource, first_sentence_with
from lexicard.services.sources.browser import BrowserPool

logger = logging.getLogger(__name__)

API_URL = "https://tatoeba.org/eng/api_v0/search"
SEARCH_PAGE_URL = "https://tatoeba.org/en/sentences/search?query={query}&from={lang}&to={lang}"

# Tatoeba uses ISO 639-3 codes
TATOEBA_LANGUAGES = {"en": "eng", "es": "spa"}

SENTENCE_SELECTORS = ("div.sentence div.text", ".sentence-and-translations .text")


def _extract_texts(data: Any) -> list[str]:
    if not isinstance(data, dict):
        return []
    results = data.get("results") or data.get("data") or []
    texts: list[str] = []
    for item in results:
        if isinstance(item, dict) and isinstance(item.get("text"), str):
            texts.append(item["text"])
    return texts


class TatoebaApiSource(HttpSource, SentenceSource):
    """Tatoeba's JSON search API."""

    @property
    def name(self) -> str:
        return "tatoeba-api"

    async def fetch(self, word: str, language_code: str) -> SourceResult:
        lang = TATOEBA_LANGUAGES.get(language_code)
        if lang is None:
            return SourceResult.miss(self.name)

        params = {"from": lang, "query": word, "sort": "relevance", "orphans": "no"}
        try:
            async with self._client() as client:
                response = await client.get(API_URL, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            return SourceResult.failure(f"{type(e).__name__}: {e}", self.name)

        sentence = first_sentence_with(_extract_texts(data), word)
        if sentence is None:
            return SourceResult.miss(self.name)
        return SourceResult.hit(sentence, self.name)


class TatoebaBrowserSource(SentenceSource):
    """Tatoeba's search page, rendered client-side, read through a headless browser."""

    def __init__(self, pool: BrowserPool, timeout: float = 20.0) -> None:
        self.pool = pool
        self.timeout = timeout

    @property
    def name(self) -> str:
        return "tatoeba-browser"

    async def fetch(self, word: str, language_code: str) -> SourceResult:
        lang = TATOEBA_LANGUAGES.get(language_code)
        if lang is None:
            return SourceResult.miss(self.name)

        url = SEARCH_PAGE_URL.format(query=quote(word), lang=lang)
        timeout_ms = int(self.timeout * 1000)
        try:
            async with self.pool.page() as page:
                await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
                sentences: list[str] = []
                for selector in SENTENCE_SELECTORS:
                    sentences = await page.eval_on_selector_all(
                        selector, "els => els.map(el => el.textContent.trim())"
                    )
                    if sentences:
                        break
        except Exception as e:
            # Playwright raises its own error hierarchy; any failure is a transport failure here
            return SourceResult.failure(f"{type(e).__name__}: {e}", self.name)

        sentence = first_sentence_with(sentences, word)
        if sentence is None:
            return SourceResult.miss(self.name)
        return SourceResult.hit(sentence, self.name)
