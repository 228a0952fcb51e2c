"""Example-sentence resolution across prioritized sources."""

import asyncio
import logging
from collections.abc import Mapping, Sequence

import httpx

from lexicard.config import Settings
from lexicard.services.acceptance import AcceptanceRules
from lexicard.services.normalizer import TextNormalizer
from lexicard.services.sources.base import SentenceSource
from lexicard.services.sources.browser import BrowserPool
from lexicard.services.sources.static_html import (
    LINGUEE,
    REVERSO,
    SPANISHDICT,
    WORDREFERENCE,
    SiteConfig,
    StaticHtmlSentenceSource,
)
from lexicard.services.sources.tatoeba import TatoebaApiSource, TatoebaBrowserSource
from lexicard.tables import DEFAULT_SENTINEL

logger = logging.getLogger(__name__)

PRIMARY_SOURCE = "primary"


class ExampleResolver:
    """
    Walk a language's sources in priority order and keep the first good sentence.

    The dictionary's own example is tried first with looser rules. Every
    candidate is normalized before the acceptance test; the first one that
    passes ends the search, so slower sources further down the chain are
    only reached when the earlier ones come up empty.
    """

    def __init__(
        self,
        normalizer: TextNormalizer,
        chains: Mapping[str, Sequence[SentenceSource]],
        rules: AcceptanceRules | None = None,
        primary_rules: AcceptanceRules | None = None,
        sentinels: Mapping[str, str] | None = None,
        leak_indicators: Mapping[str, frozenset[str]] | None = None,
        source_timeout: float = 25.0,
    ) -> None:
        self.normalizer = normalizer
        self.chains = {lang: list(sources) for lang, sources in chains.items()}
        self.rules = rules or AcceptanceRules()
        self.primary_rules = primary_rules or AcceptanceRules(
            min_words=4, max_words=self.rules.max_words, check_patterns=False
        )
        self.sentinels = dict(sentinels or {})
        self.leak_indicators = dict(leak_indicators or {})
        self.source_timeout = source_timeout

    def sentinel(self, language_code: str) -> str:
        return self.sentinels.get(language_code, DEFAULT_SENTINEL)

    def _rules_for(self, language_code: str, primary: bool) -> AcceptanceRules:
        rules = self.primary_rules if primary else self.rules
        indicators = self.leak_indicators.get(language_code)
        if indicators and not primary:
            rules = rules.with_leak_indicators(indicators)
        return rules

    def _accept(
        self, raw: str | None, word: str, language_code: str, source: str, primary: bool = False
    ) -> str | None:
        cleaned = self.normalizer.clean(raw, language_code)
        rejection = self._rules_for(language_code, primary).rejection(cleaned, word)
        if rejection:
            logger.debug(f"Rejected example from {source} for '{word}': {rejection}")
            return None
        return cleaned

    async def resolve(
        self,
        word: str,
        language_code: str,
        primary_candidate: str | None = None,
    ) -> str:
        """Return an example sentence for ``word`` or the language sentinel."""
        if primary_candidate:
            accepted = self._accept(primary_candidate, word, language_code, PRIMARY_SOURCE, True)
            if accepted:
                logger.info(f"Example for '{word}' from {PRIMARY_SOURCE}")
                return accepted

        for source in self.chains.get(language_code, []):
            try:
                result = await asyncio.wait_for(
                    source.fetch(word, language_code), timeout=self.source_timeout
                )
            except asyncio.TimeoutError:
                logger.warning(f"Timeout fetching example for '{word}' from {source.name}")
                continue
            except Exception as e:
                logger.warning(f"Error fetching example for '{word}' from {source.name}: {e}")
                continue

            if not result.found:
                if result.detail:
                    logger.warning(f"{source.name} failed for '{word}': {result.detail}")
                continue

            accepted = self._accept(result.text, word, language_code, source.name)
            if accepted:
                logger.info(f"Example for '{word}' from {source.name}")
                return accepted

        logger.info(f"No example found for '{word}' [{language_code}]")
        return self.sentinel(language_code)


def build_sentence_chains(
    config: Settings,
    browser: BrowserPool | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, list[SentenceSource]]:
    """Default source order per language, most reliable first."""

    def static(site: SiteConfig) -> StaticHtmlSentenceSource:
        return StaticHtmlSentenceSource(site, timeout=config.sentence_timeout, transport=transport)

    browser_sources: list[SentenceSource] = []
    if browser is not None and config.browser_enabled:
        browser_sources.append(TatoebaBrowserSource(browser, timeout=config.browser_timeout))

    return {
        "en": [static(LINGUEE), *browser_sources],
        "es": [
            TatoebaApiSource(timeout=config.sentence_timeout, transport=transport),
            *browser_sources,
            static(SPANISHDICT),
            static(REVERSO),
            static(WORDREFERENCE),
        ],
    }
