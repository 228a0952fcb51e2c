"""Service wiring shared by the HTTP app and the CLI."""

import logging
from dataclasses import dataclass
from pathlib import Path

import httpx
from fastapi import Request

from lexicard.config import Settings
from lexicard.services.acceptance import AcceptanceRules
from lexicard.services.anki import AnkiService
from lexicard.services.dictionary import DictionaryService
from lexicard.services.examples import ExampleResolver, build_sentence_chains
from lexicard.services.image_query import ImageQueryBuilder, KeywordExtractor
from lexicard.services.images import ImageResolver
from lexicard.services.lookup import WordLookupService
from lexicard.services.media import MediaStore, resolve_media_path
from lexicard.services.normalizer import TextNormalizer
from lexicard.services.sources import (
    BrowserPool,
    DictionaryApiBackend,
    PixabayImageSource,
    Translator,
    WiktionaryBackend,
)
from lexicard.services.validator import WordValidator
from lexicard.tables import LexicalTables

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Everything a request needs, built once per process."""

    config: Settings
    tables: LexicalTables
    lookup: WordLookupService
    query_builder: ImageQueryBuilder
    images: ImageResolver
    anki: AnkiService
    media: MediaStore
    media_dir: Path
    browser: BrowserPool | None = None

    async def close(self) -> None:
        if self.browser is not None:
            await self.browser.close()


def build_dictionary(
    config: Settings, transport: httpx.AsyncBaseTransport | None = None
) -> DictionaryService:
    return DictionaryService(
        {
            "en": [
                DictionaryApiBackend("en", timeout=config.dictionary_timeout, transport=transport),
                WiktionaryBackend("en", timeout=config.wiktionary_timeout, transport=transport),
            ],
            "es": [
                WiktionaryBackend("es", timeout=config.wiktionary_timeout, transport=transport),
            ],
        },
        timeout=max(config.dictionary_timeout, config.wiktionary_timeout) * 2,
    )


def build_services(
    config: Settings,
    tables: LexicalTables | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Services:
    """Assemble the service graph from settings."""
    tables = tables or LexicalTables.load(config.tables_dir)
    browser = BrowserPool(max_pages=config.browser_max_pages) if config.browser_enabled else None

    normalizer = TextNormalizer(
        cutoff_markers=config.cutoff_markers, min_length=config.clean_min_length
    )
    rules = AcceptanceRules(min_words=config.example_min_words, max_words=config.example_max_words)
    primary_rules = AcceptanceRules(
        min_words=config.primary_example_min_words,
        max_words=config.example_max_words,
        check_patterns=False,
    )
    examples = ExampleResolver(
        normalizer,
        build_sentence_chains(config, browser=browser, transport=transport),
        rules=rules,
        primary_rules=primary_rules,
        sentinels=tables.sentinels,
        leak_indicators=tables.leak_indicators,
        source_timeout=max(config.sentence_timeout, config.browser_timeout) + 5,
    )
    lookup = WordLookupService(
        WordValidator(tables, config.supported_languages),
        build_dictionary(config, transport),
        examples,
        normalizer,
    )

    translator = Translator(tables, api_key=config.openai_api_key, model=config.openai_model)
    query_builder = ImageQueryBuilder(
        translator, tables, KeywordExtractor(tuple(config.supported_languages))
    )
    images = ImageResolver(
        PixabayImageSource(config.pixabay_api_key, timeout=config.image_timeout, transport=transport),
        query_builder,
        per_query=config.image_results_per_query,
    )

    media_dir = resolve_media_path(config)
    return Services(
        config=config,
        tables=tables,
        lookup=lookup,
        query_builder=query_builder,
        images=images,
        anki=AnkiService(
            url=config.anki_connect_url,
            deck=config.anki_deck,
            note_type=config.anki_note_type,
        ),
        media=MediaStore(media_dir, timeout=config.image_timeout * 3),
        media_dir=media_dir,
        browser=browser,
    )


def get_services(request: Request) -> Services:
    """FastAPI dependency returning the services built at startup."""
    services: Services = request.app.state.services
    return services
