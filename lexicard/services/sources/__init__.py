"""External data source adapters."""

from lexicard.services.sources.base import DictionaryBackend, SentenceSource
from lexicard.services.sources.browser import BrowserPool
from lexicard.services.sources.dictionary_api import DictionaryApiBackend
from lexicard.services.sources.pixabay import ImageSearchNotConfigured, PixabayImageSource
from lexicard.services.sources.static_html import (
    LINGUEE,
    REVERSO,
    SPANISHDICT,
    WORDREFERENCE,
    SiteConfig,
    StaticHtmlSentenceSource,
)
from lexicard.services.sources.tatoeba import TatoebaApiSource, TatoebaBrowserSource
from lexicard.services.sources.translator import Translator
from lexicard.services.sources.wiktionary import WiktionaryBackend

__all__ = [
    "DictionaryBackend",
    "SentenceSource",
    "BrowserPool",
    "DictionaryApiBackend",
    "WiktionaryBackend",
    "TatoebaApiSource",
    "TatoebaBrowserSource",
    "StaticHtmlSentenceSource",
    "SiteConfig",
    "LINGUEE",
    "SPANISHDICT",
    "REVERSO",
    "WORDREFERENCE",
    "Translator",
    "PixabayImageSource",
    "ImageSearchNotConfigured",
]
