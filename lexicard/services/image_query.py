"""Search-query construction for image lookups."""

import logging
from collections.abc import Callable

import spacy
from spacy.language import Language

from lexicard.services.sources.translator import Translator
from lexicard.tables import LexicalTables

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"
TARGET_LANGUAGE = "en"

# Languages whose queries are rebuilt from translated keywords
TRANSLATED_LANGUAGES = {"es"}

MAX_KEYWORDS = 3
MIN_KEYWORD_LENGTH = 3
# Longest phrase translation appended to a keyword query
MAX_PHRASE_WORDS = 3

# Lazy-loaded blank pipelines, one per language
_pipelines: dict[str, Language] = {}


def _get_nlp(language_code: str) -> Language:
    """Get or create a blank spaCy pipeline (tokenizer and stop words only)."""
    if language_code not in _pipelines:
        logger.debug(f"Creating blank spaCy pipeline for '{language_code}'")
        _pipelines[language_code] = spacy.blank(language_code)
    return _pipelines[language_code]


class KeywordExtractor:
    """Stop-word removal and keyword picking backed by spaCy's language data."""

    def __init__(
        self,
        languages: tuple[str, ...] = ("en", "es"),
        default_language: str = DEFAULT_LANGUAGE,
        nlp_factory: Callable[[str], Language] = _get_nlp,
    ) -> None:
        self.languages = languages
        self.default_language = default_language
        self._nlp_factory = nlp_factory

    def _nlp(self, language_code: str) -> Language:
        if language_code not in self.languages:
            language_code = self.default_language
        return self._nlp_factory(language_code)

    def remove_stopwords(self, text: str, language_code: str) -> str:
        """Drop stop words and punctuation, keeping the remaining words in order."""
        if not text:
            return ""
        doc = self._nlp(language_code)(text)
        kept = [t.text for t in doc if not (t.is_stop or t.is_punct or t.is_space)]
        return " ".join(kept)

    def top_keywords(self, text: str, language_code: str, limit: int = MAX_KEYWORDS) -> list[str]:
        """Return up to ``limit`` distinct content words, first occurrence first."""
        doc = self._nlp(language_code)(text)
        keywords: list[str] = []
        for token in doc:
            if token.is_stop or token.is_punct or token.like_num or token.is_space:
                continue
            lowered = token.lower_
            if len(lowered) < MIN_KEYWORD_LENGTH or lowered in keywords:
                continue
            keywords.append(lowered)
            if len(keywords) >= limit:
                break
        return keywords


class ImageQueryBuilder:
    """Turn a word, example and meaning into an image-search query."""

    def __init__(
        self,
        translator: Translator,
        tables: LexicalTables,
        keywords: KeywordExtractor | None = None,
    ) -> None:
        self.translator = translator
        self.tables = tables
        self.keywords = keywords or KeywordExtractor()

    def search_text(self, word: str, example: str, meaning: str, language_code: str) -> str:
        """Word plus the keywords of the example (or the meaning when no example)."""
        base = meaning if self.tables.is_sentinel(example) else example
        keywords = self.keywords.remove_stopwords(base or "", language_code)
        return f"{word} {keywords}".strip()

    async def build(self, word: str, example: str, meaning: str, language_code: str) -> str:
        text = self.search_text(word, example, meaning, language_code)
        if language_code not in TRANSLATED_LANGUAGES:
            return text
        return await self.translate_query(text, language_code)

    async def translate_query(self, text: str, language_code: str) -> str:
        """Translate a non-English query keyword by keyword."""
        tokens = text.split()
        if not tokens:
            return text
        if len(tokens) == 1:
            return await self.translator.translate_word(tokens[0], language_code, TARGET_LANGUAGE)

        terms: list[str] = []
        for keyword in self.keywords.top_keywords(text, language_code):
            translated = await self.translator.translate_word(keyword, language_code, TARGET_LANGUAGE)
            if translated and translated not in terms:
                terms.append(translated)

        phrase = await self.translator.translate(text, language_code, TARGET_LANGUAGE)
        if phrase.found and phrase.text:
            phrase_text = phrase.text.lower()
            covered = set(" ".join(terms).split())
            if len(phrase_text.split()) <= MAX_PHRASE_WORDS and not set(phrase_text.split()) <= covered:
                terms.append(phrase_text)

        return " ".join(terms) if terms else text

    async def simple_translation(self, query: str, language_code: str) -> str:
        """Translate the whole query at once, without keyword extraction."""
        if language_code == TARGET_LANGUAGE:
            return query
        if len(query.split()) == 1:
            return await self.translator.translate_word(query, language_code, TARGET_LANGUAGE)
        result = await self.translator.translate(query, language_code, TARGET_LANGUAGE)
        return result.text if result.found and result.text else query
