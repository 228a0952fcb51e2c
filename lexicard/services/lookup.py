"""Word lookup: validation, primary dictionary data and example resolution."""

import logging

from lexicard.models import WordRecord
from lexicard.services.dictionary import DictionaryService
from lexicard.services.examples import ExampleResolver
from lexicard.services.normalizer import TextNormalizer
from lexicard.services.validator import WordValidator

logger = logging.getLogger(__name__)


class InvalidWordError(ValueError):
    """The word or language failed validation."""


class WordNotFoundError(LookupError):
    """No dictionary backend had data for the word."""


class WordLookupService:
    def __init__(
        self,
        validator: WordValidator,
        dictionary: DictionaryService,
        examples: ExampleResolver,
        normalizer: TextNormalizer,
    ) -> None:
        self.validator = validator
        self.dictionary = dictionary
        self.examples = examples
        self.normalizer = normalizer

    async def search(self, word: str, language_code: str) -> WordRecord:
        """
        Assemble a WordRecord for ``word``.

        Raises:
            InvalidWordError: the word or language is rejected before any network call
            WordNotFoundError: every dictionary backend came back empty
        """
        verdict = self.validator.validate(word, language_code)
        if not verdict.ok:
            raise InvalidWordError(verdict.reason)

        word = word.strip().lower()
        entry = await self.dictionary.lookup(word, language_code)
        if entry is None:
            raise WordNotFoundError(f"No data found for '{word}'")

        meaning = self.normalizer.clean(entry.meaning, language_code) or ""
        example = await self.examples.resolve(word, language_code, primary_candidate=entry.example)

        logger.info(f"Assembled '{word}' [{language_code}] from {entry.source}")
        return WordRecord(
            word=word,
            language_code=language_code,
            pronunciation=(entry.ipa or "").strip(),
            meaning=meaning,
            example=example,
        )
