"""Services for word lookup, example sentences, images and Anki."""

from lexicard.services.anki import AnkiService
from lexicard.services.dictionary import DictionaryService
from lexicard.services.examples import ExampleResolver
from lexicard.services.image_query import ImageQueryBuilder, KeywordExtractor
from lexicard.services.images import ImageResolver
from lexicard.services.lookup import WordLookupService
from lexicard.services.media import MediaStore
from lexicard.services.normalizer import TextNormalizer
from lexicard.services.validator import WordValidator

__all__ = [
    "AnkiService",
    "DictionaryService",
    "ExampleResolver",
    "ImageQueryBuilder",
    "KeywordExtractor",
    "ImageResolver",
    "WordLookupService",
    "MediaStore",
    "TextNormalizer",
    "WordValidator",
]
