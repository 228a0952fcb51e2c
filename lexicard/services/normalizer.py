"""Cleaning of raw scraped text."""

import re
from collections.abc import Sequence

from lexicard.config import DEFAULT_CUTOFF_MARKERS

WIKILINK_RE = re.compile(r"\[\[(?:[^\[\]|]*\|)?([^\[\]]*)\]\]")  # [[target|label]] -> label

# Markup leftovers removed outright
MARKUP_PATTERNS = [
    re.compile(r"\{\{[^{}]*\}\}"),  # {{template}}
    re.compile(r"\{\{|\}\}|\[\[|\]\]"),  # unbalanced braces and brackets
    re.compile(r"<[^<>]+>"),  # stray HTML tags
    re.compile(r"\[(?:\d+|[a-z]|citation needed|edit|editar|cita requerida)\]", re.IGNORECASE),
    re.compile("\ufffd"),  # encoding replacement character
]

WHITESPACE_RE = re.compile(r"\s+")

# Letters of the Latin script (covers English loanwords and Spanish)
LATIN_LETTERS = "A-Za-zÀ-ÖØ-öø-ÿ"
ALLOWED_PUNCTUATION = r"0-9\s.,;:!?¡¿'\"“”‘’«»()\-–%&#/"
DISALLOWED_BY_LANGUAGE = {
    "en": re.compile(rf"[^{LATIN_LETTERS}{ALLOWED_PUNCTUATION}]"),
    "es": re.compile(rf"[^{LATIN_LETTERS}{ALLOWED_PUNCTUATION}]"),
}
DEFAULT_LANGUAGE = "en"

METADATA_PATTERNS = [
    re.compile(r"^\W*$"),  # nothing but punctuation
    re.compile(r"^\s*\(?\d+(?:\.\d+)*[.):]?\s*$"),  # bare numbering
    re.compile(r"^\s*[•·*\-–—]+\s*$"),  # bare bullet
    re.compile(r"\{\{|\}\}|\[\[|\]\]|^\s*\||<\s*/?\s*[a-z]+[^>]*>", re.IGNORECASE),
    re.compile(
        r"^\s*(?:synonyms?|antonyms?|etymology|pronunciation|see also|translations?|"
        r"usage notes|derived terms|related terms|anagrams|"
        r"sinónimos?|antónimos?|etimología|pronunciación|véase también|traducciones|"
        r"información adicional|forma flexiva|locuciones|refranes)\s*:?\s*$",
        re.IGNORECASE,
    ),
    re.compile(
        r"^\s*(?:template|category|file|plantilla|categoría|archivo|wikipedia)\s*:",
        re.IGNORECASE,
    ),
]

MAX_PASSES = 10


def is_metadata(text: str | None) -> bool:
    """Return True if ``text`` looks like page chrome rather than content."""
    if text is None:
        return True
    return any(pattern.search(text) for pattern in METADATA_PATTERNS)


class TextNormalizer:
    """Trim, cut and scrub raw scraped strings."""

    def __init__(
        self,
        cutoff_markers: Sequence[str] = DEFAULT_CUTOFF_MARKERS,
        min_length: int = 3,
    ) -> None:
        self.cutoff_re = re.compile("|".join(f"(?:{m})" for m in cutoff_markers), re.IGNORECASE)
        self.min_length = min_length

    def _cut(self, text: str) -> str:
        match = self.cutoff_re.search(text)
        return text[: match.start()] if match else text

    def _strip_markup(self, text: str) -> str:
        text = WIKILINK_RE.sub(r"\1", text)
        for pattern in MARKUP_PATTERNS:
            text = pattern.sub("", text)
        return text

    def _single_pass(self, text: str, language_code: str) -> str:
        text = text.strip()
        text = self._cut(text)
        text = self._strip_markup(text)
        text = WHITESPACE_RE.sub(" ", text)
        disallowed = DISALLOWED_BY_LANGUAGE.get(
            language_code, DISALLOWED_BY_LANGUAGE[DEFAULT_LANGUAGE]
        )
        text = disallowed.sub("", text)
        return WHITESPACE_RE.sub(" ", text).strip()

    def clean(self, raw: str | None, language_code: str = DEFAULT_LANGUAGE) -> str | None:
        """Return the cleaned text, or None when nothing useful is left.

        The pass is repeated until the text stops changing, so cleaning an
        already clean string returns it unchanged.
        """
        if not raw or not isinstance(raw, str):
            return None

        text = raw
        for _ in range(MAX_PASSES):
            cleaned = self._single_pass(text, language_code)
            if cleaned == text:
                break
            text = cleaned

        if len(text) < self.min_length:
            return None
        return text
