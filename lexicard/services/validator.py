"""Input validation for searched words."""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from lexicard.tables import LexicalTables

# Letters per language; apostrophe and hyphen are always allowed
ALPHABETS = {
    "en": "A-Za-z",
    "es": "A-Za-zÁÉÍÓÚÜÑáéíóúüñ",
}

# Short phrases only: up to four words separated by single spaces
MAX_PHRASE_WORDS = 4


def _word_pattern(letters: str) -> re.Pattern[str]:
    token = rf"[{letters}'-]+"
    return re.compile(rf"^{token}(?: {token}){{0,{MAX_PHRASE_WORDS - 1}}}$")


WORD_PATTERNS = {lang: _word_pattern(letters) for lang, letters in ALPHABETS.items()}


@dataclass(frozen=True)
class Verdict:
    """Validation outcome: ``ok`` or a human readable ``reason``."""

    ok: bool
    reason: str | None = None

    @classmethod
    def accept(cls) -> "Verdict":
        return cls(True)

    @classmethod
    def reject(cls, reason: str) -> "Verdict":
        return cls(False, reason)


class WordValidator:
    """Check a word against a language's alphabet before any lookup."""

    def __init__(
        self,
        tables: LexicalTables,
        supported_languages: Sequence[str] = ("en", "es"),
    ) -> None:
        self.tables = tables
        self.supported_languages = tuple(supported_languages)

    def validate(self, word: str, language_code: str) -> Verdict:
        """Validate ``word`` for ``language_code``. Pure, no I/O."""
        if not word or not word.strip():
            return Verdict.reject("Missing word parameter")

        if language_code not in self.supported_languages:
            supported = ", ".join(self.supported_languages)
            return Verdict.reject(
                f"Language '{language_code}' is not supported (supported: {supported})"
            )

        candidate = word.strip()
        pattern = WORD_PATTERNS.get(language_code)
        if pattern is None or not pattern.match(candidate):
            return Verdict.reject(
                f"The word '{candidate}' is not valid for language '{language_code}'"
            )

        # Cross-language leak check against a short list of very common words.
        # Imprecise: misses most leaks and can reject real words.
        lowered = candidate.lower()
        for other in self.supported_languages:
            if other == language_code:
                continue
            if lowered in self.tables.common_words.get(other, frozenset()):
                return Verdict.reject(
                    f"The word '{candidate}' looks like '{other}', not '{language_code}'"
                )

        return Verdict.accept()
