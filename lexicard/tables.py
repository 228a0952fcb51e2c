"""Versioned lexical lookup tables loaded from JSON data files."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
COMMON_WORDS_FILE = "common_words.json"
VISUAL_TRANSLATIONS_FILE = "visual_translations.json"

DEFAULT_SENTINEL = "Example not found"


def _read_json(path: Path) -> dict[str, Any]:
    with path.open(encoding="utf-8") as fh:
        data: dict[str, Any] = json.load(fh)
    return data


def _freeze_sets(raw: Mapping[str, list[str]]) -> Mapping[str, frozenset[str]]:
    return MappingProxyType({lang: frozenset(w.lower() for w in words) for lang, words in raw.items()})


@dataclass(frozen=True)
class LexicalTables:
    """Heuristic word lists shared read-only by every request.

    The lists are small and incomplete; swap the JSON files
    (or point ``tables_dir`` elsewhere) to change them.
    """

    common_words: Mapping[str, frozenset[str]] = field(default_factory=dict)
    leak_indicators: Mapping[str, frozenset[str]] = field(default_factory=dict)
    sentinels: Mapping[str, str] = field(default_factory=dict)
    visual_translations: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    version: str = ""

    @classmethod
    def load(cls, directory: Path | None = None) -> "LexicalTables":
        """Load tables from ``directory`` (defaults to the bundled data)."""
        base = directory or DATA_DIR
        common = _read_json(base / COMMON_WORDS_FILE)
        visual = _read_json(base / VISUAL_TRANSLATIONS_FILE)

        tables = cls(
            common_words=_freeze_sets(common.get("common_words", {})),
            leak_indicators=_freeze_sets(common.get("leak_indicators", {})),
            sentinels=MappingProxyType(dict(common.get("sentinels", {}))),
            visual_translations=MappingProxyType(
                {
                    lang: MappingProxyType({k.lower(): v for k, v in table.items()})
                    for lang, table in visual.get("translations", {}).items()
                }
            ),
            version=f"{common.get('version', '?')}/{visual.get('version', '?')}",
        )
        logger.debug(f"Loaded lexical tables {tables.version} from {base}")
        return tables

    def sentinel(self, language_code: str) -> str:
        """Return the 'example not found' value for a language."""
        return self.sentinels.get(language_code, DEFAULT_SENTINEL)

    def is_sentinel(self, text: str | None) -> bool:
        if not text:
            return True
        lowered = text.strip().lower()
        if "not found" in lowered:
            return True
        return any(lowered == s.lower() for s in self.sentinels.values())

    def visual_translation(self, word: str, source_language: str) -> str | None:
        table = self.visual_translations.get(source_language, {})
        return table.get(word.strip().lower())
