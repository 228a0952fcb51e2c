"""Wiktionary HTML scraper backend.

Wiktionary pages are free-form wiki markup rendered to HTML, so the parser
tries several structural strategies and keeps whatever it can find:

1. locate the level-2 section of the requested language;
2. find a part-of-speech heading from a whitelist and take the first entry
   of the definition list that follows it;
3. failing that, take the first definition list entry anywhere in the
   language section.

A page with no level-2 headings at all is treated as one big section.

Both the legacy markup (``<h2><span class="mw-headline">``) and the current
``<div class="mw-heading">`` wrappers are understood.
"""

import copy
import logging
import re
from dataclasses import dataclass
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup, Tag

from lexicard.models import DictionaryEntry
from lexicard.services.sources.base import DictionaryBackend, HttpSource

logger = logging.getLogger(__name__)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
EDIT_LINK_RE = re.compile(r"\[\s*(?:edit|editar)\s*\]", re.IGNORECASE)
EXAMPLE_PREFIX_RE = re.compile(r"^\s*(?:ejemplos?|examples?|uso)\s*:\s*", re.IGNORECASE)
IPA_TOKEN_RE = re.compile(r"([\[/][^\[\]/\n]*[ˈˌːəɛɪʊʌæɑɒɔθðʃʒŋɲʎɾɣβʝχɐɨʉ][^\[\]/\n]*[\]/])")

# Nested blocks holding examples, quotations and -nyms, never part of a definition
STRIP_SELECTORS = ", ".join(
    [
        "ul",
        "ol",
        "dl",
        ".nyms",
        ".synonym",
        ".antonym",
        ".h-usage-example",
        ".e-example",
        ".citation-whole",
        ".quotations",
        "sup.reference",
        ".mw-editsection",
        "style",
        "script",
    ]
)
EXAMPLE_SELECTORS = ".e-example, .h-usage-example, dd, ul > li"


@dataclass(frozen=True)
class WikiEdition:
    """Per-language Wiktionary layout."""

    host: str
    section: str
    pos_labels: tuple[str, ...]


EDITIONS = {
    "en": WikiEdition(
        host="en.wiktionary.org",
        section="English",
        pos_labels=(
            "noun",
            "verb",
            "adjective",
            "adverb",
            "pronoun",
            "preposition",
            "conjunction",
            "interjection",
            "proper noun",
            "phrase",
        ),
    ),
    "es": WikiEdition(
        host="es.wiktionary.org",
        section="Español",
        pos_labels=(
            "sustantivo",
            "verbo",
            "adjetivo",
            "adverbio",
            "pronombre",
            "preposición",
            "conjunción",
            "interjección",
            "locución",
        ),
    ),
}


def _heading_level(tag: Tag) -> int | None:
    if tag.name in HEADING_TAGS:
        return int(tag.name[1])
    if tag.name == "div" and "mw-heading" in (tag.get("class") or []):
        inner = tag.find(HEADING_TAGS)
        if isinstance(inner, Tag):
            return int(inner.name[1])
    return None


def _heading_text(tag: Tag) -> str:
    inner = tag if tag.name in HEADING_TAGS else tag.find(HEADING_TAGS)
    if not isinstance(inner, Tag):
        return ""
    headline = inner.find(class_="mw-headline")
    text = (headline if isinstance(headline, Tag) else inner).get_text(" ", strip=True)
    return EDIT_LINK_RE.sub("", text).strip()


def _first_entry(block: Tag) -> Tag | None:
    """Return the first ``li`` of an ``ol`` or the first ``dd`` of a ``dl``."""
    if block.name == "ol":
        entry = block.find("li", recursive=False)
    elif block.name == "dl":
        entry = block.find("dd", recursive=False)
    else:
        return None
    return entry if isinstance(entry, Tag) else None


def _clean_example(text: str) -> str:
    text = EXAMPLE_PREFIX_RE.sub("", " ".join(text.split()))
    return text.strip(" «»\"“”")


class WiktionaryParser:
    """Extract IPA, first definition and example from a rendered page."""

    def __init__(self, edition: WikiEdition) -> None:
        self.edition = edition

    def parse(self, html: str, word: str) -> DictionaryEntry | None:
        soup = BeautifulSoup(html, "html.parser")
        root = soup.select_one("div.mw-parser-output") or soup.body or soup
        blocks = [child for child in root.children if isinstance(child, Tag)]

        section = self._language_section(blocks)
        if section is None:
            # Pages that only carry other languages' sections have nothing for us
            if any(_heading_level(block) == 2 for block in blocks):
                logger.debug(f"No '{self.edition.section}' section on page for '{word}'")
                return None
            logger.debug(f"No language headings on page for '{word}', using the whole page")
            section = blocks

        entry, trailing = self._definition_by_pos(section)
        if entry is None:
            entry, trailing = self._first_definition(section)

        meaning = example = None
        if entry is not None:
            example = self._example(entry, trailing, word)
            meaning = self._definition_text(entry)

        ipa = self._ipa(section)
        result = DictionaryEntry(
            word=word,
            ipa=ipa,
            meaning=meaning or None,
            example=example,
            source=f"wiktionary-{self.edition.host.split('.')[0]}",
        )
        return None if result.is_empty else result

    def _language_section(self, blocks: list[Tag]) -> list[Tag] | None:
        target = self.edition.section.casefold()
        start = None
        for i, block in enumerate(blocks):
            level = _heading_level(block)
            if start is None:
                if level == 2 and _heading_text(block).casefold() == target:
                    start = i + 1
            elif level is not None and level <= 2:
                return blocks[start:i]
        return blocks[start:] if start is not None else None

    def _definition_by_pos(self, section: list[Tag]) -> tuple[Tag | None, list[Tag]]:
        for i, block in enumerate(section):
            level = _heading_level(block)
            if level is None:
                continue
            title = _heading_text(block).casefold()
            if not title.startswith(self.edition.pos_labels):
                continue
            for j in range(i + 1, len(section)):
                following = section[j]
                following_level = _heading_level(following)
                if following_level is not None and following_level <= level:
                    break
                entry = _first_entry(following)
                if entry is not None:
                    return entry, section[j + 1 :]
        return None, []

    def _first_definition(self, section: list[Tag]) -> tuple[Tag | None, list[Tag]]:
        for i, block in enumerate(section):
            entry = _first_entry(block)
            if entry is not None:
                return entry, section[i + 1 :]
        return None, []

    def _definition_text(self, entry: Tag) -> str:
        entry = copy.copy(entry)
        for nested in entry.select(STRIP_SELECTORS):
            nested.decompose()
        return " ".join(entry.get_text(" ", strip=True).split())

    def _example(self, entry: Tag, trailing: list[Tag], word: str) -> str | None:
        candidates = [node.get_text(" ", strip=True) for node in entry.select(EXAMPLE_SELECTORS)]
        # es.wiktionary lists "Ejemplo:" bullets right after the definition list
        for block in trailing:
            if block.name != "ul":
                break
            candidates.extend(li.get_text(" ", strip=True) for li in block.find_all("li"))

        needle = word.lower()
        for candidate in candidates:
            text = _clean_example(candidate)
            if text and needle in text.lower():
                return text
        return None

    def _ipa(self, section: list[Tag]) -> str | None:
        for block in section:
            span = block if "IPA" in (block.get("class") or []) else block.find(class_="IPA")
            if isinstance(span, Tag):
                text = span.get_text(strip=True)
                if text:
                    return text
        for block in section:
            match = IPA_TOKEN_RE.search(block.get_text(" ", strip=True))
            if match:
                return match.group(1)
        return None


class WiktionaryBackend(HttpSource, DictionaryBackend):
    """Scrapes a Wiktionary edition for one language."""

    def __init__(
        self,
        language: str = "es",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.language = language
        self.parser = WiktionaryParser(EDITIONS[language])

    @property
    def name(self) -> str:
        return f"wiktionary-{self.language}"

    @staticmethod
    def title_variants(word: str) -> list[str]:
        """Titles are case-sensitive: try as given, then capitalized."""
        variants = [word]
        capitalized = word[:1].upper() + word[1:]
        if capitalized != word:
            variants.append(capitalized)
        return variants

    async def lookup(self, word: str) -> DictionaryEntry | None:
        host = self.parser.edition.host
        async with self._client() as client:
            for title in self.title_variants(word):
                url = f"https://{host}/wiki/{quote(title)}"
                response = await client.get(url)
                if response.status_code == 404:
                    logger.debug(f"{self.name}: no page '{title}'")
                    continue
                response.raise_for_status()

                entry = self.parser.parse(response.text, word)
                if entry is not None:
                    entry.url = url
                    return entry
        return None
