"""Example sentences scraped from static HTML pages."""

import logging
from dataclasses import dataclass, field
from urllib.parse import quote

import httpx
from bs4 import BeautifulSoup

from lexicard.models import SourceResult
from lexicard.services.sources.base import HttpSource, SentenceSource, first_sentence_with

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiteConfig:
    """Where a site keeps its example sentences."""

    name: str
    url_template: str  # formatted with the quoted word
    selectors: tuple[str, ...]
    headers: dict[str, str] = field(default_factory=dict)


LINGUEE = SiteConfig(
    name="linguee",
    url_template="https://www.linguee.com/english-spanish/search?source=english&query={word}",
    selectors=(".example_lines .line .tag_s", ".example_lines .line", ".example .tag_s"),
)
SPANISHDICT = SiteConfig(
    name="spanishdict",
    url_template="https://www.spanishdict.com/translate/{word}?langFrom=es",
    selectors=('[data-testid="example-sentence"] span[lang="es"]', 'span[lang="es"]', "em"),
)
REVERSO = SiteConfig(
    name="reverso",
    url_template="https://context.reverso.net/traduccion/espanol-ingles/{word}",
    selectors=("#examples-content .example .src .text", ".example .src .text"),
)
WORDREFERENCE = SiteConfig(
    name="wordreference",
    url_template="https://www.wordreference.com/definicion/{word}",
    selectors=("#otherDicts span.i", ".entry span.i", "ol.entry li span.b"),
)


class StaticHtmlSentenceSource(HttpSource, SentenceSource):
    """Plain GET plus CSS selectors, one instance per site."""

    def __init__(
        self,
        site: SiteConfig,
        timeout: float = 8.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport, headers=site.headers)
        self.site = site

    @property
    def name(self) -> str:
        return self.site.name

    def find_sentence(self, html: str, word: str) -> str | None:
        """First usable sentence with ``word``, trying each selector in turn."""
        soup = BeautifulSoup(html, "html.parser")
        for selector in self.site.selectors:
            texts = [node.get_text(" ", strip=True) for node in soup.select(selector)]
            sentence = first_sentence_with([t for t in texts if t], word)
            if sentence is not None:
                return sentence
        return None

    async def fetch(self, word: str, language_code: str) -> SourceResult:
        url = self.site.url_template.format(word=quote(word))
        try:
            async with self._client() as client:
                response = await client.get(url)
                if response.status_code == 404:
                    return SourceResult.miss(self.name)
                response.raise_for_status()
        except httpx.HTTPError as e:
            return SourceResult.failure(f"{type(e).__name__}: {e}", self.name)

        sentence = self.find_sentence(response.text, word)
        if sentence is None:
            return SourceResult.miss(self.name)
        return SourceResult.hit(sentence, self.name)
