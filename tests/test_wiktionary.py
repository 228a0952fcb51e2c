"""Tests for the Wiktionary scraper backend."""

import httpx
import pytest

from conftest import mock_transport
from lexicard.services.sources.wiktionary import EDITIONS, WiktionaryBackend, WiktionaryParser

SPANISH_PAGE = """
<html><body><div class="mw-parser-output">
<h2><span class="mw-headline" id="Español">Español</span></h2>
<h3><span class="mw-headline">Etimología</span></h3>
<p>Del latín cattus.</p>
<table><tr><td>pronunciación (AFI)</td><td><span class="IPA">[ˈɡa.to]</span></td></tr></table>
<h3><span class="mw-headline">Sustantivo masculino</span></h3>
<dl>
  <dt>1</dt>
  <dd>Mamífero carnívoro de la familia de los félidos, doméstico.
    <ul><li>Sinónimo: minino</li></ul>
  </dd>
</dl>
<ul><li>Ejemplo: El gato duerme en el sofá todo el día.</li></ul>
<h2><span class="mw-headline">Italiano</span></h2>
<dl><dd>Otra definición que no debe usarse.</dd></dl>
</div></body></html>
"""

ENGLISH_PAGE = """
<html><body><div class="mw-parser-output">
<div class="mw-heading mw-heading2"><h2 id="English">English</h2></div>
<div class="mw-heading mw-heading3"><h3 id="Pronunciation">Pronunciation</h3></div>
<ul><li>IPA: <span class="IPA">/kæt/</span></li></ul>
<div class="mw-heading mw-heading3"><h3 id="Noun">Noun</h3></div>
<p><strong>cat</strong> (plural cats)</p>
<ol>
  <li>A small domesticated carnivorous mammal.
    <dl><dd><span class="h-usage-example">The cat chased the mouse around the house.</span></dd></dl>
    <ul><li>Synonyms: kitty</li></ul>
  </li>
</ol>
<div class="mw-heading mw-heading2"><h2 id="French">French</h2></div>
<ol><li>Unrelated French sense.</li></ol>
</div></body></html>
"""

NO_SECTION_PAGE = """
<html><body><div class="mw-parser-output">
<h2><span class="mw-headline">Portugués</span></h2>
<dl><dd>Algo.</dd></dl>
</div></body></html>
"""


class TestWiktionaryParser:
    """Tests for WiktionaryParser.parse."""

    def test_spanish_entry(self):
        """Should read IPA, definition and the trailing example."""
        entry = WiktionaryParser(EDITIONS["es"]).parse(SPANISH_PAGE, "gato")
        assert entry is not None
        assert entry.ipa == "[ˈɡa.to]"
        assert entry.meaning == "Mamífero carnívoro de la familia de los félidos, doméstico."
        assert entry.example == "El gato duerme en el sofá todo el día."
        assert entry.source == "wiktionary-es"

    def test_nested_lists_are_not_part_of_definition(self):
        """Should strip nested synonym lists from the definition."""
        entry = WiktionaryParser(EDITIONS["es"]).parse(SPANISH_PAGE, "gato")
        assert "minino" not in entry.meaning

    def test_english_entry_new_heading_markup(self):
        """Should understand mw-heading wrappers and usage examples."""
        entry = WiktionaryParser(EDITIONS["en"]).parse(ENGLISH_PAGE, "cat")
        assert entry.ipa == "/kæt/"
        assert entry.meaning == "A small domesticated carnivorous mammal."
        assert entry.example == "The cat chased the mouse around the house."
        assert entry.source == "wiktionary-en"

    def test_missing_language_section(self):
        """Should return None when the language section is absent."""
        assert WiktionaryParser(EDITIONS["es"]).parse(NO_SECTION_PAGE, "algo") is None

    def test_page_without_language_headings(self):
        """Should take the first definition anywhere on a page without section headings."""
        html = (
            '<div class="mw-parser-output"><p>intro</p>'
            "<ol><li>Animal doméstico felino.</li></ol></div>"
        )
        entry = WiktionaryParser(EDITIONS["es"]).parse(html, "gato")
        assert entry is not None
        assert entry.meaning == "Animal doméstico felino."

    def test_first_definition_fallback(self):
        """Should fall back to the first definition without a known POS heading."""
        html = """
        <div class="mw-parser-output">
        <h2><span class="mw-headline">Español</span></h2>
        <h3><span class="mw-headline">Forma flexiva</span></h3>
        <dl><dd>Forma del plural de gato.</dd></dl>
        </div>
        """
        entry = WiktionaryParser(EDITIONS["es"]).parse(html, "gatos")
        assert entry.meaning == "Forma del plural de gato."
        assert entry.example is None


class TestWiktionaryBackend:
    """Tests for WiktionaryBackend.lookup."""

    def test_title_variants(self):
        """Should try the capitalized title second."""
        assert WiktionaryBackend.title_variants("parís") == ["parís", "París"]
        assert WiktionaryBackend.title_variants("Madrid") == ["Madrid"]

    async def test_retries_capitalized_title(self):
        """Should retry with a capital letter after a 404."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.path)
            if request.url.path == "/wiki/Gato":
                return httpx.Response(200, text=SPANISH_PAGE)
            return httpx.Response(404)

        backend = WiktionaryBackend("es", transport=mock_transport(handler))
        entry = await backend.lookup("gato")

        assert seen == ["/wiki/gato", "/wiki/Gato"]
        assert entry.meaning.startswith("Mamífero")
        assert entry.url == "https://es.wiktionary.org/wiki/Gato"

    async def test_not_found(self):
        """Should return None when no title variant exists."""
        backend = WiktionaryBackend(
            "es", transport=mock_transport(lambda request: httpx.Response(404))
        )
        assert await backend.lookup("xyzzy") is None

    async def test_server_error_raises(self):
        """Should propagate server errors to the dictionary service."""
        backend = WiktionaryBackend(
            "en", transport=mock_transport(lambda request: httpx.Response(503))
        )
        with pytest.raises(httpx.HTTPStatusError):
            await backend.lookup("cat")

    def test_name(self):
        assert WiktionaryBackend("en").name == "wiktionary-en"
