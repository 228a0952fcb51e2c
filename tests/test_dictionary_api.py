"""Tests for the dictionaryapi.dev backend."""

import httpx
import pytest

from conftest import mock_transport
from lexicard.services.sources.dictionary_api import DictionaryApiBackend, parse_entries


class TestParseEntries:
    """Tests for parse_entries."""

    def test_selects_first_phonetic_with_text(self, dictionary_payload):
        """Should skip phonetics with empty text."""
        entry = parse_entries(dictionary_payload, "test")
        assert entry is not None
        assert entry.ipa == "/tɛst/"

    def test_falls_back_to_top_level_phonetic(self, dictionary_payload):
        """Should use 'phonetic' when no phonetics entry has text."""
        dictionary_payload[0]["phonetics"] = [{"text": ""}]
        entry = parse_entries(dictionary_payload, "test")
        assert entry.ipa == "/test/"

    def test_meaning_stops_at_example_marker(self, dictionary_payload):
        """Should cut the definition at an inline 'Example:'."""
        entry = parse_entries(dictionary_payload, "test")
        assert entry.meaning == "A challenge, trial."
        assert entry.example == "We will test the new system tomorrow morning."
        assert entry.source == "dictionaryapi"

    def test_missing_example(self, dictionary_payload):
        """Should leave example unset when absent."""
        del dictionary_payload[0]["meanings"][0]["definitions"][0]["example"]
        assert parse_entries(dictionary_payload, "test").example is None

    @pytest.mark.parametrize(
        "payload",
        [[], {}, None, [{"meanings": []}], [{"meanings": [{"definitions": [{}]}]}], "oops"],
    )
    def test_malformed_payload(self, payload):
        """Should return None for unexpected shapes."""
        assert parse_entries(payload, "test") is None


class TestDictionaryApiBackend:
    """Tests for DictionaryApiBackend.lookup."""

    async def test_lookup_success(self, dictionary_payload):
        """Should request the entry URL and parse the body."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, json=dictionary_payload)

        backend = DictionaryApiBackend(transport=mock_transport(handler))
        entry = await backend.lookup("test")

        assert seen == ["https://api.dictionaryapi.dev/api/v2/entries/en/test"]
        assert entry.ipa == "/tɛst/"
        assert entry.url == seen[0]

    async def test_lookup_not_found(self):
        """Should return None on 404."""
        backend = DictionaryApiBackend(
            transport=mock_transport(
                lambda request: httpx.Response(404, json={"title": "No Definitions Found"})
            )
        )
        assert await backend.lookup("xyzzyplugh") is None

    async def test_lookup_server_error_raises(self):
        """Should propagate 5xx so the service can log and skip."""
        backend = DictionaryApiBackend(
            transport=mock_transport(lambda request: httpx.Response(500))
        )
        with pytest.raises(httpx.HTTPStatusError):
            await backend.lookup("test")

    async def test_lookup_non_json(self):
        """Should return None for a non-JSON body."""
        backend = DictionaryApiBackend(
            transport=mock_transport(lambda request: httpx.Response(200, text="<html>"))
        )
        assert await backend.lookup("test") is None

    def test_name(self):
        assert DictionaryApiBackend().name == "dictionaryapi"
