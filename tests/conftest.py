"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from lexicard.config import Settings
from lexicard.dependencies import Services, get_services
from lexicard.main import app
from lexicard.models import SourceResult
from lexicard.services.sources.base import SentenceSource
from lexicard.tables import LexicalTables


@pytest.fixture(scope="session")
def tables() -> LexicalTables:
    """Bundled lexical tables."""
    return LexicalTables.load()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings isolated from the environment and the real Anki install."""
    return Settings(
        _env_file=None,
        data_dir=tmp_path / "data",
        anki_media_path=tmp_path / "media",
        browser_enabled=False,
        pixabay_api_key="test-key",
    )


def mock_transport(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
    """Wrap a request handler as an httpx transport."""
    return httpx.MockTransport(handler)


class StubSentenceSource(SentenceSource):
    """Sentence source returning a canned result and counting calls."""

    def __init__(self, name: str, result: SourceResult | Exception) -> None:
        self._name = name
        self.result = result
        self.calls: list[tuple[str, str]] = []

    @property
    def name(self) -> str:
        return self._name

    async def fetch(self, word: str, language_code: str) -> SourceResult:
        self.calls.append((word, language_code))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture
def mock_services(test_settings: Settings, tables: LexicalTables, tmp_path: Path) -> Services:
    """Services with every collaborator mocked."""
    media_dir = tmp_path / "media"
    media_dir.mkdir(parents=True, exist_ok=True)

    lookup = MagicMock()
    lookup.search = AsyncMock()
    query_builder = MagicMock()
    query_builder.build = AsyncMock(side_effect=lambda word, *args: word)
    images = MagicMock()
    images.resolve = AsyncMock(return_value=[])
    anki = MagicMock()
    anki.relay = AsyncMock(return_value={"result": 6, "error": None})
    media = MagicMock()
    media.save_from_url = AsyncMock(return_value="1700000000000.jpg")
    media.save_upload = MagicMock(return_value="1700000000000_upload.png")

    return Services(
        config=test_settings,
        tables=tables,
        lookup=lookup,
        query_builder=query_builder,
        images=images,
        anki=anki,
        media=media,
        media_dir=media_dir,
    )


@pytest.fixture
def test_app(mock_services: Services) -> FastAPI:
    """The FastAPI app with mocked services."""
    app.dependency_overrides[get_services] = lambda: mock_services
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an asynchronous test client."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
def dictionary_payload() -> list[dict[str, Any]]:
    """A dictionaryapi.dev response for 'test'."""
    return [
        {
            "word": "test",
            "phonetic": "/test/",
            "phonetics": [{"text": ""}, {"text": "/tɛst/", "audio": ""}],
            "meanings": [
                {
                    "partOfSpeech": "noun",
                    "definitions": [
                        {
                            "definition": "A challenge, trial. Example: a test of strength",
                            "example": "We will test the new system tomorrow morning.",
                        }
                    ],
                }
            ],
        }
    ]
