"""AnkiConnect client for creating vocabulary notes."""

import logging
from typing import Any
from urllib.parse import quote, urlsplit

import httpx

from lexicard.config import settings
from lexicard.models import WordRecord

logger = logging.getLogger(__name__)

ANKI_CONNECT_VERSION = 6
TTS_URL = "https://translate.google.com/translate_tts?ie=UTF-8&q={text}&tl={lang}&client=tw-ob"


class AnkiConnectError(Exception):
    """AnkiConnect answered with an error."""


class UnsafeAnkiUrlError(ValueError):
    """The target URL is not a local AnkiConnect endpoint."""


def validate_anki_url(
    url: str | None,
    allowed_hosts: list[str] | None = None,
    allowed_port: int | None = None,
) -> str:
    """
    Guard against forwarding requests anywhere but the local AnkiConnect.

    Only http(s) URLs on an allowed host and the allowed port pass.
    Returns the URL unchanged.
    """
    if not url:
        raise UnsafeAnkiUrlError("AnkiConnect URL is required")

    hosts = allowed_hosts if allowed_hosts is not None else settings.anki_allowed_hosts
    port = allowed_port if allowed_port is not None else settings.anki_allowed_port

    try:
        parts = urlsplit(url)
        url_port = parts.port
    except ValueError as e:
        raise UnsafeAnkiUrlError(f"Invalid AnkiConnect URL: {url}") from e

    if parts.scheme not in ("http", "https"):
        raise UnsafeAnkiUrlError(f"Unsupported scheme: {parts.scheme or '(none)'}")
    if parts.hostname not in hosts:
        raise UnsafeAnkiUrlError(f"Host not allowed: {parts.hostname}")
    if url_port != port:
        raise UnsafeAnkiUrlError(f"Port not allowed: {url_port}")
    return url


def tts_url(text: str, language_code: str = "en") -> str:
    """Text-to-speech audio URL that AnkiConnect downloads into the note."""
    return TTS_URL.format(text=quote(text, safe=""), lang=language_code)


class AnkiService:
    """Create vocabulary notes via AnkiConnect."""

    def __init__(
        self,
        url: str | None = None,
        deck: str | None = None,
        note_type: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url or settings.anki_connect_url
        self.deck = deck or settings.anki_deck
        self.note_type = note_type or settings.anki_note_type
        self.timeout = timeout
        self._transport = transport

    async def _post(self, payload: dict[str, Any], url: str | None = None) -> Any:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.post(url or self.url, json=payload)
            response.raise_for_status()
            return response.json()

    async def invoke(self, action: str, **params: Any) -> Any:
        """Invoke an AnkiConnect action."""
        payload = {
            "action": action,
            "version": ANKI_CONNECT_VERSION,
            "params": params,
        }
        result = await self._post(payload)

        if result.get("error"):
            raise AnkiConnectError(f"AnkiConnect error: {result['error']}")

        return result.get("result")

    async def relay(self, payload: dict[str, Any], url: str | None = None) -> Any:
        """Forward a raw ``{action, version, params}`` payload and return the raw answer."""
        return await self._post(payload, url)

    async def is_available(self) -> bool:
        """Check if AnkiConnect is available."""
        try:
            await self.invoke("version")
            return True
        except (httpx.HTTPError, AnkiConnectError) as e:
            logger.warning(f"AnkiConnect not available: {e}")
            return False

    async def deck_names(self) -> list[str]:
        names: list[str] = await self.invoke("deckNames")
        return names

    async def model_names(self) -> list[str]:
        names: list[str] = await self.invoke("modelNames")
        return names

    async def store_media_file(
        self, filename: str, url: str | None = None, path: str | None = None
    ) -> str:
        """Have Anki copy ``url`` (or a local ``path``) into its media folder as ``filename``."""
        if not url and not path:
            raise ValueError("store_media_file needs a url or a path")
        source = {"url": url} if url else {"path": path}
        stored: str = await self.invoke("storeMediaFile", filename=filename, **source)
        logger.info(f"Stored media file '{filename}' in Anki")
        return stored

    def build_note(
        self,
        record: WordRecord,
        deck: str | None = None,
        model: str | None = None,
        image_filename: str | None = None,
    ) -> dict[str, Any]:
        word = record.word.lower()
        lang = record.language_code
        return {
            "deckName": deck or self.deck,
            "modelName": model or self.note_type,
            "fields": {
                "Word": word,
                "IPA": record.pronunciation.strip(),
                "Meaning": record.meaning.strip(),
                "Example": record.example.strip(),
                "Image": f'<img src="{image_filename}">' if image_filename else "",
            },
            "options": {
                "allowDuplicate": False,
            },
            "audio": [
                {
                    "url": tts_url(record.word, lang),
                    "filename": f"{word}_word.mp3",
                    "fields": ["Sound"],
                },
                {
                    "url": tts_url(record.meaning, lang),
                    "filename": f"{word}_meaning.mp3",
                    "fields": ["Sound_Meaning"],
                },
                {
                    "url": tts_url(record.example, lang),
                    "filename": f"{word}_example.mp3",
                    "fields": ["Sound_Example"],
                },
            ],
        }

    async def add_word_note(
        self,
        record: WordRecord,
        deck: str | None = None,
        model: str | None = None,
        image_filename: str | None = None,
    ) -> int:
        """
        Add a word to Anki as a new note.

        Returns the note ID.
        """
        note = self.build_note(record, deck, model, image_filename)
        note_id: int = await self.invoke("addNote", note=note)
        logger.info(f"Added note {note_id} for word '{record.word}'")
        return note_id
