"""Translation adapter backed by the OpenAI chat API."""

import logging
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from lexicard.models import SourceResult
from lexicard.services import llm
from lexicard.tables import LexicalTables

logger = logging.getLogger(__name__)

LANGUAGE_NAMES = {"en": "English", "es": "Spanish"}

TRANSLATION_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {"translation": {"type": "string"}},
    "required": ["translation"],
    "additionalProperties": False,
}


class Translator:
    """Opaque text translation plus the visually-strong word table."""

    def __init__(
        self,
        tables: LexicalTables,
        api_key: str = "",
        model: str | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self.tables = tables
        self.api_key = api_key
        self.model = model
        self._client = client

    @property
    def name(self) -> str:
        return "openai-translate"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) or self._client is not None

    def _build_prompt(self, text: str, source: str, target: str) -> str:
        source_name = LANGUAGE_NAMES.get(source, source)
        target_name = LANGUAGE_NAMES.get(target, target)
        return f"""Translate the following {source_name} text into {target_name}.

Text: "{text}"

Return the most common, literal translation. Do not explain, do not add quotes.
Respond with a JSON object: {{"translation": "<text>"}}"""

    async def translate(self, text: str, source: str, target: str = "en") -> SourceResult:
        """Translate ``text``; failures come back as ``SourceResult.failure``."""
        text = text.strip()
        if not text:
            return SourceResult.miss(self.name)
        if source == target:
            return SourceResult.hit(text, self.name)
        if not self.is_configured:
            return SourceResult.failure("translation service not configured", self.name)

        try:
            data = await llm.chat_completion(
                self._build_prompt(text, source, target),
                TRANSLATION_SCHEMA,
                "translation",
                model=self.model,
                client=self._client or llm.get_client(self.api_key),
            )
        except (OpenAIError, ValueError) as e:
            logger.warning(f"Translation of '{text}' failed: {e}")
            return SourceResult.failure(str(e), self.name)

        translation = str(data.get("translation", "")).strip().strip("\"'")
        if not translation:
            return SourceResult.miss(self.name)
        return SourceResult.hit(translation, self.name)

    async def translate_word(self, word: str, source: str, target: str = "en") -> str:
        """
        Translate a single word, preferring the visually-strong table.

        Falls back to the original word when nothing better is available.
        """
        if source == target:
            return word
        preferred = self.tables.visual_translation(word, source)
        if preferred:
            return preferred

        result = await self.translate(word, source, target)
        if result.found and result.text:
            return result.text.lower()
        return word
