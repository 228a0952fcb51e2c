"""Tests for the OpenAI-backed translator."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from openai import OpenAIError

from lexicard.models import SourceStatus
from lexicard.services import llm
from lexicard.services.sources.translator import Translator


def openai_client(content: str | None) -> MagicMock:
    """A stand-in AsyncOpenAI client returning ``content``."""
    message = MagicMock()
    message.content = content
    choice = MagicMock()
    choice.message = message
    response = MagicMock()
    response.choices = [choice]
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=response)
    return client


class TestChatCompletion:
    """Tests for llm.chat_completion."""

    async def test_parses_json(self):
        """Should request strict JSON output and parse it."""
        client = openai_client(json.dumps({"translation": "cat"}))

        data = await llm.chat_completion("prompt", {"type": "object"}, "t", model="m", client=client)

        assert data == {"translation": "cat"}
        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "m"
        assert kwargs["temperature"] == 0
        assert kwargs["response_format"]["json_schema"]["strict"] is True

    async def test_empty_content_raises(self):
        """Should raise ValueError on an empty answer."""
        with pytest.raises(ValueError, match="Empty response"):
            await llm.chat_completion("p", {}, "t", client=openai_client(None))


class TestTranslator:
    """Tests for Translator."""

    async def test_translate(self, tables):
        """Should return the model's translation."""
        client = openai_client(json.dumps({"translation": "\"The cat sleeps\""}))
        translator = Translator(tables, client=client)

        result = await translator.translate("El gato duerme", "es")

        assert result.found
        assert result.text == "The cat sleeps"
        prompt = client.chat.completions.create.await_args.kwargs["messages"][0]["content"]
        assert "Spanish" in prompt and "English" in prompt

    async def test_same_language(self, tables):
        """Should return the text unchanged without a call."""
        result = await Translator(tables).translate("hello", "en", "en")
        assert result.text == "hello"

    async def test_not_configured(self, tables):
        """Should fail softly without a key."""
        result = await Translator(tables).translate("hola", "es")
        assert result.status is SourceStatus.TRANSPORT_ERROR
        assert "not configured" in result.detail

    async def test_api_error_is_failure(self, tables):
        """Should convert OpenAI errors into a failure result."""
        translator = Translator(tables, client=MagicMock())
        with patch.object(llm, "chat_completion", AsyncMock(side_effect=OpenAIError("rate"))):
            result = await translator.translate("hola", "es")
        assert result.status is SourceStatus.TRANSPORT_ERROR

    async def test_translate_word_prefers_visual_table(self, tables):
        """Should use the visually-strong table before the model."""
        client = openai_client(json.dumps({"translation": "feline"}))
        translator = Translator(tables, client=client)

        assert await translator.translate_word("Gato", "es") == "cat"
        client.chat.completions.create.assert_not_awaited()

    async def test_translate_word_uses_model(self, tables):
        """Should lowercase the model's translation."""
        translator = Translator(tables, client=openai_client(json.dumps({"translation": "Fan"})))
        assert await translator.translate_word("ventilador", "es") == "fan"

    async def test_translate_word_falls_back_to_word(self, tables):
        """Should return the word itself when translation fails."""
        assert await Translator(tables).translate_word("ventilador", "es") == "ventilador"

    def test_is_configured(self, tables):
        assert not Translator(tables).is_configured
        assert Translator(tables, api_key="sk-test").is_configured
