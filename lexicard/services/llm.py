"""Central OpenAI client used as the translation service."""

import asyncio
import json
import logging
from typing import Any, cast

from openai import AsyncOpenAI

from lexicard.config import settings

logger = logging.getLogger(__name__)

# Global semaphore to limit concurrent LLM requests
_semaphore: asyncio.Semaphore | None = None

# Global client instance
_client: AsyncOpenAI | None = None


def get_client(api_key: str | None = None) -> AsyncOpenAI:
    """Get or create the global OpenAI client."""
    global _client
    if _client is None:
        _client = AsyncOpenAI(
            api_key=api_key or settings.openai_api_key,
            timeout=settings.translation_timeout,
        )
    return _client


def get_semaphore() -> asyncio.Semaphore:
    """Get or create the global LLM semaphore (lazy init for event loop)."""
    global _semaphore
    if _semaphore is None:
        _semaphore = asyncio.Semaphore(10)
    return _semaphore


async def chat_completion(
    prompt: str,
    schema: dict[str, Any],
    schema_name: str,
    model: str | None = None,
    client: AsyncOpenAI | None = None,
) -> dict[str, Any]:
    """
    Make a chat completion request with structured JSON output.

    Args:
        prompt: The user prompt to send
        schema: JSON schema for structured output
        schema_name: Name for the schema
        model: Optional model override (defaults to settings.openai_model)
        client: Optional client override (defaults to the global client)

    Returns:
        Parsed JSON response as dict

    Raises:
        APITimeoutError: Request timed out
        APIStatusError: HTTP error from API
        APIConnectionError: Cannot connect to API
        ValueError: Empty or invalid response
    """
    client = client or get_client()
    model = model or settings.openai_model

    async with get_semaphore():
        response = await client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                },
            },
        )

    content = response.choices[0].message.content
    if not content:
        raise ValueError("Empty response from OpenAI")

    return cast(dict[str, Any], json.loads(content))
