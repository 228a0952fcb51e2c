"""Dictionary service facade combining per-language backends."""

import asyncio
import logging
from collections.abc import Mapping, Sequence

from lexicard.models import DictionaryEntry
from lexicard.services.sources.base import DictionaryBackend

logger = logging.getLogger(__name__)


class DictionaryService:
    """
    Facade for primary lookups with a per-language fallback chain.

    The service tries backends in order until one returns a non-empty entry.
    Timeouts and transport errors are logged and treated as "not found".
    """

    def __init__(
        self,
        chains: Mapping[str, Sequence[DictionaryBackend]],
        timeout: float = 15.0,
    ) -> None:
        self.chains = {lang: list(backends) for lang, backends in chains.items()}
        self.timeout = timeout

    async def lookup(self, word: str, language_code: str) -> DictionaryEntry | None:
        """
        Look up a word using the language's fallback chain.

        Returns:
            DictionaryEntry if any backend found data, None otherwise
        """
        for backend in self.chains.get(language_code, []):
            try:
                entry = await asyncio.wait_for(backend.lookup(word), timeout=self.timeout)
            except asyncio.TimeoutError:
                logger.warning(f"Timeout looking up '{word}' in {backend.name}")
                continue
            except Exception as e:
                logger.warning(f"Error looking up '{word}' in {backend.name}: {e}")
                continue

            if entry and not entry.is_empty:
                logger.info(f"'{word}' [{language_code}] found in {backend.name}")
                return entry
            logger.debug(f"'{word}' not found in {backend.name}")

        return None
