"""Pixabay image-search adapter."""

import logging

import httpx

from lexicard.models import ImageCandidate
from lexicard.services.sources.base import HttpSource

logger = logging.getLogger(__name__)

API_URL = "https://pixabay.com/api/"

# Pixabay rejects per_page outside 3..200
MIN_PER_PAGE = 3
MAX_PER_PAGE = 200


class ImageSearchNotConfigured(RuntimeError):
    """Raised when no API key is available."""


class PixabayImageSource(HttpSource):
    """Safe-search photo lookup returning preview/full URL pairs."""

    def __init__(
        self,
        api_key: str = "",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(timeout=timeout, transport=transport)
        self.api_key = api_key

    @property
    def name(self) -> str:
        return "pixabay"

    async def search(self, query: str, limit: int = 5) -> list[ImageCandidate]:
        """
        Search images for ``query``.

        Raises:
            ImageSearchNotConfigured: No API key
            httpx.HTTPError: Transport failure or non-2xx response
        """
        if not self.api_key:
            raise ImageSearchNotConfigured("PIXABAY_API_KEY is not set")

        params: dict[str, str | int] = {
            "key": self.api_key,
            "q": query,
            "per_page": max(MIN_PER_PAGE, min(limit, MAX_PER_PAGE)),
            "image_type": "photo",
            "safesearch": "true",
        }
        async with self._client() as client:
            response = await client.get(API_URL, params=params)
            response.raise_for_status()
            data = response.json()

        candidates = []
        for hit in data.get("hits", []):
            preview = hit.get("previewURL")
            full = hit.get("largeImageURL") or hit.get("webformatURL")
            if not preview or not full:
                continue
            candidates.append(ImageCandidate(id=str(hit.get("id", "")), preview_url=preview, full_url=full))
            if len(candidates) >= limit:
                break

        logger.debug(f"Pixabay returned {len(candidates)} images for '{query}'")
        return candidates
