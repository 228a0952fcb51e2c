"""Image resolution with query broadening and a placeholder fallback."""

import logging
from urllib.parse import quote

from lexicard.models import ImageCandidate
from lexicard.services.image_query import ImageQueryBuilder
from lexicard.services.sources.pixabay import PixabayImageSource

logger = logging.getLogger(__name__)

PLACEHOLDER_URL = "https://via.placeholder.com/300x200?text={text}"
PLACEHOLDER_ID = "placeholder"


def placeholder_image(query: str) -> ImageCandidate:
    url = PLACEHOLDER_URL.format(text=quote(query))
    return ImageCandidate(id=PLACEHOLDER_ID, preview_url=url, full_url=url, is_placeholder=True)


def acceptable(candidates: list[ImageCandidate]) -> list[ImageCandidate]:
    """Keep real images that carry both URLs."""
    return [
        c for c in candidates if not c.is_placeholder and c.preview_url and c.full_url
    ]


class ImageResolver:
    """
    Find images for a query, broadening it step by step.

    1. the built query;
    2. for non-English input, a plain translation of the original query;
    3. the first token of the built query alone;
    4. a placeholder that shows the original query.
    """

    def __init__(
        self,
        image_source: PixabayImageSource,
        query_builder: ImageQueryBuilder,
        per_query: int = 5,
    ) -> None:
        self.image_source = image_source
        self.query_builder = query_builder
        self.per_query = per_query

    async def _search(self, query: str) -> list[ImageCandidate]:
        if not query.strip():
            return []
        try:
            found = await self.image_source.search(query, limit=self.per_query)
        except Exception as e:
            logger.warning(f"Image search for '{query}' failed: {e}")
            return []
        return acceptable(found)[: self.per_query]

    async def resolve(
        self, query: str, original_query: str, language_code: str
    ) -> list[ImageCandidate]:
        """Return at least one candidate; the last resort is a placeholder."""
        attempted: list[str] = []

        async def attempt(q: str) -> list[ImageCandidate]:
            if q in attempted:
                return []
            attempted.append(q)
            return await self._search(q)

        images = await attempt(query)

        if not images and language_code != "en":
            retranslated = await self.query_builder.simple_translation(original_query, language_code)
            images = await attempt(retranslated)

        if not images and query.split():
            images = await attempt(query.split()[0])

        if images:
            logger.info(f"{len(images)} images for '{original_query}' via '{attempted[-1]}'")
            return images

        logger.info(f"No images for '{original_query}', using placeholder")
        return [placeholder_image(original_query)]
