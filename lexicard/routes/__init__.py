"""Route handlers for LexiCard."""

from lexicard.routes.anki import router as anki_router
from lexicard.routes.media import router as media_router
from lexicard.routes.search import router as search_router

__all__ = [
    "search_router",
    "media_router",
    "anki_router",
]
