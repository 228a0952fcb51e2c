"""Word and image search routes."""

import asyncio
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from lexicard.dependencies import Services, get_services
from lexicard.models import ErrorResponse, ImagesResponse, SearchResponse
from lexicard.services.lookup import InvalidWordError, WordNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 404, 408, 500)},
)
async def search_word(
    word: str = "",
    lang: str = "en",
    services: Services = Depends(get_services),
) -> JSONResponse:
    """Look up a word: pronunciation, meaning and an example sentence."""
    lang = lang.strip().lower()
    try:
        record = await asyncio.wait_for(
            services.lookup.search(word, lang),
            timeout=services.config.search_timeout,
        )
    except InvalidWordError as e:
        return error_response(str(e), 400)
    except WordNotFoundError as e:
        return error_response(str(e), 404)
    except asyncio.TimeoutError:
        logger.warning(f"Search for '{word}' [{lang}] timed out")
        return error_response(f"Search for '{word}' timed out", 408)
    except Exception as e:
        logger.exception(f"Search for '{word}' [{lang}] failed")
        return error_response(str(e), 500)

    return JSONResponse(content=record.to_response())


@router.get(
    "/search-image",
    response_model=ImagesResponse,
    responses={400: {"model": ErrorResponse}},
)
async def search_images(
    query: str = "",
    lang: str = "en",
    example: str = "",
    meaning: str = "",
    services: Services = Depends(get_services),
) -> JSONResponse:
    """Suggest images for a word; always returns at least a placeholder."""
    query = query.strip()
    lang = lang.strip().lower()
    if not query:
        return error_response("Missing query parameter", 400)
    if lang not in services.config.supported_languages:
        return error_response(f"Language '{lang}' is not supported for image search", 400)

    try:
        built = await services.query_builder.build(query, example, meaning, lang)
        images = await services.images.resolve(built or query, query, lang)
    except Exception as e:
        logger.exception(f"Image search for '{query}' [{lang}] failed")
        return error_response(str(e), 500)

    return JSONResponse(content={"images": [image.to_response() for image in images]})
