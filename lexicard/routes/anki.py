"""AnkiConnect relay route."""

import logging

import httpx
from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from lexicard.dependencies import Services, get_services
from lexicard.models import AnkiProxyRequest, ErrorResponse
from lexicard.routes.search import error_response
from lexicard.services.anki import UnsafeAnkiUrlError, validate_anki_url

logger = logging.getLogger(__name__)

router = APIRouter(tags=["anki"])


@router.post(
    "/anki-proxy",
    responses={code: {"model": ErrorResponse} for code in (400, 502)},
)
async def anki_proxy(
    body: AnkiProxyRequest,
    x_anki_url: str | None = Header(default=None),
    services: Services = Depends(get_services),
) -> JSONResponse:
    """Forward ``{action, version, params}`` to the local AnkiConnect."""
    try:
        url = validate_anki_url(
            x_anki_url,
            services.config.anki_allowed_hosts,
            services.config.anki_allowed_port,
        )
    except UnsafeAnkiUrlError as e:
        logger.warning(f"Rejected AnkiConnect URL {x_anki_url!r}: {e}")
        return error_response(str(e), 400)

    try:
        result = await services.anki.relay(body.model_dump(), url)
    except httpx.HTTPError as e:
        logger.error(f"AnkiConnect at {url} unreachable: {e}")
        return error_response(f"AnkiConnect unreachable: {e}", 502)

    return JSONResponse(content=result)
