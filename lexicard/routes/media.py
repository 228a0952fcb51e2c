"""Image saving route."""

import logging

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse, JSONResponse
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from lexicard.dependencies import Services, get_services
from lexicard.models import ErrorResponse, SaveImageRequest, SaveImageResponse
from lexicard.routes.search import error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["media"])


@router.post(
    "/save-image",
    response_model=SaveImageResponse,
    responses={code: {"model": ErrorResponse} for code in (400, 413, 502)},
)
async def save_image(
    request: Request,
    services: Services = Depends(get_services),
) -> JSONResponse:
    """Save an uploaded file (multipart ``file``) or a remote image (JSON ``{url}``)."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            return error_response("Missing file in form data", 400)

        max_size = services.config.max_upload_size_mb * 1024 * 1024
        content = await upload.read()
        if len(content) > max_size:
            return error_response(
                f"File too large. Maximum size is {services.config.max_upload_size_mb}MB", 413
            )
        filename = await run_in_threadpool(
            services.media.save_upload, upload.filename or "", content
        )
        return JSONResponse(content={"filename": filename})

    try:
        body = SaveImageRequest.model_validate(await request.json())
    except (ValueError, ValidationError):
        return error_response("Missing url in body", 400)

    try:
        filename = await services.media.save_from_url(body.url)
    except ValueError as e:
        return error_response(str(e), 400)
    except httpx.HTTPError as e:
        logger.error(f"Failed to download image {body.url}: {e}")
        return error_response(f"Could not download image: {e}", 502)

    return JSONResponse(content={"filename": filename})


@router.get("/media/{filename}", response_model=None)
async def get_media(
    filename: str,
    services: Services = Depends(get_services),
) -> FileResponse | JSONResponse:
    """Serve a saved image so AnkiConnect can fetch it by URL."""
    media_dir = services.media_dir.resolve()
    path = (media_dir / filename).resolve()
    if path.parent != media_dir or not path.is_file():
        return error_response(f"File not found: {filename}", 404)
    return FileResponse(path)
