"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lexicard import __version__
from lexicard.config import settings
from lexicard.dependencies import build_services
from lexicard.logging_config import setup_logging
from lexicard.routes import anki_router, media_router, search_router

# Configure logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    logger.info("Starting LexiCard...")

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    services = build_services(settings)
    app.state.services = services
    logger.info(f"Lexical tables version {services.tables.version} loaded")

    yield

    # Shutdown
    logger.info("Shutting down LexiCard...")
    await services.close()


# Create FastAPI app
app = FastAPI(
    title="LexiCard",
    description="Vocabulary lookup and Anki card builder",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "x-anki-url"],
)

# Include routers
app.include_router(search_router)
app.include_router(media_router)
app.include_router(anki_router)


@app.get("/ping")
async def ping() -> dict[str, str]:
    return {"message": "pong"}


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
    }


def run(host: str | None = None, port: int | None = None, reload: bool = False) -> None:
    """Run the application (for use with `lexicard serve`)."""
    import uvicorn

    uvicorn.run(
        "lexicard.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


if __name__ == "__main__":
    run()
