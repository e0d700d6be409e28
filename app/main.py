"""FastAPI application factory: entry point for Readshelf."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.dependencies import build_http_client, build_recommendation_service
from app.api.routes.recommendations import router as recommendations_router
from app.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: startup and shutdown events."""
    logger.info("Readshelf starting up...")
    logger.info("Catalog provider: %s", settings.catalog_provider.value)
    logger.info("Favorites backend: %s", settings.favorites_backend.value)
    logger.info("Result cache TTL: %.0fs", settings.cache_ttl_result)
    client = build_http_client(settings)
    app.state.recommender = build_recommendation_service(settings, client=client)
    yield
    await client.aclose()
    logger.info("Readshelf shutting down...")


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title=settings.app_name,
        description="Personal book recommendations from favorites and OpenLibrary",
        version="1.0.0",
        lifespan=lifespan,
    )

    # ── Middleware ──────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ─────────────────────────────────────
    application.include_router(recommendations_router)

    # ── Health Check ───────────────────────────────
    @application.get("/health", tags=["System"])
    async def health() -> dict[str, str]:
        return {"status": "healthy", "service": "readshelf"}

    return application


app = create_app()
