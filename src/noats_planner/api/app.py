"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from noats_planner.api.routes import router as planner_router
from noats_planner.app_logging import configure_logging
from noats_planner.config import parse_cors_origins
from noats_planner.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    if not container.settings.openai_api_key:
        logger.warning(
            "OPENAI_API_KEY is not set; every planner route will fail. "
            'Start the server with OPENAI_API_KEY="sk-..."'
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "Daily N'Oats planner ready with %s catalog products",
            len(app.state.container.catalog.products),
        )
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Daily N'Oats Planner", lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_allow_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(planner_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
