"""Web entry point — FastAPI app factory and uvicorn runner."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from contentcraft.agents.completion import CompletionService
from contentcraft.agents.llm import create_chat_client
from contentcraft.agents.prompts import missing_prompts
from contentcraft.config import Settings, load_settings
from contentcraft.database.client import CosmosClient
from contentcraft.errors import ContentCraftError
from contentcraft.health import check_emulators
from contentcraft.logging import configure_logging
from contentcraft.routes import admin, campaigns, content, feedback, memory, status

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect to Cosmos DB and the chat model for the lifetime of the app."""
    settings: Settings = app.state.settings
    configure_logging(settings.app.log_level)
    logger.info("Web app starting — env=%s", settings.app.env)

    if settings.app.is_development and not await check_emulators(settings):
        raise RuntimeError("Local dependencies are not reachable")

    missing = missing_prompts()
    if missing:
        raise RuntimeError(f"Prompt files missing: {', '.join(missing)}")

    cosmos = CosmosClient(settings.cosmos)
    await cosmos.initialize()
    app.state.cosmos = cosmos
    app.state.completion = CompletionService(
        create_chat_client(settings.openai),
        timeout=settings.openai.timeout_seconds,
    )
    logger.info("Web app running")
    try:
        yield
    finally:
        logger.info("Web app shutting down")
        await cosmos.close()


async def handle_domain_error(_request: Request, exc: ContentCraftError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.warning("Request failed — code=%s detail=%s", exc.code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application. Settings are read from the environment if omitted."""
    settings = settings or load_settings()
    if not settings.app.secret_key and not settings.app.is_development:
        raise RuntimeError("APP_SECRET_KEY must be set outside development")

    app = FastAPI(title="ContentCraft", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.app.secret_key or "contentcraft-dev-secret",
        https_only=not settings.app.is_development,
    )
    app.add_exception_handler(ContentCraftError, handle_domain_error)

    for module in (campaigns, content, feedback, memory, admin):
        app.include_router(module.router, prefix="/api")
    app.include_router(status.router)
    return app


def main() -> None:
    """Entry point for the ``contentcraft`` console script."""
    settings = load_settings()
    uvicorn.run(
        create_app(settings),
        host="0.0.0.0",  # noqa: S104
        port=8000,
        log_level=settings.app.log_level.lower(),
    )


if __name__ == "__main__":
    main()
