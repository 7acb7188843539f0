"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gramabot import __version__
from gramabot.api.ask import router as ask_router
from gramabot.api.exceptions import register_exception_handlers
from gramabot.configs.config import AppConfig, get_app_config
from gramabot.core.llm.providers import resolve_provider
from gramabot.core.service.metrics import setup_metrics

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the shared outbound HTTP client for the life of the process."""
    config: AppConfig = app.state.config
    provider = app.state.provider
    logger.info("Starting GramaBot backend (provider=%s)", config.provider.lower())
    logger.info("Model configured: %s", provider.model if provider else "(none)")
    if provider is None:
        logger.warning("Unknown provider %r; answering from local KB only", config.provider)

    async with httpx.AsyncClient(
        timeout=config.chat.timeout
    ) as http_client:
        app.state.http_client = http_client
        yield

    logger.info("Shutting down GramaBot backend")


def get_app(config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Configuration is read once here; pass ``config`` to bypass the
    environment (tests).
    """
    if config is None:
        config = get_app_config()

    app = FastAPI(
        title="GramaBot",
        description="Government scheme and general Q&A relay for LLM providers",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.provider = resolve_provider(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    setup_metrics(app, config.metrics)

    app.include_router(ask_router)

    return app
