"""Centralized FastAPI dependency factories and type aliases.

Everything is read from ``app.state`` (populated once by ``get_app`` and
the lifespan). Each alias corresponds to a single ``get_*`` factory and can
be overridden in tests via ``app.dependency_overrides[get_xxx] = ...``.
"""

from typing import Annotated

import httpx
from fastapi import Depends, Request

from gramabot.configs.config import AppConfig
from gramabot.core.llm.client import ProviderClient
from gramabot.core.llm.providers import ProviderConfig
from gramabot.core.service.ask import AskService


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_provider(request: Request) -> ProviderConfig | None:
    return request.app.state.provider


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared connection pool created in the lifespan."""
    return request.app.state.http_client


def get_provider_client(
    provider: Annotated[ProviderConfig | None, Depends(get_provider)],
    config: Annotated[AppConfig, Depends(get_config)],
    http_client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> ProviderClient | None:
    """Per-request client; ``None`` when there is nothing to call."""
    if provider is None or not provider.has_credential:
        return None
    return ProviderClient(provider, http_client, config.chat)


def get_ask_service(
    config: Annotated[AppConfig, Depends(get_config)],
    provider: Annotated[ProviderConfig | None, Depends(get_provider)],
    client: Annotated[ProviderClient | None, Depends(get_provider_client)],
) -> AskService:
    return AskService(config, provider, client)


AppConfigDep = Annotated[AppConfig, Depends(get_config)]
ProviderDep = Annotated[ProviderConfig | None, Depends(get_provider)]
AskServiceDep = Annotated[AskService, Depends(get_ask_service)]
