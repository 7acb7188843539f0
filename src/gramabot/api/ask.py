"""Routes: greeting, debug info and the /ask endpoint."""

import logging

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from gramabot.configs.config import AppConfig
from gramabot.core.llm.providers import ProviderConfig

from .deps import AppConfigDep, AskServiceDep, ProviderDep
from .models import AskRequest, AskResponse, DebugResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ask"])


def _provider_name(config: AppConfig, provider: ProviderConfig | None) -> str:
    return provider.identifier if provider is not None else config.provider.lower()


@router.get("/", response_class=PlainTextResponse)
async def index(config: AppConfigDep, provider: ProviderDep) -> str:
    return f"GramaBot backend running ✅ (provider: {_provider_name(config, provider)})"


@router.get("/debug", response_model=DebugResponse)
async def debug(config: AppConfigDep, provider: ProviderDep) -> DebugResponse:
    """Report the active provider without leaking the credential."""
    return DebugResponse(
        provider=_provider_name(config, provider),
        model=provider.model if provider is not None else None,
        apiKeyLoaded=bool(provider and provider.has_credential),
        apiKeyPreview=provider.api_key_preview() if provider is not None else None,
    )


@router.post(
    "/ask",
    response_model=AskResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ask(ask_request: AskRequest, service: AskServiceDep) -> AskResponse:
    """Answer a question, falling back to the local scheme KB when needed."""
    logger.info(
        "Incoming /ask: query_len=%d lang=%s history=%d",
        len(ask_request.query),
        ask_request.lang,
        len(ask_request.history),
    )
    result = await service.answer(
        ask_request.query,
        ask_request.lang,
        [item.model_dump() if item is not None else None for item in ask_request.history],
    )
    return AskResponse(**result.to_dict())
