"""Outbound chat-completion client for the active provider."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from typing import Any

import httpx

from gramabot.configs.system import ChatConfig
from gramabot.core.errors import ProviderRequestError
from gramabot.core.service.metrics import (
    PROVIDER_CALLS_TOTAL,
    PROVIDER_LATENCY_SECONDS,
    RESPONSE_SHAPES_TOTAL,
)
from gramabot.core.service.prompt import ChatMessage
from gramabot.infra.telemetry import (
    ATTR_PROVIDER,
    ATTR_PROVIDER_MODEL,
    ATTR_PROVIDER_STATUS,
    ATTR_RESPONSE_SHAPE,
    SPAN_PROVIDER_CALL,
    tracer,
)

from .normalize import extract_text
from .providers import ProviderConfig

logger = logging.getLogger(__name__)


def error_detail(exc: httpx.HTTPError) -> str:
    """Best-effort human-readable reason for a failed provider call.

    Prefers ``error.message`` from the provider's JSON error body, falls
    back to the exception message (or its type for message-less timeouts).
    """
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            message = exc.response.json()["error"]["message"]
        except (ValueError, KeyError, IndexError, TypeError):
            message = None
        if isinstance(message, str) and message:
            return message
    return str(exc) or type(exc).__name__


def _read_body(response: httpx.Response) -> Any:
    """Decoded JSON body, or the raw text when the body is not JSON."""
    try:
        return response.json()
    except ValueError:
        return response.text


class ProviderClient:
    """Sends one chat-completion request per ``send`` call. No retries."""

    def __init__(
        self,
        provider: ProviderConfig,
        http_client: httpx.AsyncClient,
        config: ChatConfig | None = None,
    ) -> None:
        self._provider = provider
        self._http = http_client
        self._config = config or ChatConfig()

    @property
    def provider(self) -> ProviderConfig:
        return self._provider

    def build_payload(self, messages: Sequence[ChatMessage]) -> dict[str, Any]:
        return {
            "model": self._provider.model,
            "messages": list(messages),
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
        }

    async def send(self, messages: Sequence[ChatMessage]) -> str:
        """Post ``messages`` to the provider and return the generated text.

        Raises:
            ProviderRequestError: on timeout, transport failure or non-2xx.
        """
        payload = self.build_payload(messages)
        name = self._provider.identifier
        logger.info(
            "Sending to LLM: model=%s messages=%d temperature=%s",
            payload["model"],
            len(payload["messages"]),
            payload["temperature"],
        )

        with tracer.start_as_current_span(SPAN_PROVIDER_CALL) as span:
            span.set_attribute(ATTR_PROVIDER, name)
            span.set_attribute(ATTR_PROVIDER_MODEL, self._provider.model)
            start = time.monotonic()
            try:
                response = await self._http.post(
                    self._provider.url,
                    json=payload,
                    headers=self._provider.headers(),
                    timeout=self._config.timeout,
                )
                span.set_attribute(ATTR_PROVIDER_STATUS, response.status_code)
                response.raise_for_status()
            except httpx.TimeoutException as exc:
                PROVIDER_CALLS_TOTAL.labels(provider=name, status="timeout").inc()
                raise ProviderRequestError(error_detail(exc)) from exc
            except httpx.HTTPStatusError as exc:
                PROVIDER_CALLS_TOTAL.labels(provider=name, status="http_error").inc()
                raise ProviderRequestError(
                    error_detail(exc), status_code=exc.response.status_code
                ) from exc
            except httpx.HTTPError as exc:
                PROVIDER_CALLS_TOTAL.labels(
                    provider=name, status="transport_error"
                ).inc()
                raise ProviderRequestError(error_detail(exc)) from exc
            finally:
                PROVIDER_LATENCY_SECONDS.labels(provider=name).observe(
                    time.monotonic() - start
                )

            PROVIDER_CALLS_TOTAL.labels(provider=name, status="ok").inc()
            text, shape = extract_text(_read_body(response))
            span.set_attribute(ATTR_RESPONSE_SHAPE, shape)
            RESPONSE_SHAPES_TOTAL.labels(shape=shape).inc()
            return text
