"""The /ask request handler.

``AskService.answer`` walks one question through the pipeline::

    received ─┬─ creator question ─────────────────────────► identity sentence
              └─ validate ─┬─ blank ─────────────────────────► EmptyQueryError
                           ├─ no credential ─┬─ KB hit ──────► fallback answer
                           │                 └─ KB miss ─────► MissingCredentialError
                           └─ provider call ─┬─ ok ──────────► provider text
                                             ├─ KB hit ──────► fallback answer
                                             └─ KB miss ─────► ProviderFailedError

Nothing is shared between calls except read-only configuration.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from gramabot.configs.config import AppConfig
from gramabot.core.errors import (
    EmptyQueryError,
    GramaBotError,
    MissingCredentialError,
    ProviderFailedError,
    ProviderRequestError,
)
from gramabot.core.knowledge import lookup
from gramabot.core.llm.client import ProviderClient
from gramabot.core.llm.providers import ProviderConfig
from gramabot.infra.telemetry import (
    ATTR_ASK_HISTORY_LEN,
    ATTR_ASK_OUTCOME,
    SPAN_ASK,
    tracer,
)

from .intents import identity_answer
from .metrics import ASK_REQUESTS_TOTAL
from .prompt import build_messages, build_system_prompt, sanitize_history

logger = logging.getLogger(__name__)

DEFAULT_LANG = "en"
UNEXPECTED_OUTCOME = "unexpected_error"


@dataclass(frozen=True)
class AnswerResult:
    response: str
    fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"response": self.response}
        if self.fallback:
            body["fallback"] = True
        return body


class AskService:
    """Answers one question at a time; safe to share across requests.

    ``client`` is ``None`` when no provider is active or it has no
    credential, in which case only the local knowledge base is consulted.
    """

    def __init__(
        self,
        config: AppConfig,
        provider: ProviderConfig | None,
        client: ProviderClient | None,
    ) -> None:
        self._config = config
        self._provider = provider
        self._client = client if provider and provider.has_credential else None

    @property
    def provider_name(self) -> str:
        if self._provider is not None:
            return self._provider.identifier
        return self._config.provider.lower()

    async def answer(
        self,
        query: Any,
        lang: Any = DEFAULT_LANG,
        history: Iterable[Any] | None = None,
    ) -> AnswerResult:
        """Produce the answer for ``query``.

        Raises:
            EmptyQueryError: blank query.
            MissingCredentialError: no credential and no local answer.
            ProviderFailedError: provider call failed and no local answer.
        """
        outcome = UNEXPECTED_OUTCOME
        with tracer.start_as_current_span(SPAN_ASK) as span:
            try:
                result, outcome = await self._answer(query, lang, history, span)
                return result
            except GramaBotError as exc:
                outcome = exc.outcome
                raise
            finally:
                span.set_attribute(ATTR_ASK_OUTCOME, outcome)
                ASK_REQUESTS_TOTAL.labels(outcome=outcome).inc()

    async def _answer(
        self, query: Any, lang: Any, history: Iterable[Any] | None, span: Any
    ) -> tuple[AnswerResult, str]:
        user_query = str(query or "").strip()

        identity = identity_answer(user_query, self._config.prompt.identity_sentence)
        if identity is not None:
            return AnswerResult(identity), "identity"

        preview_len = self._config.chat.query_preview_length
        logger.info("Query preview: %s", user_query[:preview_len])

        if not user_query:
            raise EmptyQueryError()

        if self._client is None:
            logger.warning("No API key configured for provider: %s", self.provider_name)
            fallback = lookup(user_query)
            if fallback:
                return AnswerResult(fallback, fallback=True), "no_key_fallback"
            raise MissingCredentialError(self.provider_name)

        raw_history = list(history) if isinstance(history, (list, tuple)) else []
        safe_history = sanitize_history(raw_history, self._config.chat.max_history)
        logger.info(
            "History: raw=%d sanitized=%d", len(raw_history), len(safe_history)
        )
        span.set_attribute(ATTR_ASK_HISTORY_LEN, len(safe_history))

        language = str(lang or DEFAULT_LANG).lower()
        system_prompt = build_system_prompt(language, self._config.prompt)
        messages = build_messages(system_prompt, safe_history, user_query)

        try:
            text = await self._client.send(messages)
        except ProviderRequestError as exc:
            logger.error(
                "AI request failed: status=%s detail=%s", exc.status_code, exc.detail
            )
            fallback = lookup(user_query.lower())
            if fallback:
                logger.info("Answered from local knowledge base")
                return AnswerResult(fallback, fallback=True), "provider_fallback"
            raise ProviderFailedError(exc.detail) from exc

        return AnswerResult(text), "provider_ok"
