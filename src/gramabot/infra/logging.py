"""Structured logging bootstrap.

Every record leaving the process carries the active provider identifier
and, when a trace is active, its ``trace_id`` and ``span_id``. The active
provider credential never reaches a handler: any occurrence of it in a
formatted message is replaced by its masked preview, the same form
``GET /debug`` reports.

Output is JSON lines by default (``json_output=True``) or coloured lines
for local development.
"""

from __future__ import annotations

import logging
import sys

from opentelemetry import trace

from gramabot.configs.system import LoggingConfig
from gramabot.core.llm.providers import (
    API_KEY_PREVIEW_LENGTH,
    API_KEY_PREVIEW_MASK,
    ProviderConfig,
)

NO_PROVIDER = "-"

_DEV_FORMAT = "%(levelprefix)s %(asctime)s %(name)s [%(provider)s]  %(message)s"
_DEV_DATEFMT = "%H:%M:%S"

# Outbound provider calls are logged by the client itself.
_QUIET_LOGGERS = ("httpx", "httpcore")


def mask_credential(key: str) -> str:
    if len(key) <= API_KEY_PREVIEW_LENGTH:
        return API_KEY_PREVIEW_MASK
    return key[:API_KEY_PREVIEW_LENGTH] + API_KEY_PREVIEW_MASK


class ProviderContextFilter(logging.Filter):
    """Stamps provider and trace context on records and masks the credential."""

    def __init__(self, provider: ProviderConfig | None = None) -> None:
        super().__init__()
        self._provider_name = provider.identifier if provider else NO_PROVIDER
        self._secret = provider.api_key if provider and provider.api_key else None

    def filter(self, record: logging.LogRecord) -> bool:
        record.provider = self._provider_name  # type: ignore[attr-defined]

        ctx = trace.get_current_span().get_span_context()
        if ctx and ctx.is_valid:
            record.trace_id = format(ctx.trace_id, "032x")  # type: ignore[attr-defined]
            record.span_id = format(ctx.span_id, "016x")  # type: ignore[attr-defined]
        else:
            record.trace_id = ""  # type: ignore[attr-defined]
            record.span_id = ""  # type: ignore[attr-defined]

        if self._secret:
            message = record.getMessage()
            if self._secret in message:
                record.msg = message.replace(
                    self._secret, mask_credential(self._secret)
                )
                record.args = None
        return True


def build_formatter(config: LoggingConfig) -> logging.Formatter:
    if config.json_output:
        from pythonjsonlogger.json import JsonFormatter

        return JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(provider)s %(message)s "
            "%(trace_id)s %(span_id)s",
            rename_fields={
                "asctime": "timestamp",
                "levelname": "level",
                "name": "logger",
            },
            defaults={"provider": NO_PROVIDER, "trace_id": "", "span_id": ""},
        )

    from uvicorn.logging import DefaultFormatter

    return DefaultFormatter(fmt=_DEV_FORMAT, datefmt=_DEV_DATEFMT, use_colors=True)


def setup_logging(
    config: LoggingConfig | None = None, provider: ProviderConfig | None = None
) -> None:
    """Route the root and uvicorn loggers through one stdout handler."""
    if config is None:
        config = LoggingConfig()

    root = logging.getLogger()
    root.setLevel(config.level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(ProviderContextFilter(provider))
    handler.setFormatter(build_formatter(config))
    root.handlers = [handler]

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
