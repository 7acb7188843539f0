"""Prometheus metrics for the GramaBot backend.

Business metrics that complement the HTTP metrics provided by
``prometheus-fastapi-instrumentator``. All metrics use the ``gramabot_``
prefix.
"""

import logging

from fastapi import FastAPI
from prometheus_client import Counter, Histogram
from prometheus_fastapi_instrumentator import Instrumentator

from gramabot.configs.system import MetricsConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# /ask outcomes
# ---------------------------------------------------------------------------

ASK_REQUESTS_TOTAL = Counter(
    "gramabot_ask_requests_total",
    "Total /ask requests, by terminal outcome",
    # identity | empty_query | no_key_fallback | no_key_error
    # | provider_ok | provider_fallback | provider_error | unexpected_error
    ["outcome"],
)

# ---------------------------------------------------------------------------
# Provider calls
# ---------------------------------------------------------------------------

PROVIDER_CALLS_TOTAL = Counter(
    "gramabot_provider_calls_total",
    "Total outbound provider calls, by provider and status",
    ["provider", "status"],  # "ok" | "http_error" | "timeout" | "transport_error"
)

PROVIDER_LATENCY_SECONDS = Histogram(
    "gramabot_provider_latency_seconds",
    "Latency of outbound provider calls",
    ["provider"],
    buckets=(0.25, 0.5, 1, 2, 5, 10, 15, 25, 30),
)

RESPONSE_SHAPES_TOTAL = Counter(
    "gramabot_provider_response_shapes_total",
    "Provider responses by the extractor that produced the text",
    ["shape"],  # chat_completion | completion | output_content | raw_string | stringified
)


def setup_metrics(app: FastAPI, config: MetricsConfig) -> None:
    """Attach HTTP instrumentation and the ``/metrics`` endpoint to ``app``."""
    if not config.enabled:
        logger.info("Prometheus metrics disabled")
        return

    Instrumentator(
        should_instrument_requests_inprogress=True,
        excluded_handlers=config.excluded_handlers,
    ).instrument(app).expose(app, endpoint="/metrics")

    logger.info("Prometheus metrics initialised")
