"""OpenTelemetry tracer and span names.

Only the API package is used: spans are no-ops unless the process is run
with an SDK configured (e.g. ``opentelemetry-instrument``).

Usage::

    from gramabot.infra.telemetry import SPAN_PROVIDER_CALL, tracer

    with tracer.start_as_current_span(SPAN_PROVIDER_CALL) as span:
        ...
"""

from __future__ import annotations

from opentelemetry import trace

tracer = trace.get_tracer("gramabot")

# ---------------------------------------------------------------------------
# Span names
# ---------------------------------------------------------------------------

SPAN_ASK = "ask.answer"
SPAN_PROVIDER_CALL = "provider.call"

# ---------------------------------------------------------------------------
# Span attribute keys
# ---------------------------------------------------------------------------

ATTR_PROVIDER = "provider.name"
ATTR_PROVIDER_MODEL = "provider.model"
ATTR_PROVIDER_STATUS = "provider.status_code"
ATTR_ASK_OUTCOME = "ask.outcome"
ATTR_ASK_HISTORY_LEN = "ask.history_len"
ATTR_RESPONSE_SHAPE = "provider.response_shape"
