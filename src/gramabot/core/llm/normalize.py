"""Extract the generated text from heterogeneous provider responses.

Extractors are tried in order; each returns non-empty text or ``None`` and
never raises. When none matches, the raw body is serialized and truncated
so that a successful HTTP call always yields *some* text.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

RAW_RESPONSE_MAX_CHARS = 2000
STRINGIFIED_SHAPE = "stringified"

Extractor = Callable[[Any], str | None]


def _text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _first_choice(body: Any) -> Any:
    return body["choices"][0]


def chat_completion_content(body: Any) -> str | None:
    """``choices[0].message.content``"""
    try:
        return _text(_first_choice(body)["message"]["content"])
    except (KeyError, IndexError, TypeError):
        return None


def completion_text(body: Any) -> str | None:
    """``choices[0].text``"""
    try:
        return _text(_first_choice(body)["text"])
    except (KeyError, IndexError, TypeError):
        return None


def output_content_text(body: Any) -> str | None:
    """``output[0].content[0].text``"""
    try:
        return _text(body["output"][0]["content"][0]["text"])
    except (KeyError, IndexError, TypeError):
        return None


def raw_string(body: Any) -> str | None:
    return _text(body)


EXTRACTORS: tuple[tuple[str, Extractor], ...] = (
    ("chat_completion", chat_completion_content),
    ("completion", completion_text),
    ("output_content", output_content_text),
    ("raw_string", raw_string),
)


def stringify(body: Any, limit: int = RAW_RESPONSE_MAX_CHARS) -> str:
    """Serialize ``body`` for display, truncated to ``limit`` characters."""
    try:
        text = json.dumps(body, ensure_ascii=False)
    except (TypeError, ValueError):
        text = str(body)
    return text[:limit]


def extract_text(body: Any) -> tuple[str, str]:
    """Return ``(text, shape)`` where ``shape`` names the extractor that matched."""
    for shape, extractor in EXTRACTORS:
        text = extractor(body)
        if text is not None:
            return text, shape

    if isinstance(body, dict):
        logger.warning(
            "No text extracted from provider response; keys=%s", list(body.keys())
        )
    else:
        logger.warning(
            "No text extracted from provider response of type %s",
            type(body).__name__,
        )
    return stringify(body), STRINGIFIED_SHAPE


def normalize_response(body: Any) -> str:
    """Return the generated text from a provider response body."""
    text, _ = extract_text(body)
    return text
