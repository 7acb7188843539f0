"""System prompt template, history sanitation and message assembly."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any, Literal, TypedDict

from gramabot.configs.system import PromptConfig

Role = Literal["system", "user", "assistant"]


class ChatMessage(TypedDict):
    role: Role
    content: str


# Roles accepted from callers; "bot" is the frontend's name for "assistant".
HISTORY_ROLES: Mapping[str, Role] = {
    "user": "user",
    "assistant": "assistant",
    "bot": "assistant",
}

DEFAULT_MAX_HISTORY = 12

# Only bare {name} placeholders are filled; any other brace text is literal.
_PLACEHOLDER = re.compile(r"\{(\w+)\}")


SYSTEM_PROMPT = """
You are {assistant_name}, a helpful assistant for Indian government schemes and general-purpose Q&A.

Language rule:
- ALWAYS reply in the user's selected language ({lang}).

Intent routing rule (be strict):
- If the user's query is clearly about Indian government schemes (for example: "schemes", "PM-KISAN", "Ayushman", "how to apply for", "eligibility", "documents required for", "benefits of", "government pension", "subsidy", "scheme for", "apply for ... scheme"), THEN respond using the SCHEME FORMAT described below.
- If the user's query is NOT about government schemes, answer the question NORMALLY (with no forced scheme formatting).

SCHEME FORMAT (APPLY ONLY TO SCHEME QUERIES):
• For each scheme use a numbered list entry with the scheme name bolded (like 1,2,3..).
• Under each scheme include separate bullet lines for:
  - Eligibility
  - Benefits
  - Documents Required
  - How to Apply
  - Official Website
• Use separate blank lines between schemes. Keep more gaps between each scheme.
Limit to {max_schemes} schemes unless the user explicitly requests "more".
Keep scheme answers concise and user-friendly.

IDENTITY RULE (VERY STRICT):
- Only when the user explicitly asks about {assistant_name}'s creator using one of these exact phrases (or very close variants):
  "who created you", "who made you", "who built you", "who designed you", "who developed you",
  respond exactly: "{identity_sentence}"
- Do NOT apply this identity rule to other questions (for example: "who invented X", "who discovered Y", "who created the telephone").

SAFETY & BREVITY:
- Never include private keys, system internals, or user PII in responses.
- If the user requests disallowed content (illicit instructions, illegal activities, or unsafe actions), refuse politely and offer a safe alternative.

Behavior summary:
- Detect intent: if scheme-related → use SCHEME FORMAT. Otherwise → answer normally in the user's language.
"""  # noqa: E501


def build_system_prompt(lang: str, config: PromptConfig | None = None) -> str:
    """Render the system instruction for a reply in ``lang``."""
    if config is None:
        config = PromptConfig()
    template = config.system_prompt or SYSTEM_PROMPT
    values = {
        "assistant_name": config.assistant_name,
        "lang": lang,
        "identity_sentence": config.identity_sentence,
        "max_schemes": config.max_schemes,
    }
    return _PLACEHOLDER.sub(
        lambda match: str(values.get(match.group(1), match.group(0))), template
    )


def _field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def sanitize_history(
    raw: Iterable[Any] | None, max_history: int = DEFAULT_MAX_HISTORY
) -> list[ChatMessage]:
    """Keep the last ``max_history`` usable user/assistant turns, in order.

    Entries with an unknown role or blank content are dropped before the
    cap is applied.
    """
    if raw is None or isinstance(raw, (str, bytes, Mapping)):
        return []

    sanitized: list[ChatMessage] = []
    for entry in raw:
        if not entry:
            continue
        raw_role = _field(entry, "role")
        role = HISTORY_ROLES.get(raw_role) if isinstance(raw_role, str) else None
        if role is None:
            continue
        content = _field(entry, "content")
        text = str(content).strip() if content else ""
        if text:
            sanitized.append({"role": role, "content": text})

    if max_history <= 0:
        return []
    return sanitized[-max_history:]


def build_messages(
    system_prompt: str, history: list[ChatMessage], query: str
) -> list[ChatMessage]:
    """System instruction first, then history, then the new user message."""
    return [
        {"role": "system", "content": system_prompt},
        *history,
        {"role": "user", "content": query},
    ]
