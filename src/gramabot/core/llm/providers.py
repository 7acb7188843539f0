"""Registry of the LLM providers this service knows how to talk to.

The set is closed: each provider is a ``ProviderSpec`` variant keyed by its
identifier. ``resolve_provider`` combines the variant with the credential
and overrides from ``AppConfig`` into the immutable ``ProviderConfig`` used
for the lifetime of the process.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping

from gramabot.configs.config import AppConfig

HeaderBuilder = Callable[[str], Mapping[str, str]]

API_KEY_PREVIEW_LENGTH = 8
API_KEY_PREVIEW_MASK = "********"


def bearer_auth(key: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {key}"}


class ProviderName(str, Enum):
    OPENAI = "openai"
    GROQ = "groq"


@dataclass(frozen=True)
class ProviderSpec:
    """Static, build-time description of a provider."""

    name: ProviderName
    url: str
    default_model: str
    credential_field: str
    auth_header: HeaderBuilder = bearer_auth


PROVIDERS: Mapping[ProviderName, ProviderSpec] = {
    ProviderName.OPENAI: ProviderSpec(
        name=ProviderName.OPENAI,
        url="https://api.openai.com/v1/chat/completions",
        default_model="gpt-4o-mini",
        credential_field="api_key",
    ),
    ProviderName.GROQ: ProviderSpec(
        name=ProviderName.GROQ,
        url="https://api.groq.com/openai/v1/chat/completions",
        default_model="llama-3.1-8b-instant",
        credential_field="groq_api_key",
    ),
}


@dataclass(frozen=True)
class ProviderConfig:
    """The active provider with its credential, resolved once at startup."""

    identifier: str
    url: str
    model: str
    api_key: str | None = None
    auth_header: HeaderBuilder = bearer_auth

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    def headers(self) -> dict[str, str]:
        """Request headers for a call to this provider."""
        return {
            **self.auth_header(self.api_key or ""),
            "Content-Type": "application/json",
        }

    def api_key_preview(self) -> str | None:
        if not self.api_key:
            return None
        return self.api_key[:API_KEY_PREVIEW_LENGTH] + API_KEY_PREVIEW_MASK

    def __repr__(self) -> str:
        return (
            f"ProviderConfig(identifier={self.identifier!r}, url={self.url!r}, "
            f"model={self.model!r}, api_key={self.api_key_preview()!r})"
        )


def get_provider_spec(identifier: str | None) -> ProviderSpec | None:
    """Look up a provider by identifier (case-insensitive)."""
    try:
        return PROVIDERS[ProviderName((identifier or "").strip().lower())]
    except ValueError:
        return None


def resolve_provider(config: AppConfig) -> ProviderConfig | None:
    """Build the active ``ProviderConfig``; ``None`` for unknown identifiers."""
    spec = get_provider_spec(config.provider)
    if spec is None:
        return None

    secret = getattr(config, spec.credential_field)
    return ProviderConfig(
        identifier=spec.name.value,
        url=config.provider_url or spec.url,
        model=config.model or spec.default_model,
        api_key=secret.get_secret_value() if secret is not None else None,
        auth_header=spec.auth_header,
    )
