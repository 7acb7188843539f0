"""Provider registry and chat-completion client."""

from .client import ProviderClient  # noqa: F401
from .normalize import normalize_response  # noqa: F401
from .providers import (  # noqa: F401
    ProviderConfig,
    ProviderName,
    get_provider_spec,
    resolve_provider,
)
