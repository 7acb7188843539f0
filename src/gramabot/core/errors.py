"""Exceptions raised by the /ask pipeline."""

from __future__ import annotations


class GramaBotError(Exception):
    """Base class for errors that surface to the caller as JSON.

    ``error`` and ``detail`` map straight onto the response body keys.
    """

    status_code: int = 500
    outcome: str = "error"

    def __init__(self, error: str, *, detail: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.detail = detail


class EmptyQueryError(GramaBotError):
    """Raised when the query is blank after trimming."""

    status_code = 400
    outcome = "empty_query"

    def __init__(self) -> None:
        super().__init__("Empty query")


class MissingCredentialError(GramaBotError):
    """Raised when no credential is configured and the local KB has no answer."""

    outcome = "no_key_error"

    def __init__(self, provider: str) -> None:
        super().__init__(f"Missing API key for provider: {provider}")
        self.provider = provider


class ProviderFailedError(GramaBotError):
    """Raised when the provider call failed and the local KB has no answer."""

    outcome = "provider_error"

    def __init__(self, detail: str) -> None:
        super().__init__("AI request failed", detail=detail)


class ProviderRequestError(Exception):
    """Raised by the provider client on timeout, transport error or non-2xx.

    Never reaches the caller directly: the request handler converts it into
    a fallback answer or a ``ProviderFailedError``.
    """

    def __init__(self, detail: str, *, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
