"""Pydantic models for the HTTP API."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class HistoryMessage(BaseModel):
    """A caller-supplied conversation turn.

    Validation is deliberately loose: unknown roles and blank content are
    filtered out by history sanitation rather than rejected.
    """

    role: Any = Field(default=None, description="user | assistant | bot")
    content: Any = Field(default=None, description="Message content")


class AskRequest(BaseModel):
    """Request model for ``POST /ask``."""

    query: str = Field(
        default="",
        description="User question; blank queries are rejected with 400",
    )
    lang: str = Field(default="en", description="Reply language code")
    history: list[HistoryMessage | None] = Field(
        default_factory=list,
        description="Previous conversation messages, oldest first",
    )

    @field_validator("query", "lang", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        if isinstance(value, list):
            return ",".join("" if item is None else str(item) for item in value)
        return str(value)

    @field_validator("history", mode="before")
    @classmethod
    def _coerce_history(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [item if isinstance(item, dict) else None for item in value]


class AskResponse(BaseModel):
    response: str = Field(description="Answer text")
    fallback: bool | None = Field(
        default=None, description="Set when the answer came from the local KB"
    )


class ErrorResponse(BaseModel):
    error: str = Field(description="Error summary")
    detail: str | None = Field(default=None, description="Provider error detail")


class DebugResponse(BaseModel):
    ok: bool = True
    provider: str
    model: str | None = None
    apiKeyLoaded: bool
    apiKeyPreview: str | None = None
