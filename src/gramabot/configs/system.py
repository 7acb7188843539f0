from pydantic import BaseModel, Field


class APIConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field(default="0.0.0.0", description="API server host")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )


class ChatConfig(BaseModel):
    """Configuration for the /ask request pipeline."""

    max_history: int = Field(
        default=12, description="Maximum number of history messages sent upstream"
    )
    temperature: float = Field(
        default=0.25, description="Sampling temperature for model responses"
    )
    max_tokens: int = Field(
        default=800, description="Maximum tokens in a single response"
    )
    timeout: float = Field(
        default=25.0,
        description="Timeout in seconds for a single provider request",
    )
    query_preview_length: int = Field(
        default=200, description="Characters of the query written to the log"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True,
        description="Emit JSON lines; set to false for coloured dev output",
    )


class MetricsConfig(BaseModel):
    """Prometheus metrics configuration."""

    enabled: bool = Field(default=True, description="Expose /metrics")
    excluded_handlers: list[str] = Field(
        default_factory=lambda: ["/metrics"],
        description="Routes left out of HTTP instrumentation",
    )


class PromptConfig(BaseModel):
    """System prompt configuration.

    ``system_prompt`` is a template; the placeholders
    ``{assistant_name}``, ``{lang}``, ``{identity_sentence}`` and
    ``{max_schemes}`` are filled per request and other braces are kept
    literally.
    """

    assistant_name: str = Field(default="GramaBot", description="Bot display name")
    identity_sentence: str = Field(
        default="I was created and designed by Sakshath Shetty.",
        description="Exact answer to creator-identity questions",
    )
    max_schemes: int = Field(
        default=4, description="Schemes listed per answer unless more are requested"
    )
    system_prompt: str | None = Field(
        default=None,
        description="Override for the built-in system prompt template",
    )
