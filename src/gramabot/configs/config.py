"""Configuration management using pydantic-settings.

Read **once** when the application is built; the resulting ``AppConfig``
lives on ``app.state`` for the lifetime of the process.

Priority order (highest first):

0. Keyword arguments passed to ``AppConfig(...)``
1. Environment variables (``GRAMABOT_`` prefix, ``__`` for nesting; the
   provider settings also accept the bare ``PROVIDER``, ``API_KEY``,
   ``GROQ_API_KEY``, ``MODEL``, ``PROVIDER_URL`` and ``PORT`` names)
2. ``.env`` dotenv file
3. Static YAML (``configs/config.yaml``)
4. Prompt YAML (``configs/prompt.yml``)
5. File secrets
6. Field defaults
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import (
    APIConfig,
    ChatConfig,
    LoggingConfig,
    MetricsConfig,
    PromptConfig,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"
PROMPT_CONFIG_FILE = CONFIG_DIR / "prompt.yml"

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"
ENV_PREFIX = "GRAMABOT_"

DEFAULT_ENCODING = "utf-8"
DEFAULT_PROVIDER = "groq"


def _env(name: str) -> AliasChoices:
    """Accept both ``GRAMABOT_<NAME>`` and the bare ``<NAME>``."""
    return AliasChoices(f"{ENV_PREFIX}{name}", name)


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    provider: str = Field(
        default=DEFAULT_PROVIDER,
        validation_alias=_env("PROVIDER"),
        description="Identifier of the active LLM provider (openai | groq)",
    )
    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=_env("API_KEY"),
        description="Credential for the openai provider",
    )
    groq_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=_env("GROQ_API_KEY"),
        description="Credential for the groq provider",
    )
    model: str | None = Field(
        default=None,
        validation_alias=_env("MODEL"),
        description="Model override; the provider default is used when unset",
    )
    provider_url: str | None = Field(
        default=None,
        validation_alias=_env("PROVIDER_URL"),
        description="Endpoint override for the active provider",
    )
    port: int = Field(
        default=3000,
        validation_alias=_env("PORT"),
        description="API server port",
    )

    api: APIConfig = Field(
        default_factory=APIConfig, description="API configuration settings"
    )
    chat: ChatConfig = Field(
        default_factory=ChatConfig, description="Request pipeline settings"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging settings"
    )
    metrics: MetricsConfig = Field(
        default_factory=MetricsConfig, description="Prometheus settings"
    )
    prompt: PromptConfig = Field(
        default_factory=PromptConfig, description="System prompt configuration"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            _PromptYamlSettingsSource(settings_cls),
            file_secret_settings,
        )


class _PromptYamlSettingsSource(PydanticBaseSettingsSource):
    """Loads the ``prompt`` section from ``configs/prompt.yml``."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        # Unused: values are produced wholesale by __call__.
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        if not PROMPT_CONFIG_FILE.exists():
            return {}

        try:
            with open(PROMPT_CONFIG_FILE, encoding=DEFAULT_ENCODING) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable %s: %s", PROMPT_CONFIG_FILE, exc)
            return {}

        if isinstance(data, dict) and data:
            return {"prompt": data}
        return {}


def get_app_config() -> AppConfig:
    """Build the application configuration from all sources."""
    return AppConfig()
