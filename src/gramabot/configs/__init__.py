"""Application configuration."""

from .config import AppConfig, get_app_config  # noqa: F401
from .system import (  # noqa: F401
    APIConfig,
    ChatConfig,
    LoggingConfig,
    MetricsConfig,
    PromptConfig,
)
