"""Run the API server: ``python -m gramabot``."""

import uvicorn

from gramabot.configs.config import get_app_config
from gramabot.core.llm.providers import resolve_provider
from gramabot.infra.logging import setup_logging


def main() -> None:
    config = get_app_config()
    setup_logging(config.logging, resolve_provider(config))
    uvicorn.run(
        "gramabot.app:get_app",
        factory=True,
        host=config.api.host,
        port=config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
