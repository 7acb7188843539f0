"""Shared fixtures: isolated config and a recording mock provider."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from gramabot.configs.config import AppConfig
from gramabot.configs.system import MetricsConfig

_PROVIDER_ENV = (
    "PROVIDER",
    "API_KEY",
    "GROQ_API_KEY",
    "MODEL",
    "PROVIDER_URL",
    "PORT",
    "GRAMABOT_PROVIDER",
    "GRAMABOT_API_KEY",
    "GRAMABOT_GROQ_API_KEY",
    "GRAMABOT_MODEL",
    "GRAMABOT_PROVIDER_URL",
    "GRAMABOT_PORT",
)

TEST_KEY = "gsk_test_1234567890"


@pytest.fixture(autouse=True)
def _clean_provider_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's real credentials out of the tests."""
    for name in _PROVIDER_ENV:
        monkeypatch.delenv(name, raising=False)


def make_config(**overrides: Any) -> AppConfig:
    overrides.setdefault("metrics", MetricsConfig(enabled=False))
    return AppConfig(**overrides)


@pytest.fixture()
def keyed_config() -> AppConfig:
    return make_config(provider="groq", groq_api_key=TEST_KEY)


@pytest.fixture()
def keyless_config() -> AppConfig:
    return make_config(provider="groq")


class RecordingProvider:
    """``httpx.MockTransport`` handler that records requests.

    ``reply`` is either an ``httpx.Response`` factory or an exception
    instance to raise.
    """

    def __init__(self, reply: Callable[[httpx.Request], httpx.Response] | Exception):
        self.reply = reply
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply(request)

    @property
    def payloads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def chat_reply(text: str) -> Callable[[httpx.Request], httpx.Response]:
    def reply(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"choices": [{"message": {"role": "assistant", "content": text}}]}
        )

    return reply


def timeout_error() -> httpx.TimeoutException:
    return httpx.ReadTimeout(
        "timed out", request=httpx.Request("POST", "https://example.invalid")
    )
