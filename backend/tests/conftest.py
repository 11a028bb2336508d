"""
Shared fixtures for the relay test suite.

The upstream is never contacted: FakeUpstream replaces the invoker's
_post seam and records every call.
"""
import asyncio
import json
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from exchange_relay.config.settings import Settings, get_settings
from exchange_relay.services.relay import upstream
from main import create_app

ENDPOINT = "https://kea-test.openai.azure.com"
API_VERSION = "2024-06-01"
API_KEY = "test-api-key"


def make_settings(**overrides) -> Settings:
    values = {
        "aoai_endpoint": ENDPOINT + "/",
        "aoai_api_version": API_VERSION,
        "aoai_api_key": API_KEY,
        "model_map": json.dumps({"gpt-4o": "my-gpt-4o", "gpt-4.1": "my-gpt-4.1"}),
        "relay_version": "7",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeUpstream:
    """Stand-in for upstream._post."""

    def __init__(
        self,
        status_code: int = 200,
        body: Any = None,
        delay: float = 0.0,
        error: Optional[BaseException] = None,
    ):
        self.status_code = status_code
        if body is None:
            body = b""
        elif isinstance(body, str):
            body = body.encode("utf-8")
        elif not isinstance(body, bytes):
            body = json.dumps(body).encode("utf-8")
        self.body = body
        self.delay = delay
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.cancelled = False

    async def __call__(self, session, url, payload, headers):
        self.calls.append({"url": url, "payload": payload, "headers": headers})
        if self.error is not None:
            raise self.error
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        return self.status_code, self.body


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def fake_upstream(monkeypatch):
    """Factory installing a FakeUpstream in place of the real HTTP call."""

    def install(**kwargs) -> FakeUpstream:
        fake = FakeUpstream(**kwargs)
        monkeypatch.setattr(upstream, "_post", fake)
        return fake

    return install


@pytest.fixture
def make_client():
    def factory(settings: Settings) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_settings] = lambda: settings
        return TestClient(app)

    return factory


@pytest.fixture
def client(make_client, settings) -> TestClient:
    return make_client(settings)


@pytest.fixture
def chat_payload() -> Dict[str, Any]:
    return {
        "model": "my-gpt-4o",
        "max_tokens": 128,
        "messages": [{"role": "user", "content": "Hello from Kea"}],
    }
