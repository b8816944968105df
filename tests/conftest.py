"""Shared pytest fixtures for tests."""

from __future__ import annotations

import asyncio
from collections.abc import Generator
from typing import Any, Dict, List, Optional

import httpx
import pytest

import main
from coinbase_auth.integrations.oauth.providers.coinbase import CoinbaseConfig, CoinbaseStrategy


COINBASE_USER: Dict[str, Any] = {"id": "U1", "name": "Jane Doe", "email": "jane@example.com"}


class FakeCoinbaseClient:
    """In-memory stand-in for CoinbaseClient."""

    user: Optional[Dict[str, Any]] = COINBASE_USER
    error: Optional[BaseException] = None
    instances: List["FakeCoinbaseClient"] = []

    def __init__(self, access_token: str, **kwargs: Any) -> None:
        self.access_token = access_token
        self.kwargs = kwargs
        self.calls = 0
        type(self).instances.append(self)

    async def get_current_user(self) -> Dict[str, Any]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.user


def make_fake_client(user: Optional[Dict[str, Any]] = None, error: Optional[BaseException] = None) -> type:
    """Build a FakeCoinbaseClient subclass with its own canned response."""
    return type(
        "FakeCoinbaseClient",
        (FakeCoinbaseClient,),
        {"user": user if user is not None else dict(COINBASE_USER), "error": error, "instances": []},
    )


def verify_profile(access_token: str, refresh_token: Optional[str], profile: Any) -> Any:
    return profile


@pytest.fixture()
def coinbase_config() -> CoinbaseConfig:
    return CoinbaseConfig(
        client_id="test_client_id",
        client_secret="test_client_secret",
        redirect_uri="http://localhost:8080/callback",
        scopes=["user", "balance"],
    )


@pytest.fixture()
def strategy(coinbase_config: CoinbaseConfig) -> CoinbaseStrategy:
    coinbase = CoinbaseStrategy(coinbase_config, verify_profile)
    coinbase.client_class = make_fake_client()
    return coinbase


class SyncASGITestClient:
    """Synchronous wrapper around httpx.AsyncClient for ASGI apps."""

    def __init__(self, app) -> None:
        transport = httpx.ASGITransport(app=app)
        self._client = httpx.AsyncClient(transport=transport, base_url="http://testserver")

    def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        return asyncio.run(self._client.request(method, url, **kwargs))

    def get(self, url: str, **kwargs) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def __enter__(self) -> "SyncASGITestClient":
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        asyncio.run(self._client.aclose())


@pytest.fixture()
def app_strategy(strategy: CoinbaseStrategy, monkeypatch: pytest.MonkeyPatch) -> CoinbaseStrategy:
    """Install the test strategy on the application."""

    monkeypatch.setattr(main.app.state, "strategies", {"coinbase": strategy})
    return strategy


@pytest.fixture()
def client(app_strategy: CoinbaseStrategy) -> Generator[SyncASGITestClient, None, None]:
    """Synchronous test client backed by httpx's ASGI transport."""

    with SyncASGITestClient(main.app) as test_client:
        yield test_client
