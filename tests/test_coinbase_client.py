"""Tests for the Coinbase API client."""

from __future__ import annotations

from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from coinbase_auth.integrations.coinbase import DEFAULT_USER_PROFILE_URL, CoinbaseAPIError, CoinbaseClient

USER = {"id": "U1", "name": "Jane Doe", "email": "jane@example.com"}


class TestCoinbaseClient:
    """Test Coinbase current-user lookups."""

    @pytest.mark.asyncio
    async def test_get_current_user_v1_envelope(self):
        client = CoinbaseClient(access_token="test_token")

        with patch("coinbase_auth.integrations.coinbase.client.httpx.AsyncClient") as mock_client:
            mock_response = Mock()
            mock_response.json.return_value = {"users": [{"user": USER}]}
            mock_get = AsyncMock(return_value=mock_response)
            mock_client.return_value.__aenter__.return_value.get = mock_get

            result = await client.get_current_user()

            assert result == USER
            assert mock_get.call_args.args[0] == DEFAULT_USER_PROFILE_URL
            assert mock_get.call_args.kwargs["headers"]["Authorization"] == "Bearer test_token"

    @pytest.mark.asyncio
    async def test_get_current_user_v2_envelope(self):
        client = CoinbaseClient(access_token="test_token", user_profile_url="https://api.coinbase.com/v2/user")

        with patch("coinbase_auth.integrations.coinbase.client.httpx.AsyncClient") as mock_client:
            mock_response = Mock()
            mock_response.json.return_value = {"data": USER}
            mock_get = AsyncMock(return_value=mock_response)
            mock_client.return_value.__aenter__.return_value.get = mock_get

            result = await client.get_current_user()

            assert result == USER
            assert mock_get.call_args.args[0] == "https://api.coinbase.com/v2/user"

    @pytest.mark.asyncio
    async def test_get_current_user_plain_body(self):
        client = CoinbaseClient(access_token="test_token")

        with patch("coinbase_auth.integrations.coinbase.client.httpx.AsyncClient") as mock_client:
            mock_response = Mock()
            mock_response.json.return_value = USER
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(return_value=mock_response)

            assert await client.get_current_user() == USER

    @pytest.mark.asyncio
    async def test_timeout_is_forwarded(self):
        client = CoinbaseClient(access_token="test_token", timeout=5)

        with patch("coinbase_auth.integrations.coinbase.client.httpx.AsyncClient") as mock_client:
            mock_response = Mock()
            mock_response.json.return_value = USER
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(return_value=mock_response)

            await client.get_current_user()

            mock_client.assert_called_once_with(timeout=5)

    @pytest.mark.asyncio
    async def test_http_status_error(self):
        client = CoinbaseClient(access_token="invalid_token")

        with patch("coinbase_auth.integrations.coinbase.client.httpx.AsyncClient") as mock_client:
            mock_response = Mock()
            mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
                "Unauthorized", request=Mock(), response=Mock(status_code=401)
            )
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(return_value=mock_response)

            with pytest.raises(CoinbaseAPIError) as exc_info:
                await client.get_current_user()

            assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_network_error(self):
        client = CoinbaseClient(access_token="test_token")

        with patch("coinbase_auth.integrations.coinbase.client.httpx.AsyncClient") as mock_client:
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(
                side_effect=httpx.HTTPError("Network error")
            )

            with pytest.raises(CoinbaseAPIError) as exc_info:
                await client.get_current_user()

            assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        client = CoinbaseClient(access_token="test_token")

        with patch("coinbase_auth.integrations.coinbase.client.httpx.AsyncClient") as mock_client:
            mock_response = Mock(status_code=200)
            mock_response.json.side_effect = ValueError("Expecting value")
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(return_value=mock_response)

            with pytest.raises(CoinbaseAPIError):
                await client.get_current_user()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {"users": []},
            {"errors": [{"id": "invalid_token", "message": "The access token is invalid"}]},
            ["not", "an", "object"],
            {"data": None},
            {"data": ["U1"]},
            {"users": ["U1"]},
        ],
    )
    async def test_unusable_payloads(self, body):
        client = CoinbaseClient(access_token="test_token")

        with patch("coinbase_auth.integrations.coinbase.client.httpx.AsyncClient") as mock_client:
            mock_response = Mock()
            mock_response.json.return_value = body
            mock_client.return_value.__aenter__.return_value.get = AsyncMock(return_value=mock_response)

            with pytest.raises(CoinbaseAPIError):
                await client.get_current_user()
