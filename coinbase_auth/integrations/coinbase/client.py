"""Minimal async client for the Coinbase user API."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from coinbase_auth.integrations.coinbase.exceptions import CoinbaseAPIError

logger = logging.getLogger(__name__)

DEFAULT_USER_PROFILE_URL = "https://coinbase.com/api/v1/users"


class CoinbaseClient:
    """Coinbase API client scoped to a single OAuth access token."""

    def __init__(
        self,
        access_token: str,
        user_profile_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.access_token = access_token
        self.user_profile_url = user_profile_url or DEFAULT_USER_PROFILE_URL
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
            "User-Agent": "coinbase-auth/1.0",
        }

    async def get_current_user(self) -> Dict[str, Any]:
        """Return the user record that owns the access token."""
        client_kwargs: Dict[str, Any] = {}
        if self.timeout is not None:
            client_kwargs["timeout"] = self.timeout

        async with httpx.AsyncClient(**client_kwargs) as client:
            try:
                response = await client.get(self.user_profile_url, headers=self._headers())
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise CoinbaseAPIError(
                    f"Coinbase user request failed: HTTP {e.response.status_code}",
                    status_code=e.response.status_code,
                ) from e
            except httpx.HTTPError as e:
                raise CoinbaseAPIError(f"Failed to reach Coinbase: {str(e)}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise CoinbaseAPIError("Coinbase returned an invalid JSON body", status_code=response.status_code) from e

        return self._extract_user(data)

    @staticmethod
    def _extract_user(data: Any) -> Dict[str, Any]:
        # v2 wraps the record in "data", v1 in "users": [{"user": {...}}]
        if not isinstance(data, dict):
            raise CoinbaseAPIError("Unexpected Coinbase user response")

        if data.get("errors"):
            raise CoinbaseAPIError(f"Coinbase API error: {data['errors']}")

        if "data" in data:
            user = data["data"]
        elif "users" in data:
            users = data["users"] or []
            if not users:
                raise CoinbaseAPIError("Coinbase returned no user for this token")
            first = users[0]
            user = first.get("user", first) if isinstance(first, dict) else first
        else:
            user = data

        if not isinstance(user, dict):
            raise CoinbaseAPIError("Coinbase user response did not contain a user record")
        return user


__all__ = ["CoinbaseClient", "DEFAULT_USER_PROFILE_URL"]
