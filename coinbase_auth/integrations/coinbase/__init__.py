"""Coinbase API client."""

from .client import DEFAULT_USER_PROFILE_URL, CoinbaseClient
from .exceptions import CoinbaseAPIError

__all__ = ["CoinbaseClient", "CoinbaseAPIError", "DEFAULT_USER_PROFILE_URL"]
