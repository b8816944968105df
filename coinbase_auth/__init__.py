"""Coinbase OAuth 2.0 sign-in strategy."""

from coinbase_auth.integrations.oauth.base import OAuth2Config, OAuth2Strategy, OAuth2TokenSet, Profile
from coinbase_auth.integrations.oauth.exceptions import (
    AuthenticationFailedError,
    ExternalServiceError,
    OAuth2Error,
)
from coinbase_auth.integrations.oauth.providers.coinbase import CoinbaseConfig, CoinbaseStrategy

__all__ = [
    "CoinbaseConfig",
    "CoinbaseStrategy",
    "OAuth2Config",
    "OAuth2Strategy",
    "OAuth2TokenSet",
    "Profile",
    "OAuth2Error",
    "ExternalServiceError",
    "AuthenticationFailedError",
]
