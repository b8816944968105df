"""Coinbase OAuth2 sign-in strategy."""

from __future__ import annotations

import dataclasses
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from coinbase_auth.integrations.coinbase import DEFAULT_USER_PROFILE_URL, CoinbaseClient
from coinbase_auth.integrations.oauth.base import OAuth2Config, OAuth2Strategy, Profile
from coinbase_auth.integrations.oauth.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

DEFAULT_AUTHORIZATION_URL = "https://coinbase.com/oauth/authorize"
DEFAULT_TOKEN_URL = "https://coinbase.com/oauth/token"
DEFAULT_SCOPE_SEPARATOR = " "

# Scope that grants access to the current user's details.
USER_SCOPE = "user"


@dataclass(frozen=True)
class CoinbaseConfig(OAuth2Config):
    """Coinbase strategy options.

    ``account`` selects which wallets the application may access
    (``select``, ``new`` or ``all``). The ``send_limit_*`` options cap how
    much the application may send from the user's account: an amount, its
    ISO currency code, and the period after which the limit resets
    (``day``, ``month`` or ``year``). None of these are validated here.
    """

    user_profile_url: Optional[str] = None
    account: Optional[str] = None
    send_limit_amount: Optional[Union[str, int, float]] = None
    send_limit_currency: Optional[str] = None
    send_limit_period: Optional[str] = None


class CoinbaseStrategy(OAuth2Strategy):
    """Authenticate users by delegating to Coinbase with OAuth 2.0.

    Usage::

        strategy = CoinbaseStrategy(
            CoinbaseConfig(
                client_id="123-456-789",
                client_secret="shhh-its-a-secret",
                redirect_uri="https://www.example.net/auth/coinbase/callback",
                scopes=["user", "balance"],
            ),
            verify=lambda access_token, refresh_token, profile: find_or_create(profile),
        )
    """

    def __init__(self, config: CoinbaseConfig, verify: Callable[..., Any]):
        config = dataclasses.replace(
            config,
            authorization_url=config.authorization_url or DEFAULT_AUTHORIZATION_URL,
            token_url=config.token_url or DEFAULT_TOKEN_URL,
            scope_separator=config.scope_separator or DEFAULT_SCOPE_SEPARATOR,
            user_profile_url=config.user_profile_url or DEFAULT_USER_PROFILE_URL,
        )
        super().__init__(config, verify)

        # Only request the profile if we have the scope for it
        if config.scopes and USER_SCOPE not in config.scopes:
            self.skip_user_profile = True

        self.user_profile_url = config.user_profile_url
        self.account = config.account
        self.send_limit_amount = config.send_limit_amount
        self.send_limit_currency = config.send_limit_currency
        self.send_limit_period = config.send_limit_period

        # Replaceable so tests can inject a fake API client.
        self.client_class = CoinbaseClient

    @property
    def name(self) -> str:
        return "coinbase"

    async def user_profile(self, access_token: str) -> Profile:
        """Fetch the current Coinbase user and normalize it.

        The returned profile carries ``provider`` (always ``coinbase``), the
        Coinbase ``id``, ``display_name`` (the user's full name) and
        ``emails`` (a single entry holding the primary email), plus the raw
        response as ``raw_body`` and ``raw_fields``.
        """
        client = self.client_class(access_token=access_token, user_profile_url=self.user_profile_url)
        try:
            user = await client.get_current_user()
        except Exception as e:
            logger.error(f"Failed to fetch Coinbase user profile: {e}")
            raise ExternalServiceError("failed to fetch user profile", e) from e

        return Profile(
            provider=self.name,
            id=user.get("id"),
            display_name=user.get("name"),
            emails=[{"value": user.get("email")}],
            raw_body=json.dumps(user),
            raw_fields=user,
        )

    def authorization_params(self, options: Dict[str, Any]) -> Dict[str, Any]:
        """Return the Coinbase wallet and send-limit parameters that were configured.

        See https://developers.coinbase.com/docs/wallet/coinbase-connect/permissions
        """
        params: Dict[str, Any] = {}

        if self.account is not None:
            params["account"] = self.account

        if self.send_limit_amount is not None:
            params["meta[send_limit_amount]"] = self.send_limit_amount

        if self.send_limit_currency is not None:
            params["meta[send_limit_currency]"] = self.send_limit_currency

        if self.send_limit_period is not None:
            params["meta[send_limit_period]"] = self.send_limit_period

        return params


__all__ = [
    "CoinbaseConfig",
    "CoinbaseStrategy",
    "DEFAULT_AUTHORIZATION_URL",
    "DEFAULT_TOKEN_URL",
]
