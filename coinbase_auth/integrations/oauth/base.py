"""Base classes for OAuth2 sign-in strategies."""

from __future__ import annotations

import inspect
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional
from urllib.parse import urlencode

import httpx
from authlib.integrations.httpx_client import AsyncOAuth2Client, OAuthError

from coinbase_auth.integrations.oauth.exceptions import (
    AuthenticationFailedError,
    OAuth2ConfigurationError,
    OAuth2RefreshError,
    OAuth2TokenExchangeError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OAuth2Config:
    """OAuth2 configuration for a strategy."""

    client_id: str
    client_secret: str
    redirect_uri: str
    scopes: List[str] = field(default_factory=list)
    authorization_url: Optional[str] = None
    token_url: Optional[str] = None
    scope_separator: Optional[str] = None


@dataclass
class OAuth2TokenSet:
    """OAuth2 token response."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    token_type: str = "Bearer"
    params: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_token(cls, token: Dict[str, Any], refresh_token: Optional[str] = None) -> "OAuth2TokenSet":
        return cls(
            access_token=token["access_token"],
            refresh_token=token.get("refresh_token", refresh_token),
            expires_in=token.get("expires_in"),
            scope=token.get("scope"),
            token_type=token.get("token_type", "Bearer"),
            params=dict(token),
        )


@dataclass
class Profile:
    """Normalized user profile handed to the verify callback."""

    provider: str
    id: Any
    display_name: Optional[str]
    emails: List[Dict[str, Any]]
    raw_body: str
    raw_fields: Dict[str, Any]


class OAuth2Strategy(ABC):
    """Generic OAuth2 authorization-code strategy.

    The protocol itself (token exchange, refresh) is handled by Authlib's
    ``AsyncOAuth2Client``; subclasses supply the provider name, the profile
    lookup and any extra authorization parameters.

    ``verify`` is called with ``(access_token, refresh_token, profile)`` or,
    when it accepts four positional arguments,
    ``(access_token, refresh_token, params, profile)`` where ``params`` is the
    raw token response. It may be a coroutine function and must return the
    authenticated user, or a falsy value to reject the login.
    """

    skip_user_profile: bool = False

    def __init__(self, config: OAuth2Config, verify: Callable[..., Any]):
        if not config.client_id:
            raise OAuth2ConfigurationError("OAuth2Strategy requires a client_id")
        if not config.authorization_url:
            raise OAuth2ConfigurationError("OAuth2Strategy requires an authorization_url")
        if not config.token_url:
            raise OAuth2ConfigurationError("OAuth2Strategy requires a token_url")
        if not callable(verify):
            raise TypeError("OAuth2Strategy requires a verify callback")

        self.config = config
        self._verify = verify
        self._pass_token_params = _positional_arity(verify) >= 4

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique strategy identifier."""
        pass

    @abstractmethod
    async def user_profile(self, access_token: str) -> Profile:
        """Fetch the authenticated user's profile from the provider."""
        pass

    def authorization_params(self, options: Dict[str, Any]) -> Dict[str, Any]:
        """Return provider-specific parameters for the authorization request."""
        return {}

    def get_authorization_url(self, state: str, **options: Any) -> str:
        """Generate the provider authorization URL."""
        scopes = options.get("scope") or self.config.scopes
        if isinstance(scopes, str):
            scopes = [scopes]

        params: Dict[str, Any] = {
            "response_type": "code",
            "client_id": self.config.client_id,
            "redirect_uri": self.config.redirect_uri,
        }
        if scopes:
            params["scope"] = (self.config.scope_separator or " ").join(scopes)
        params["state"] = state
        params.update(self.authorization_params(options))

        separator = "&" if "?" in self.config.authorization_url else "?"
        return f"{self.config.authorization_url}{separator}{urlencode(params)}"

    def _create_client(self) -> AsyncOAuth2Client:
        return AsyncOAuth2Client(
            client_id=self.config.client_id,
            client_secret=self.config.client_secret,
            redirect_uri=self.config.redirect_uri,
            token_endpoint_auth_method="client_secret_post",
        )

    async def exchange_code_for_tokens(self, code: str) -> OAuth2TokenSet:
        """Exchange an authorization code for tokens."""
        async with self._create_client() as client:
            try:
                token = await client.fetch_token(
                    self.config.token_url,
                    code=code,
                    grant_type="authorization_code",
                )
            except (OAuthError, httpx.HTTPError, ValueError) as e:
                logger.warning(f"{self.name} token exchange failed: {e}")
                raise OAuth2TokenExchangeError(f"Failed to exchange code: {str(e)}")

        if "access_token" not in token:
            raise OAuth2TokenExchangeError(f"{self.name} token response did not include an access token")
        return OAuth2TokenSet.from_token(token)

    async def refresh_tokens(self, refresh_token: str) -> OAuth2TokenSet:
        """Refresh access token using refresh token."""
        async with self._create_client() as client:
            try:
                token = await client.refresh_token(self.config.token_url, refresh_token=refresh_token)
            except (OAuthError, httpx.HTTPError, ValueError) as e:
                logger.warning(f"{self.name} token refresh failed: {e}")
                raise OAuth2RefreshError(f"Failed to refresh token: {str(e)}")

        if "access_token" not in token:
            raise OAuth2RefreshError(f"{self.name} refresh response did not include an access token")
        return OAuth2TokenSet.from_token(token, refresh_token=refresh_token)

    async def load_user_profile(self, access_token: str) -> Optional[Profile]:
        """Fetch the profile unless the strategy asked to skip it."""
        if self.skip_user_profile:
            logger.debug(f"{self.name}: skipping user profile lookup")
            return None
        return await self.user_profile(access_token)

    async def authenticate(self, code: str) -> Any:
        """Run the authorization-code flow for a callback and return the user."""
        tokens = await self.exchange_code_for_tokens(code)
        profile = await self.load_user_profile(tokens.access_token)

        if self._pass_token_params:
            user = self._verify(tokens.access_token, tokens.refresh_token, tokens.params, profile)
        else:
            user = self._verify(tokens.access_token, tokens.refresh_token, profile)
        if inspect.isawaitable(user):
            user = await user

        if not user:
            raise AuthenticationFailedError(f"{self.name} login was rejected", info=profile)

        logger.info(f"{self.name}: authenticated user {profile.id if profile else '<no profile>'}")
        return user


def _positional_arity(func: Callable[..., Any]) -> int:
    try:
        parameters = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return 0
    return sum(
        1
        for p in parameters
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    )


__all__ = ["OAuth2Config", "OAuth2TokenSet", "Profile", "OAuth2Strategy"]
