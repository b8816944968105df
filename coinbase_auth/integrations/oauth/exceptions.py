"""OAuth2-specific exceptions."""

from typing import Any, Optional


class OAuth2Error(Exception):
    """Base OAuth2 error."""

    pass


class OAuth2ConfigurationError(OAuth2Error):
    """Raised when a strategy is missing required OAuth2 settings."""

    pass


class UnsupportedProviderError(OAuth2Error):
    """Raised when provider is not supported."""

    pass


class OAuth2TokenExchangeError(OAuth2Error):
    """Raised when token exchange fails."""

    pass


class OAuth2RefreshError(OAuth2Error):
    """Raised when token refresh fails."""

    pass


class ExternalServiceError(OAuth2Error):
    """Raised when a call to the identity provider's API fails.

    The underlying error is kept on ``cause`` for diagnostics.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class AuthenticationFailedError(OAuth2Error):
    """Raised when the verify callback does not return a user."""

    def __init__(self, message: str, info: Any = None):
        super().__init__(message)
        self.info = info


__all__ = [
    "OAuth2Error",
    "OAuth2ConfigurationError",
    "UnsupportedProviderError",
    "OAuth2TokenExchangeError",
    "OAuth2RefreshError",
    "ExternalServiceError",
    "AuthenticationFailedError",
]
