"""OAuth2 strategies for third-party sign-in."""

from .base import OAuth2Config, OAuth2Strategy, OAuth2TokenSet, Profile
from .factory import OAuth2ProviderFactory

__all__ = ["OAuth2Config", "OAuth2Strategy", "OAuth2TokenSet", "Profile", "OAuth2ProviderFactory"]
