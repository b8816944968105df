"""Factory for creating OAuth2 strategies."""

from __future__ import annotations

from typing import Any, Callable, Dict, Type

from coinbase_auth.core.config import settings
from coinbase_auth.integrations.oauth.base import OAuth2Config, OAuth2Strategy
from coinbase_auth.integrations.oauth.exceptions import UnsupportedProviderError
from coinbase_auth.integrations.oauth.providers.coinbase import CoinbaseConfig, CoinbaseStrategy


class OAuth2ProviderFactory:
    """Factory for creating OAuth2 strategies."""

    _providers: Dict[str, Type[OAuth2Strategy]] = {
        "coinbase": CoinbaseStrategy,
    }

    @classmethod
    def create_provider(cls, provider_name: str, verify: Callable[..., Any]) -> OAuth2Strategy:
        """Create a configured strategy instance."""
        if provider_name not in cls._providers:
            raise UnsupportedProviderError(f"Provider '{provider_name}' is not supported")

        if not cls._is_provider_configured(provider_name):
            raise UnsupportedProviderError(
                f"Provider '{provider_name}' is not configured. "
                f"Please set the required environment variables."
            )

        config = cls._get_provider_config(provider_name)
        provider_class = cls._providers[provider_name]
        return provider_class(config, verify)

    @classmethod
    def _get_provider_config(cls, provider_name: str) -> OAuth2Config:
        """Get configuration for specific provider."""
        if provider_name == "coinbase":
            # Coinbase permissions:
            # - user: read the account owner's name and email (needed for the profile)
            # - balance, transactions, send, ...: wallet access requested by the app
            return CoinbaseConfig(
                client_id=settings.coinbase_client_id,
                client_secret=settings.coinbase_client_secret,
                redirect_uri=settings.coinbase_callback_url,
                scopes=settings.coinbase_scopes,
                authorization_url=settings.coinbase_authorization_url,
                token_url=settings.coinbase_token_url,
                user_profile_url=settings.coinbase_user_profile_url,
                account=settings.coinbase_account,
                send_limit_amount=settings.coinbase_send_limit_amount,
                send_limit_currency=settings.coinbase_send_limit_currency,
                send_limit_period=settings.coinbase_send_limit_period,
            )

        raise UnsupportedProviderError(f"No configuration for provider: {provider_name}")

    @classmethod
    def register_provider(cls, provider_name: str, provider_class: Type[OAuth2Strategy]):
        """Register a new OAuth2 strategy."""
        cls._providers[provider_name] = provider_class

    @classmethod
    def _is_provider_configured(cls, provider_name: str) -> bool:
        """Check if provider has required credentials configured."""
        if provider_name == "coinbase":
            return bool(settings.coinbase_client_id and settings.coinbase_client_secret)

        return False

    @classmethod
    def get_supported_providers(cls) -> list[str]:
        """Get list of supported provider names that are properly configured."""
        return [
            provider_name
            for provider_name in cls._providers.keys()
            if cls._is_provider_configured(provider_name)
        ]


__all__ = ["OAuth2ProviderFactory"]
