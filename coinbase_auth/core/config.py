"""Application configuration using Pydantic settings."""

import re
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings sourced from environment variables and .env files."""

    # Coinbase OAuth Configuration
    coinbase_client_id: str = Field(
        default="",
        alias="COINBASE_CLIENT_ID",
    )
    coinbase_client_secret: str = Field(
        default="",
        alias="COINBASE_CLIENT_SECRET",
    )
    coinbase_callback_url: str = Field(
        default="http://localhost:8080/api/v1/oauth/coinbase/callback",
        alias="COINBASE_CALLBACK_URL",
    )
    coinbase_scope: str = Field(
        default="user",
        alias="COINBASE_SCOPE",
        description="Comma or space separated Coinbase permission scopes.",
    )

    # Endpoint overrides; Coinbase defaults are used when unset
    coinbase_authorization_url: Optional[str] = Field(
        default=None,
        alias="COINBASE_AUTHORIZATION_URL",
    )
    coinbase_token_url: Optional[str] = Field(
        default=None,
        alias="COINBASE_TOKEN_URL",
    )
    coinbase_user_profile_url: Optional[str] = Field(
        default=None,
        alias="COINBASE_USER_PROFILE_URL",
    )

    # Wallet access and send limits requested during authorization
    coinbase_account: Optional[str] = Field(
        default=None,
        alias="COINBASE_ACCOUNT",
        description="Wallet access requested from the user: select, new or all.",
    )
    coinbase_send_limit_amount: Optional[str] = Field(
        default=None,
        alias="COINBASE_SEND_LIMIT_AMOUNT",
    )
    coinbase_send_limit_currency: Optional[str] = Field(
        default=None,
        alias="COINBASE_SEND_LIMIT_CURRENCY",
    )
    coinbase_send_limit_period: Optional[str] = Field(
        default=None,
        alias="COINBASE_SEND_LIMIT_PERIOD",
        description="How often the send limit resets: day, month or year.",
    )

    session_secret_key: str = Field(
        default="dev-secret-key",
        alias="SESSION_SECRET_KEY",
    )
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
    )

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator(
        "coinbase_authorization_url",
        "coinbase_token_url",
        "coinbase_user_profile_url",
        "coinbase_account",
        "coinbase_send_limit_amount",
        "coinbase_send_limit_currency",
        "coinbase_send_limit_period",
        mode="before",
    )
    @classmethod
    def blank_as_unset(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty variables such as ``COINBASE_ACCOUNT=`` as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def coinbase_scopes(self) -> List[str]:
        return [scope for scope in re.split(r"[,\s]+", self.coinbase_scope) if scope]


settings = Settings()

__all__ = ["Settings", "settings"]
