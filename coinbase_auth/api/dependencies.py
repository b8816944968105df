"""Shared FastAPI dependencies."""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from coinbase_auth.integrations.oauth.base import OAuth2Strategy


def get_strategy(provider: str, request: Request) -> OAuth2Strategy:
    """Resolve the configured strategy for ``provider`` or fail with 400."""
    strategies = getattr(request.app.state, "strategies", {})
    strategy = strategies.get(provider)
    if strategy is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unsupported OAuth provider",
        )
    return strategy


__all__ = ["get_strategy"]
