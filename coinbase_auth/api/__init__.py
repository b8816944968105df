"""Public API package exports."""

from coinbase_auth.api.routes.oauth import router as oauth_router

__all__ = ["oauth_router"]
