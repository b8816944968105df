"""FastAPI application entrypoint."""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI
from starlette.middleware.sessions import SessionMiddleware

from coinbase_auth.api import oauth_router
from coinbase_auth.core.config import settings
from coinbase_auth.integrations.oauth.base import OAuth2Strategy, Profile
from coinbase_auth.integrations.oauth.exceptions import UnsupportedProviderError
from coinbase_auth.integrations.oauth.factory import OAuth2ProviderFactory


logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def verify_user(access_token: str, refresh_token: Optional[str], profile: Optional[Profile]) -> Dict[str, Any]:
    """Turn a provider profile into the session user."""
    if profile is None:
        return {"provider": None, "id": None, "display_name": None, "email": None}
    return {
        "provider": profile.provider,
        "id": profile.id,
        "display_name": profile.display_name,
        "email": profile.emails[0]["value"] if profile.emails else None,
    }


def build_strategies() -> Dict[str, OAuth2Strategy]:
    """Create a strategy for every provider that has credentials configured."""
    strategies: Dict[str, OAuth2Strategy] = {}
    for provider_name in OAuth2ProviderFactory.get_supported_providers():
        try:
            strategies[provider_name] = OAuth2ProviderFactory.create_provider(provider_name, verify_user)
        except UnsupportedProviderError:
            logger.warning(f"Startup: provider {provider_name} could not be configured", exc_info=True)
    if not strategies:
        logger.warning("Startup: no OAuth providers configured; set COINBASE_CLIENT_ID and COINBASE_CLIENT_SECRET")
    return strategies


logger.info("Creating FastAPI application instance")
app = FastAPI(title="Coinbase Auth")
app.state.strategies = build_strategies()

# Add Session middleware for OAuth
logger.info("Configuring Session middleware for OAuth callbacks")
app.add_middleware(SessionMiddleware, secret_key=settings.session_secret_key)


@app.get("/")
async def root():
    return {"message": "Server is running"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "providers": sorted(app.state.strategies)}


logger.info("Registering API routers")
app.include_router(oauth_router, prefix="/api/v1/oauth")
logger.info("Routers registered; application ready to accept requests")
