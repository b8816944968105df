"""OAuth API routes."""

import logging
import secrets
from dataclasses import asdict, is_dataclass
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse, RedirectResponse

from coinbase_auth.api.dependencies import get_strategy
from coinbase_auth.integrations.oauth.base import OAuth2Strategy
from coinbase_auth.integrations.oauth.exceptions import (
    AuthenticationFailedError,
    ExternalServiceError,
    OAuth2Error,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["oauth"])

STATE_SESSION_KEY = "oauth_state"


@router.get("/{provider}")
async def oauth_login(request: Request, strategy: OAuth2Strategy = Depends(get_strategy)):
    """Initiate OAuth login flow by redirecting to the provider."""
    state = secrets.token_urlsafe(32)
    request.session[STATE_SESSION_KEY] = state
    return RedirectResponse(url=strategy.get_authorization_url(state))


@router.get("/{provider}/callback")
async def oauth_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
    error_description: Optional[str] = None,
    strategy: OAuth2Strategy = Depends(get_strategy),
):
    """Handle the provider callback, authenticate and store the user in the session."""
    if error:
        logger.warning(f"{strategy.name} authorization error: {error} {error_description or ''}".rstrip())
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED if error == "access_denied" else status.HTTP_400_BAD_REQUEST,
            detail=error_description or error,
        )

    expected_state = request.session.pop(STATE_SESSION_KEY, None)
    if not state or state != expected_state:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid state parameter",
        )

    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing authorization code",
        )

    try:
        user = await strategy.authenticate(code)
    except AuthenticationFailedError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except ExternalServiceError as e:
        logger.error(f"{strategy.name} profile lookup failed", exc_info=True)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)
    except OAuth2Error as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"OAuth authentication failed: {str(e)}")

    payload = jsonable_encoder(asdict(user) if is_dataclass(user) else user)
    request.session["user"] = payload
    return JSONResponse({"user": payload})


__all__ = ["router"]
