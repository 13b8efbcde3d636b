# /app/routers/auth_router.py

"""
Browser-facing Google sign-in endpoints, mounted under `/auth`.

- `GET /auth/google` starts the OAuth flow.
- `GET /auth/google/callback` completes it and sets the session cookie.
- `POST /auth/logout` ends the server-side session.
"""

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from ..core.config import Settings
from ..core.deps import get_settings
from ..services import auth_service
from ..services.database_service import DatabaseService, get_db_service

logger = logging.getLogger(__name__)

router = APIRouter()

OAUTH_STATE_MAX_AGE = 10 * 60


def _redirect_uri(request: Request, settings: Settings) -> str:
    return settings.oauth_redirect_url or str(request.url_for("google_callback"))


@router.get("/google", summary="Start Google Sign-In")
def google_login(request: Request, settings: Settings = Depends(get_settings)):
    state = auth_service.new_oauth_state()
    url = auth_service.build_authorization_url(settings, _redirect_uri(request, settings), state)
    response = RedirectResponse(url, status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        auth_service.OAUTH_STATE_COOKIE_NAME,
        state,
        max_age=OAUTH_STATE_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


@router.get("/google/callback", name="google_callback", summary="Google Sign-In Callback")
async def google_callback(
    request: Request,
    code: Optional[str] = None,
    state: Optional[str] = None,
    oauth_state: Optional[str] = Cookie(None),
    db: DatabaseService = Depends(get_db_service),
    settings: Settings = Depends(get_settings),
):
    if not code or not state or not oauth_state or state != oauth_state:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid OAuth state")

    try:
        profile = await auth_service.fetch_google_profile(code, _redirect_uri(request, settings), settings)
        _, session_id = await asyncio.to_thread(auth_service.login_google_user, db, profile, settings)
    except auth_service.AuthError as e:
        logger.warning("Google sign-in failed: %s", e)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Google sign-in failed")

    response = RedirectResponse(settings.frontend_url, status_code=status.HTTP_302_FOUND)
    response.set_cookie(
        auth_service.SESSION_COOKIE_NAME,
        session_id,
        max_age=settings.session_ttl_days * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    response.delete_cookie(auth_service.OAUTH_STATE_COOKIE_NAME)
    return response


@router.post("/logout", summary="Sign Out")
def logout(
    session_id: Optional[str] = Cookie(None),
    db: DatabaseService = Depends(get_db_service),
):
    auth_service.logout(db, session_id)
    response = JSONResponse({"message": "Logged out"})
    response.delete_cookie(auth_service.SESSION_COOKIE_NAME)
    return response
