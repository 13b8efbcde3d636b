# /app/services/auth_service.py

"""
Google sign-in and server-side sessions.

The login flow is the standard OAuth 2.0 authorization-code flow: the browser
is redirected to Google's consent screen, Google redirects back with a `code`,
the code is exchanged for an access token, and the userinfo endpoint gives us
the profile. A random session id is then stored in the `sessions` table and
handed to the browser as an HTTP-only cookie.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from ..core.config import Settings
from ..db.models.user_models import User
from ..models.user_model import GoogleProfile
from .database_helpers.serialization import ensure_utc
from .database_service import DatabaseService

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
GOOGLE_SCOPES = "openid email profile"
OAUTH_HTTP_TIMEOUT = 10.0

SESSION_COOKIE_NAME = "session_id"
OAUTH_STATE_COOKIE_NAME = "oauth_state"


class AuthError(Exception):
    """Raised when a login attempt cannot be completed."""

    pass


def new_oauth_state() -> str:
    return secrets.token_urlsafe(32)


def build_authorization_url(settings: Settings, redirect_uri: str, state: str) -> str:
    params = {
        "client_id": settings.google_client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": GOOGLE_SCOPES,
        "state": state,
        "access_type": "online",
        "prompt": "select_account",
    }
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


async def fetch_google_profile(
    code: str,
    redirect_uri: str,
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> GoogleProfile:
    """Exchanges an authorization code for an access token and returns the user's profile."""
    owns_client = client is None
    client = client or httpx.AsyncClient(timeout=OAUTH_HTTP_TIMEOUT)
    try:
        token_response = await client.post(
            GOOGLE_TOKEN_URL,
            data={
                "code": code,
                "client_id": settings.google_client_id,
                "client_secret": settings.google_client_secret,
                "redirect_uri": redirect_uri,
                "grant_type": "authorization_code",
            },
        )
        if token_response.status_code != 200:
            raise AuthError(f"Token exchange failed with HTTP {token_response.status_code}")
        access_token = token_response.json().get("access_token")
        if not access_token:
            raise AuthError("Token exchange returned no access token")

        profile_response = await client.get(
            GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if profile_response.status_code != 200:
            raise AuthError(f"Userinfo request failed with HTTP {profile_response.status_code}")
        return GoogleProfile.model_validate(profile_response.json())
    except httpx.HTTPError as e:
        raise AuthError(f"Could not reach Google: {e}") from e
    except (ValueError, ValidationError) as e:
        raise AuthError(f"Unexpected response from Google: {e}") from e
    finally:
        if owns_client:
            await client.aclose()


def create_session(db: DatabaseService, user_id: str, ttl_days: int) -> str:
    """Stores a new session for `user_id` and returns its id (the cookie value)."""
    now = datetime.now(timezone.utc)
    session_id = secrets.token_hex(32)
    db.create_session({
        "id": session_id,
        "user_id": user_id,
        "created_at": now,
        "expires_at": now + timedelta(days=ttl_days),
    })
    return session_id


def login_google_user(db: DatabaseService, profile: GoogleProfile, settings: Settings) -> Tuple[User, str]:
    """
    Creates or refreshes the user for a Google profile and opens a session for them.
    Expired sessions of every user are removed at the same time.
    """
    if not profile.email or not profile.name:
        raise AuthError("Missing required profile information")

    user = db.upsert_google_user({
        "google_id": profile.google_id,
        "email": profile.email,
        "name": profile.name,
        "avatar": profile.avatar,
    })
    pruned = db.delete_expired_sessions(datetime.now(timezone.utc))
    if pruned:
        logger.info("Removed %d expired session(s)", pruned)
    session_id = create_session(db, user.id, settings.session_ttl_days)
    logger.info("User %s signed in", user.id)
    return user, session_id


def validate_session(db: DatabaseService, session_id: Optional[str]) -> Optional[User]:
    """Returns the session's user, or None. Expired sessions are deleted on sight."""
    if not session_id:
        return None
    session = db.get_session(session_id)
    if session is None:
        return None
    if ensure_utc(session.expires_at) < datetime.now(timezone.utc):
        db.delete_session(session_id)
        return None
    return db.get_user_by_id(session.user_id)


def logout(db: DatabaseService, session_id: Optional[str]) -> bool:
    if not session_id:
        return False
    return db.delete_session(session_id)
