# /app/core/deps.py

"""Shared FastAPI dependencies: settings, services held on app state, and the current user."""

from typing import Optional

from fastapi import Depends, Request

from ..db.models.user_models import User
from ..services import auth_service
from ..services.database_service import DatabaseService, get_db_service
from ..services.generation_service import CodeGenerationService
from .config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_generation_service(request: Request) -> CodeGenerationService:
    return request.app.state.generation_service


def get_optional_user(request: Request, db: DatabaseService = Depends(get_db_service)) -> Optional[User]:
    """The signed-in user, or None for anonymous requests and stale sessions."""
    session_id = request.cookies.get(auth_service.SESSION_COOKIE_NAME)
    return auth_service.validate_session(db, session_id)

