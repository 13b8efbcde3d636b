# /app/routers/user_router.py

from typing import Optional

from fastapi import APIRouter, Depends

from ..core.deps import get_optional_user
from ..db.models.user_models import User
from ..models import user_model

router = APIRouter()


@router.get("", response_model=user_model.UserStatusResponse, summary="Get the Signed-In User")
def read_current_user(current_user: Optional[User] = Depends(get_optional_user)):
    """Never returns 401: anonymous visitors get `{user: null, authenticated: false}`."""
    if current_user is None:
        return user_model.UserStatusResponse(user=None, authenticated=False)
    return user_model.UserStatusResponse(user=user_model.User.model_validate(current_user), authenticated=True)
