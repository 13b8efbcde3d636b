# /app/models/user_model.py

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """The public profile of a signed-in user."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    avatar: Optional[str] = None


class UserStatusResponse(BaseModel):
    """Response of GET /api/user. `user` is null for anonymous visitors."""
    user: Optional[User] = None
    authenticated: bool


class GoogleProfile(BaseModel):
    """The subset of Google's userinfo payload the login flow relies on."""
    google_id: str = Field(..., alias="sub")
    email: Optional[str] = None
    name: Optional[str] = None
    avatar: Optional[str] = Field(None, alias="picture")

