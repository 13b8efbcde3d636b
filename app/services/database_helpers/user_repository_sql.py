# /app/services/database_helpers/user_repository_sql.py

import uuid
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.orm import Session

from app.db.models.user_models import User, UserSession


class UserRepositorySQL:
    """Users and server-side sessions. Identical on SQLite and PostgreSQL."""

    def __init__(self, db_session: Session):
        self.db = db_session

    # --- User Methods ---
    def get_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def get_user_by_google_id(self, google_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.google_id == google_id).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def upsert_google_user(self, profile: Dict) -> User:
        """
        Creates the user on first login, otherwise refreshes name and avatar.
        `profile` carries `google_id`, `email`, `name` and optional `avatar`.
        An existing account with the same email is linked to the Google id.
        """
        now = datetime.now(timezone.utc)
        user = self.get_user_by_google_id(profile["google_id"]) or self.get_user_by_email(profile["email"])
        if user is None:
            user = User(
                id=str(uuid.uuid4()),
                email=profile["email"],
                name=profile["name"],
                avatar=profile.get("avatar"),
                google_id=profile["google_id"],
                created_at=now,
                updated_at=now,
            )
            self.db.add(user)
        else:
            user.name = profile["name"]
            user.avatar = profile.get("avatar")
            user.google_id = profile["google_id"]
            user.updated_at = now
        self.db.commit()
        self.db.refresh(user)
        return user

    # --- Session Methods ---
    def create_session(self, record: Dict) -> UserSession:
        new_session = UserSession(**record)
        self.db.add(new_session)
        self.db.commit()
        self.db.refresh(new_session)
        return new_session

    def get_session(self, session_id: str) -> Optional[UserSession]:
        return self.db.query(UserSession).filter(UserSession.id == session_id).first()

    def delete_session(self, session_id: str) -> bool:
        session = self.get_session(session_id)
        if session:
            self.db.delete(session)
            self.db.commit()
            return True
        return False

    def delete_expired_sessions(self, now: datetime) -> int:
        deleted = self.db.query(UserSession).filter(UserSession.expires_at < now).delete(synchronize_session=False)
        self.db.commit()
        return deleted
