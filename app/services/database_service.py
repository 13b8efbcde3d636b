# /app/services/database_service.py

import uuid
from datetime import datetime, timezone
from typing import Dict, Generator, List, Optional, Protocol

from fastapi import Depends
from sqlalchemy.orm import Session

# --- Core Database Setup ---
from app.db.database import get_db
from app.db.models.user_models import User, UserSession
from app.models.generation_model import CodeGenerationRecord

# --- Repository Imports ---
from .database_helpers.generation_repository_sqlite import CodeGenerationRepositorySQLite
from .database_helpers.generation_repository_postgres import CodeGenerationRepositoryPostgres
from .database_helpers.user_repository_sql import UserRepositorySQL

DEFAULT_HISTORY_LIMIT = 10


class CodeGenerationStore(Protocol):
    """The contract both code-generation backends implement."""

    def add_code_generation(self, record: Dict) -> CodeGenerationRecord: ...

    def get_code_generations(self, limit: int, user_id: Optional[str] = None) -> List[CodeGenerationRecord]: ...

    def get_code_generation(self, generation_id: str) -> Optional[CodeGenerationRecord]: ...


def build_generation_store(db_session: Session) -> CodeGenerationStore:
    """Picks the repository matching the dialect the session is bound to."""
    dialect = db_session.get_bind().dialect.name
    if dialect == "postgresql":
        return CodeGenerationRepositoryPostgres(db_session)
    if dialect == "sqlite":
        return CodeGenerationRepositorySQLite(db_session)
    raise ValueError(f"Unsupported database dialect: {dialect}")


class DatabaseService:
    def __init__(self, db_session: Session, generation_repo: Optional[CodeGenerationStore] = None):
        """
        The single persistence facade used by services and routers.
        The code-generation backend follows the dialect of `db_session`
        unless a repository is passed in explicitly.
        """
        self.generation_repo = generation_repo or build_generation_store(db_session)
        self.user_repo = UserRepositorySQL(db_session)

    # --- CODE GENERATION METHODS ---
    def create_code_generation(
        self,
        prompt: str,
        language: str,
        generated_code: List[Dict],
        explanation: Optional[str],
        framework: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> CodeGenerationRecord:
        """Inserts a generation; the id and creation timestamp are assigned here."""
        record = {
            "id": str(uuid.uuid4()),
            "user_id": user_id,
            "prompt": prompt,
            "language": language,
            "framework": framework,
            "generated_code": generated_code,
            "explanation": explanation,
            "created_at": datetime.now(timezone.utc),
        }
        return self.generation_repo.add_code_generation(record)

    def get_code_generations(self, limit: int = DEFAULT_HISTORY_LIMIT, user_id: Optional[str] = None) -> List[CodeGenerationRecord]:
        return self.generation_repo.get_code_generations(limit=limit, user_id=user_id)

    def get_code_generation(self, generation_id: str) -> Optional[CodeGenerationRecord]:
        return self.generation_repo.get_code_generation(generation_id)

    # --- USER & SESSION METHODS (DELEGATED) ---
    def get_user_by_id(self, user_id: str) -> Optional[User]: return self.user_repo.get_user_by_id(user_id)
    def get_user_by_google_id(self, google_id: str) -> Optional[User]: return self.user_repo.get_user_by_google_id(google_id)
    def get_user_by_email(self, email: str) -> Optional[User]: return self.user_repo.get_user_by_email(email)
    def upsert_google_user(self, profile: Dict) -> User: return self.user_repo.upsert_google_user(profile)
    def create_session(self, session_record: Dict) -> UserSession: return self.user_repo.create_session(session_record)
    def get_session(self, session_id: str) -> Optional[UserSession]: return self.user_repo.get_session(session_id)
    def delete_session(self, session_id: str) -> bool: return self.user_repo.delete_session(session_id)
    def delete_expired_sessions(self, now: datetime) -> int: return self.user_repo.delete_expired_sessions(now)


def get_db_service(db: Session = Depends(get_db)) -> Generator[DatabaseService, None, None]:
    """FastAPI dependency that provides a DatabaseService bound to the request's session."""
    yield DatabaseService(db_session=db)
