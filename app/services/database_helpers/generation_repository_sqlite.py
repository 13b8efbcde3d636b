# /app/services/database_helpers/generation_repository_sqlite.py

import json
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.db.models.generation_models import CodeGeneration
from app.models.generation_model import CodeGenerationRecord
from .serialization import to_generation_record


class CodeGenerationRepositorySQLite:
    """
    Code-generation storage for the embedded SQLite database.
    The file list is written as JSON text and parsed again on every read.
    """

    def __init__(self, db_session: Session):
        self.db = db_session

    def add_code_generation(self, record: Dict) -> CodeGenerationRecord:
        """Inserts one generation. `record['generated_code']` is a list of file dicts."""
        row = dict(record)
        row["generated_code"] = json.dumps(record["generated_code"], ensure_ascii=False)
        new_generation = CodeGeneration(**row)
        self.db.add(new_generation)
        self.db.commit()
        self.db.refresh(new_generation)
        return to_generation_record(new_generation)

    def get_code_generations(self, limit: int, user_id: Optional[str] = None) -> List[CodeGenerationRecord]:
        query = self.db.query(CodeGeneration)
        if user_id is not None:
            query = query.filter(CodeGeneration.user_id == user_id)
        rows = query.order_by(CodeGeneration.created_at.desc()).limit(limit).all()
        return [to_generation_record(row) for row in rows]

    def get_code_generation(self, generation_id: str) -> Optional[CodeGenerationRecord]:
        row = self.db.query(CodeGeneration).filter(CodeGeneration.id == generation_id).first()
        if row is None:
            return None
        return to_generation_record(row)
