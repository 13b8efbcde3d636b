# /app/services/history_service.py

from typing import List, Optional

from .database_service import DatabaseService, DEFAULT_HISTORY_LIMIT
from ..models.generation_model import (
    CodeGenerationRecord,
    CodeGenerationResult,
    GenerateCodeRequest,
    GenerateCodeResponse,
    GenerationDetail,
    GenerationSummary,
)


def save_generation(
    db: DatabaseService,
    request: GenerateCodeRequest,
    result: CodeGenerationResult,
    user_id: Optional[str] = None,
) -> GenerateCodeResponse:
    """
    Persists a finished generation and returns the POST /api/generate payload.
    The files in the response are the ones read back from storage.
    """
    record = db.create_code_generation(
        prompt=request.prompt,
        language=request.language,
        framework=request.framework,
        generated_code=[f.model_dump() for f in result.files],
        explanation=result.explanation,
        user_id=user_id,
    )
    return GenerateCodeResponse(
        id=record.id,
        files=record.generated_code,
        explanation=record.explanation or result.explanation,
        createdAt=record.created_at,
    )


def _to_summary(record: CodeGenerationRecord) -> GenerationSummary:
    return GenerationSummary(
        id=record.id,
        prompt=record.prompt,
        language=record.language,
        framework=record.framework,
        createdAt=record.created_at,
    )


def get_history(
    db: DatabaseService,
    limit: int = DEFAULT_HISTORY_LIMIT,
    user_id: Optional[str] = None,
) -> List[GenerationSummary]:
    """Most recent generations first, optionally restricted to one owner."""
    return [_to_summary(record) for record in db.get_code_generations(limit=limit, user_id=user_id)]


def get_generation(db: DatabaseService, generation_id: str) -> Optional[GenerationDetail]:
    record = db.get_code_generation(generation_id)
    if record is None:
        return None
    return GenerationDetail(
        id=record.id,
        prompt=record.prompt,
        language=record.language,
        framework=record.framework,
        files=record.generated_code,
        explanation=record.explanation,
        createdAt=record.created_at,
    )
