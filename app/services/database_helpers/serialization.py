# /app/services/database_helpers/serialization.py

"""
Helpers shared by the code-generation repositories to turn stored rows into
detached, fully-decoded `CodeGenerationRecord` objects.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import ValidationError

from ...models.generation_model import CodeGenerationRecord


class CorruptRecordError(ValueError):
    """Raised when a stored generation cannot be decoded into a list of files."""

    pass


def ensure_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; every timestamp we store is UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def decode_generated_code(value: Any) -> List[Dict[str, Any]]:
    """
    Accepts either the serialized JSON text (SQLite) or the structured value a
    JSONB column yields (PostgreSQL) and returns the list of file dictionaries.
    """
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise CorruptRecordError(f"generated_code is not valid JSON: {e}") from e
    if not isinstance(value, list) or not value:
        raise CorruptRecordError("generated_code must be a non-empty list of files.")
    return value


def to_generation_record(row: Any) -> CodeGenerationRecord:
    try:
        return CodeGenerationRecord(
            id=row.id,
            user_id=row.user_id,
            prompt=row.prompt,
            language=row.language,
            framework=row.framework,
            generated_code=decode_generated_code(row.generated_code),
            explanation=row.explanation,
            created_at=ensure_utc(row.created_at),
        )
    except ValidationError as e:
        raise CorruptRecordError(f"Stored generation {row.id} is malformed: {e}") from e
