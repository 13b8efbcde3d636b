# /app/models/generation_model.py

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PROMPT_MAX_LENGTH = 500


class GeneratedFile(BaseModel):
    """A single output file produced for a generation."""
    filename: str = Field(..., min_length=1)
    content: str
    language: str


class CodeGenerationResult(BaseModel):
    """
    The `{files, explanation}` object the code-generation provider must return.
    Also used as the shape of the mock fallback, so callers never special-case it.
    """
    files: List[GeneratedFile] = Field(..., min_length=1)
    explanation: str = Field(..., min_length=1)


class GenerateCodeRequest(BaseModel):
    """
    Request body for POST /api/generate.
    The UI sends the literal string "None" when no framework is picked; it is treated as absent.
    """
    prompt: str = Field(..., min_length=1, max_length=PROMPT_MAX_LENGTH)
    language: str = Field(..., min_length=1)
    framework: Optional[str] = None

    @field_validator("framework")
    @classmethod
    def _normalize_framework(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value or value.lower() == "none":
            return None
        return value


class CodeGenerationRecord(BaseModel):
    """
    A persisted generation as returned by the persistence gateway.
    `generated_code` is always the parsed list of files, whatever the storage backend.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: Optional[str] = None
    prompt: str
    language: str
    framework: Optional[str] = None
    generated_code: List[GeneratedFile]
    explanation: Optional[str] = None
    created_at: datetime


# --- API response contracts (camelCase to match the JSON consumed by the UI) ---

class GenerateCodeResponse(BaseModel):
    id: str
    files: List[GeneratedFile]
    explanation: str
    createdAt: datetime


class GenerationSummary(BaseModel):
    """One entry of GET /api/generations."""
    id: str
    prompt: str
    language: str
    framework: Optional[str] = None
    createdAt: datetime


class GenerationDetail(GenerationSummary):
    """Full detail of GET /api/generations/{id}."""
    files: List[GeneratedFile]
    explanation: Optional[str] = None


class MessageResponse(BaseModel):
    message: str
