# /app/routers/generate_router.py

import asyncio
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError

from ..core.deps import get_generation_service, get_optional_user
from ..db.models.user_models import User
from ..models import generation_model
from ..services import history_service
from ..services.database_helpers.serialization import CorruptRecordError
from ..services.database_service import DatabaseService, get_db_service
from ..services.generation_service import CodeGenerationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/generate",
    response_model=generation_model.GenerateCodeResponse,
    summary="Generate Code from a Prompt",
    responses={
        400: {"model": generation_model.MessageResponse, "description": "Invalid request data"},
        500: {"model": generation_model.MessageResponse, "description": "Storage failure"},
    },
)
async def generate_code(
    request: generation_model.GenerateCodeRequest,
    db: DatabaseService = Depends(get_db_service),
    generator: CodeGenerationService = Depends(get_generation_service),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """
    Generates code for the prompt and saves it to the history.
    Provider problems never fail this endpoint: a placeholder result is returned instead.
    """
    outcome = await generator.generate(request)
    try:
        return await asyncio.to_thread(
            history_service.save_generation,
            db=db,
            request=request,
            result=outcome.result,
            user_id=current_user.id if current_user else None,
        )
    except (SQLAlchemyError, CorruptRecordError):
        logger.exception("Failed to save code generation (language=%s, source=%s)", request.language, outcome.source)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate code",
        )
