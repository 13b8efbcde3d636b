# /app/routers/generations_router.py

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from ..core.deps import get_optional_user
from ..db.models.user_models import User
from ..models import generation_model
from ..services import history_service
from ..services.database_helpers.serialization import CorruptRecordError
from ..services.database_service import DatabaseService, get_db_service, DEFAULT_HISTORY_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter()

MAX_HISTORY_LIMIT = 100


@router.get(
    "",  # Maps to /api/generations
    response_model=List[generation_model.GenerationSummary],
    summary="List Recent Generations",
)
def list_generations(
    limit: int = Query(DEFAULT_HISTORY_LIMIT, ge=1, le=MAX_HISTORY_LIMIT),
    mine: bool = Query(False, description="Only return the signed-in user's generations."),
    db: DatabaseService = Depends(get_db_service),
    current_user: Optional[User] = Depends(get_optional_user),
):
    """Newest first."""
    if mine and current_user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    try:
        return history_service.get_history(db=db, limit=limit, user_id=current_user.id if mine else None)
    except (SQLAlchemyError, CorruptRecordError):
        logger.exception("Failed to fetch generations (limit=%d)", limit)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch generations",
        )


@router.get(
    "/{generation_id}",
    response_model=generation_model.GenerationDetail,
    summary="Get a Single Generation",
    responses={404: {"model": generation_model.MessageResponse, "description": "Generation not found"}},
)
def get_generation(
    generation_id: str,
    db: DatabaseService = Depends(get_db_service),
):
    try:
        generation = history_service.get_generation(db=db, generation_id=generation_id)
    except (SQLAlchemyError, CorruptRecordError):
        logger.exception("Failed to fetch generation %s", generation_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch generation",
        )
    if generation is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Generation not found")
    return generation
