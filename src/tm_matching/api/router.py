"""GET /events/{event_id}/matches - the caller's matches (auth required)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.database import get_db_session
from src.tm_common.response import ApiResponse, success_response
from src.tm_gateway.auth.dependencies import get_current_user
from src.tm_gateway.user.db_models import UserModel
from src.tm_matching.application.service import MatchingService

router = APIRouter(prefix="/events", tags=["matching"])

_service = MatchingService()


@router.get("/{event_id}/matches")
async def get_matches(
    event_id: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_matches(db, str(current_user.id), event_id)
    return success_response(result.model_dump(mode="json"), request)
