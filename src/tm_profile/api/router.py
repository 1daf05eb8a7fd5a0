"""Profile REST endpoints (auth required).

GET /profile - caller's profile
PUT /profile - create or update; re-syncs contact details on live postings
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.database import get_db_session
from src.tm_common.response import ApiResponse, success_response
from src.tm_gateway.auth.dependencies import get_current_user
from src.tm_gateway.user.db_models import UserModel
from src.tm_posting.infrastructure.notifier import PostingChangePublisher
from src.tm_profile.application.schemas import SaveProfileRequest
from src.tm_profile.application.service import ProfileService

router = APIRouter(prefix="/profile", tags=["profile"])

_service = ProfileService()
_publisher = PostingChangePublisher()


@router.get("")
async def get_profile(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_profile(db, str(current_user.id))
    return success_response(result.model_dump(mode="json"), request)


@router.put("")
async def save_profile(
    req: SaveProfileRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result, notices = await _service.save_profile(db, str(current_user.id), req)
    await _publisher.publish(*notices)
    return success_response(result.model_dump(mode="json"), request)
