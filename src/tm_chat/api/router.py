"""Chat board.

GET  /chat - recent messages, newest first (public)
POST /chat - post a message (auth)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_chat.application.schemas import PostMessageRequest
from src.tm_chat.application.service import ChatService
from src.tm_common.database import get_db_session
from src.tm_common.response import ApiResponse, success_response
from src.tm_gateway.auth.dependencies import get_current_user
from src.tm_gateway.user.db_models import UserModel

router = APIRouter(prefix="/chat", tags=["chat"])

_service = ChatService()


@router.get("")
async def list_messages(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    limit: int | None = Query(None, ge=1, le=500),
) -> ApiResponse:
    result = await _service.list_recent(db, limit)
    return success_response(result.model_dump(mode="json"), request)


@router.post("", status_code=201)
async def post_message(
    req: PostMessageRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.post_message(
        db, str(current_user.id), current_user.username, req.message
    )
    return success_response(result.model_dump(mode="json"), request)
