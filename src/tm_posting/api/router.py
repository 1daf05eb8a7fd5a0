"""Posting lifecycle REST endpoints.

POST   /postings               - submit (create / replace)
GET    /postings/mine          - caller's live postings
DELETE /postings/{posting_id}  - withdraw
POST   /postings/{posting_id}/traded - mark traded
GET    /events/{event_id}/postings   - live postings of one event (public)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.database import get_db_session
from src.tm_common.response import ApiResponse, success_response
from src.tm_gateway.auth.dependencies import get_current_user
from src.tm_gateway.user.db_models import UserModel
from src.tm_posting.application.schemas import SubmitPostingRequest
from src.tm_posting.application.service import PostingLifecycleService
from src.tm_posting.infrastructure.notifier import PostingChangePublisher

router = APIRouter(prefix="/postings", tags=["postings"])
event_router = APIRouter(prefix="/events", tags=["postings"])

_service = PostingLifecycleService()
_publisher = PostingChangePublisher()


@router.post("", status_code=201)
async def submit_posting(
    req: SubmitPostingRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result, notice = await _service.submit(db, str(current_user.id), req)
    await _publisher.publish(notice)
    return success_response(result.model_dump(mode="json"), request)


@router.get("/mine")
async def list_my_postings(
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.list_mine(db, str(current_user.id))
    return success_response(result.model_dump(mode="json"), request)


@router.delete("/{posting_id}")
async def withdraw_posting(
    posting_id: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result, notice = await _service.withdraw(db, str(current_user.id), posting_id)
    await _publisher.publish(notice)
    return success_response(result.model_dump(mode="json"), request)


@router.post("/{posting_id}/traded")
async def mark_traded(
    posting_id: str,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result, notice = await _service.mark_traded(db, str(current_user.id), posting_id)
    await _publisher.publish(notice)
    return success_response(result.model_dump(mode="json"), request)


@event_router.get("/{event_id}/postings")
async def list_event_postings(
    event_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.list_postings(db, event_id)
    return success_response(result.model_dump(mode="json"), request)
