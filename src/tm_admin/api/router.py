# src/tm_admin/api/router.py
"""Admin REST API - every route requires an admin user."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_admin.application.service import AdminService
from src.tm_common.database import get_db_session
from src.tm_common.response import ApiResponse, success_response
from src.tm_event.application.schemas import CreateEventRequest
from src.tm_gateway.auth.dependencies import require_admin
from src.tm_gateway.user.db_models import UserModel
from src.tm_posting.infrastructure.notifier import PostingChangePublisher

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()
_publisher = PostingChangePublisher()


@router.post("/events", status_code=201)
async def create_event(
    body: CreateEventRequest,
    request: Request,
    admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.create_event(db, body.to_domain())
    return success_response(result.model_dump(mode="json"), request)


@router.delete("/events/{event_id}")
async def delete_event(
    event_id: str,
    request: Request,
    admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    notice = await _service.delete_event(db, event_id)
    await _publisher.publish(notice)
    return success_response({"event_id": event_id}, request)


@router.post("/seed")
async def seed_events(
    request: Request,
    admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.seed_events(db)
    return success_response(result, request)


@router.delete("/postings/{posting_id}")
async def delete_posting(
    posting_id: str,
    request: Request,
    admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    notice = await _service.delete_posting(db, posting_id)
    await _publisher.publish(notice)
    return success_response({"posting_id": posting_id, "event_id": notice.event_id}, request)


@router.delete("/chat/{message_id}")
async def delete_chat_message(
    message_id: str,
    request: Request,
    admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    await _service.delete_chat_message(db, message_id)
    return success_response({"message_id": message_id}, request)


@router.get("/stats")
async def stats(
    request: Request,
    admin: Annotated[UserModel, Depends(require_admin)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.stats(db)
    return success_response(result, request)
