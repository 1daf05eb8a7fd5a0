"""tm_event REST endpoints (public reads).

GET /events               - catalog
GET /events/{event_id}    - detail
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.database import get_db_session
from src.tm_common.response import ApiResponse, success_response
from src.tm_event.application.service import EventApplicationService

router = APIRouter(prefix="/events", tags=["events"])

_service = EventApplicationService()


@router.get("")
async def list_events(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.list_events(db)
    return success_response(result.model_dump(mode="json"), request)


@router.get("/{event_id}")
async def get_event(
    event_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_event(db, event_id)
    return success_response(result.model_dump(mode="json"), request)
