"""Trades REST API.

POST /trades        - "we traded" confirmation (auth)
GET  /trades/stats  - global traded-ticket counter (public)
GET  /trades        - recent trades, optionally per event (public)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.database import get_db_session
from src.tm_common.response import ApiResponse, success_response
from src.tm_gateway.auth.dependencies import get_current_user
from src.tm_gateway.user.db_models import UserModel
from src.tm_trade.application.schemas import RecordTradeRequest
from src.tm_trade.application.service import TradeService

router = APIRouter(prefix="/trades", tags=["trades"])

_service = TradeService()


@router.post("", status_code=201)
async def record_trade(
    req: RecordTradeRequest,
    request: Request,
    current_user: Annotated[UserModel, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.record_from_request(db, str(current_user.id), req)
    return success_response(result.model_dump(mode="json"), request)


@router.get("/stats")
async def trade_stats(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.stats(db)
    return success_response(result.model_dump(mode="json"), request)


@router.get("")
async def list_trades(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    event_id: str | None = Query(None),
    limit: int = Query(100, ge=1, le=500),
) -> ApiResponse:
    result = await _service.list_trades(db, event_id, limit)
    return success_response(result.model_dump(mode="json"), request)
