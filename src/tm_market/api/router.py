"""Market summary endpoints (public).

GET /events/{event_id}/summary         - distribution, curve and clearing
WS  /events/{event_id}/summary/stream  - summary pushed after every posting change
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import APIRouter, Depends, Request, WebSocket, WebSocketDisconnect
from redis.exceptions import RedisError
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.database import async_session_factory, get_db_session
from src.tm_common.response import ApiResponse, success_response
from src.tm_market.application.service import MarketSummaryService
from src.tm_posting.domain.models import ChangeNotice
from src.tm_posting.infrastructure.notifier import PostingChangePublisher

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["market"])

_service = MarketSummaryService()
_publisher = PostingChangePublisher()


@router.get("/{event_id}/summary")
async def get_summary(
    event_id: str,
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db_session)],
) -> ApiResponse:
    result = await _service.get_summary(db, event_id)
    return success_response(result.model_dump(mode="json"), request)


async def _snapshot(event_id: str) -> dict:
    # fresh session per push: a long-lived one would pin a pooled connection
    async with async_session_factory() as db:
        result = await _service.get_summary(db, event_id)
    return result.model_dump(mode="json")


async def _push_changes(websocket: WebSocket, event_id: str, notices: AsyncGenerator[ChangeNotice, None]) -> None:
    async for _notice in notices:
        await websocket.send_json(await _snapshot(event_id))


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    # clients never send anything meaningful; drain until the peer goes away
    while True:
        message = await websocket.receive()
        if message["type"] == "websocket.disconnect":
            return


@router.websocket("/{event_id}/summary/stream")
async def stream_summary(websocket: WebSocket, event_id: str) -> None:
    """Snapshot on connect, then a fresh snapshot after every change notice.

    The socket is watched alongside the change feed, so a client leaving a quiet
    event releases its pub/sub connection right away.
    """
    await websocket.accept()
    notices = _publisher.subscribe(event_id)
    tasks: set[asyncio.Task] = set()
    try:
        await websocket.send_json(await _snapshot(event_id))
        watcher = asyncio.create_task(_wait_for_disconnect(websocket))
        tasks = {asyncio.create_task(_push_changes(websocket, event_id, notices)), watcher}
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            task.result()
        if watcher not in done:
            # change feed ended without an error
            await websocket.close()
    except WebSocketDisconnect:
        logger.debug("summary stream closed: %s", event_id)
    except RedisError:
        logger.warning("summary stream lost change feed: %s", event_id, exc_info=True)
        await websocket.close(code=1011)
    finally:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        await notices.aclose()
