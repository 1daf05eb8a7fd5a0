"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.tm_admin.api.router import router as admin_router
from src.tm_chat.api.router import router as chat_router
from src.tm_common.database import engine
from src.tm_common.errors import AppError
from src.tm_common.redis_client import close_redis, get_redis
from src.tm_common.response import error_response
from src.tm_event.api.router import router as event_router
from src.tm_gateway.api.router import router as auth_router
from src.tm_gateway.middleware.rate_limit import RateLimitMiddleware
from src.tm_gateway.middleware.request_log import RequestLogMiddleware
from src.tm_market.api.router import router as market_router
from src.tm_matching.api.router import router as matching_router
from src.tm_posting.api.router import event_router as event_postings_router
from src.tm_posting.api.router import router as posting_router
from src.tm_profile.api.router import router as profile_router
from src.tm_trade.api.router import router as trade_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB + Redis connections. Shutdown: dispose."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    await get_redis()
    logger.info("%s started", settings.APP_NAME)
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)

# Starlette runs the last-added middleware first: request IDs exist before rate limiting
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message)
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(auth_router, prefix="/api/v1")
app.include_router(profile_router, prefix="/api/v1")
app.include_router(event_router, prefix="/api/v1")
app.include_router(event_postings_router, prefix="/api/v1")
app.include_router(matching_router, prefix="/api/v1")
app.include_router(market_router, prefix="/api/v1")
app.include_router(posting_router, prefix="/api/v1")
app.include_router(trade_router, prefix="/api/v1")
app.include_router(chat_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
