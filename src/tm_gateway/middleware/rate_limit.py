"""Fixed-window rate limiting for write endpoints.

Rules:
  - POST /api/v1/postings*  and POST /api/v1/chat: RATE_LIMIT_PER_MINUTE per client IP

Redis logic (key: "ratelimit:{ip}:{group}:{minute}"):
    count = INCR key; first hit sets EXPIRE 60; count > limit -> 429
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from config.settings import settings
from src.tm_common.errors import RateLimitError
from src.tm_common.redis_client import get_redis
from src.tm_common.response import error_response

logger = logging.getLogger(__name__)

_LIMITED_PREFIXES: dict[str, str] = {
    "/api/v1/postings": "postings",
    "/api/v1/chat": "chat",
}


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop when behind a proxy, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def limit_group(method: str, path: str) -> str | None:
    if method != "POST":
        return None
    for prefix, group in _LIMITED_PREFIXES.items():
        if path.startswith(prefix):
            return group
    return None


class RateLimitMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        group = limit_group(request.method, request.url.path)
        if not settings.RATE_LIMIT_ENABLED or group is None:
            return await call_next(request)

        window = int(time.time() // 60)
        key = f"ratelimit:{client_ip(request)}:{group}:{window}"
        redis = await get_redis()
        count = await redis.incr(key)
        if count == 1:
            await redis.expire(key, 60)
        if count > settings.RATE_LIMIT_PER_MINUTE:
            logger.warning("rate limit hit: %s", key)
            exc = RateLimitError()
            return JSONResponse(
                status_code=exc.http_status,
                content=error_response(exc.code, exc.message).model_dump(),
                headers={"Retry-After": str(60 - int(time.time()) % 60)},
            )
        return await call_next(request)
