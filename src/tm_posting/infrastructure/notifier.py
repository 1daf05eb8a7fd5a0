"""Posting change feed over Redis pub/sub.

Channel per event: "postings:{event_id}". Payload:
    {"event_id": "...", "op": "created|replaced|withdrawn|traded|synced|event_removed", "posting_id": "..."}

Subscribers recompute from a fresh snapshot on every message; only the most
recent result matters, so dropped or coalesced messages are harmless.
"""

import json
import logging
from collections.abc import AsyncGenerator

from redis.exceptions import RedisError

from src.tm_common.enums import PostingChange
from src.tm_common.redis_client import get_redis
from src.tm_posting.domain.models import ChangeNotice

logger = logging.getLogger(__name__)


def channel_for(event_id: str) -> str:
    return f"postings:{event_id}"


def encode_notice(notice: ChangeNotice) -> str:
    return json.dumps(
        {"event_id": notice.event_id, "op": notice.op.value, "posting_id": notice.posting_id}
    )


def decode_notice(raw: str) -> ChangeNotice:
    data = json.loads(raw)
    return ChangeNotice(
        event_id=data["event_id"],
        op=PostingChange(data["op"]),
        posting_id=data.get("posting_id"),
    )


class PostingChangePublisher:
    async def publish(self, *notices: ChangeNotice) -> None:
        """Publish after commit. The write already succeeded, so a Redis outage
        only delays subscribers until their next refresh."""
        if not notices:
            return
        try:
            redis = await get_redis()
            for notice in notices:
                await redis.publish(channel_for(notice.event_id), encode_notice(notice))
        except RedisError:
            logger.warning("change feed publish failed for %d notice(s)", len(notices), exc_info=True)

    async def subscribe(self, event_id: str) -> AsyncGenerator[ChangeNotice, None]:
        redis = await get_redis()
        pubsub = redis.pubsub()
        await pubsub.subscribe(channel_for(event_id))
        try:
            async for message in pubsub.listen():
                if message.get("type") != "message":
                    continue
                yield decode_notice(message["data"])
        finally:
            await pubsub.unsubscribe(channel_for(event_id))
            await pubsub.aclose()
