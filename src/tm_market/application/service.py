"""MarketSummaryService - read-only; no commit/rollback needed."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.enums import EventType
from src.tm_event.application.service import EventApplicationService
from src.tm_market.application.schemas import MarketSummaryResponse
from src.tm_market.engine.aggregator import summarize
from src.tm_posting.application.service import PostingLifecycleService


class MarketSummaryService:
    def __init__(
        self,
        postings: PostingLifecycleService | None = None,
        events: EventApplicationService | None = None,
    ) -> None:
        self._postings = postings or PostingLifecycleService()
        self._events = events or EventApplicationService()

    async def get_summary(self, db: AsyncSession, event_id: str) -> MarketSummaryResponse:
        """Unknown event -> the summary of an empty ceiling book."""
        event = await self._events.find_event(db, event_id)
        if event is None:
            return MarketSummaryResponse.from_domain(summarize(event_id, []))

        postings = await self._postings.list_event_postings(db, event_id)
        summary = summarize(
            event_id,
            postings,
            face_value=event.face_value if event.type is EventType.CEILING else None,
            kind=event.type,
        )
        return MarketSummaryResponse.from_domain(summary)
