"""MatchingService - loads the event's postings and runs the engine.

Read-only. An unknown event yields an empty match list.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.enums import EventType
from src.tm_common.money import percent_of
from src.tm_event.application.service import EventApplicationService
from src.tm_matching.application.schemas import MatchListResponse, MatchOut
from src.tm_matching.domain.models import Match
from src.tm_matching.engine.matching_algo import compute_matches
from src.tm_matching.engine.policy import policy_for
from src.tm_matching.engine.tiers import apply_tier, configured_tier
from src.tm_posting.application.service import PostingLifecycleService


class MatchingService:
    def __init__(
        self,
        postings: PostingLifecycleService | None = None,
        events: EventApplicationService | None = None,
    ) -> None:
        self._postings = postings or PostingLifecycleService()
        self._events = events or EventApplicationService()

    async def find_matches(self, db: AsyncSession, user_id: str, event_id: str) -> list[Match]:
        event = await self._events.find_event(db, event_id)
        if event is None:
            return []

        postings = await self._postings.list_event_postings(db, event_id)
        matches = compute_matches(user_id, event_id, postings, policy_for(event.type))
        matches = apply_tier(matches, configured_tier())

        if event.type is EventType.CEILING:
            for m in matches:
                m.agreed_price = percent_of(event.face_value, m.agreed_percent)
        return matches

    async def get_matches(self, db: AsyncSession, user_id: str, event_id: str) -> MatchListResponse:
        matches = await self.find_matches(db, user_id, event_id)
        return MatchListResponse(
            event_id=event_id,
            items=[MatchOut.from_domain(m) for m in matches],
        )
