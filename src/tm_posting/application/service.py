"""PostingLifecycleService - submit, withdraw, mark-traded, contact sync.

Mutating methods commit (or roll back) the request session themselves and
return the ChangeNotice(s) to publish; the router publishes only after the
commit succeeded, so subscribers never observe an uncommitted change.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.tm_common.enums import EventType, PostingChange, SubmitOutcome
from src.tm_common.errors import (
    PostingNotFoundError,
    PostingNotOwnedError,
    ProfileNotFoundError,
    TradeConsistencyError,
)
from src.tm_common.id_generator import generate_id
from src.tm_common.money import percent_of, round2
from src.tm_event.application.service import EventApplicationService
from src.tm_posting.application.schemas import (
    MarkTradedResponse,
    PostingListResponse,
    PostingOut,
    SubmitPostingRequest,
    SubmitPostingResponse,
    WithdrawResponse,
)
from src.tm_posting.domain.models import ChangeNotice, Posting
from src.tm_posting.domain.repository import PostingRepositoryProtocol
from src.tm_posting.infrastructure.persistence import PostingRepository
from src.tm_profile.domain.models import Contact
from src.tm_profile.domain.repository import ProfileRepositoryProtocol
from src.tm_profile.infrastructure.persistence import ProfileRepository
from src.tm_rules.rules.percent_range import check_percent_range
from src.tm_rules.rules.posting_shape import check_posting_shape
from src.tm_rules.rules.price_range import check_price_positive
from src.tm_rules.rules.ticket_limit import check_ticket_limit
from src.tm_trade.domain.repository import TradeRepositoryProtocol
from src.tm_trade.infrastructure.persistence import TradeRepository

logger = logging.getLogger(__name__)

_SUBMIT_CHANGE = {
    SubmitOutcome.CREATED: PostingChange.CREATED,
    SubmitOutcome.REPLACED: PostingChange.REPLACED,
}


class PostingLifecycleService:
    def __init__(
        self,
        repo: PostingRepositoryProtocol | None = None,
        events: EventApplicationService | None = None,
        profiles: ProfileRepositoryProtocol | None = None,
        trades: TradeRepositoryProtocol | None = None,
    ) -> None:
        self._repo: PostingRepositoryProtocol = repo or PostingRepository()
        self._events = events or EventApplicationService()
        self._profiles: ProfileRepositoryProtocol = profiles or ProfileRepository()
        self._trades: TradeRepositoryProtocol = trades or TradeRepository()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def submit(
        self, db: AsyncSession, user_id: str, req: SubmitPostingRequest
    ) -> tuple[SubmitPostingResponse, ChangeNotice]:
        """Validate, then create (or for ceiling events, replace) a posting.

        Every check runs before the first write, so a rejected submit leaves
        the store untouched.
        """
        event = await self._events.require_event(db, req.event_id)
        check_posting_shape(event.type, req.percent, req.price)
        if event.type is EventType.CEILING:
            check_percent_range(req.percent)
        else:
            check_price_positive(req.price)
        check_ticket_limit(req.tickets, settings.MAX_TICKETS_PER_POSTING)

        profile = await self._profiles.get(db, user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)

        candidate = Posting(
            id=generate_id(),
            user_id=user_id,
            event_id=event.id,
            kind=event.type,
            role=req.role,
            contact=profile.to_contact(),
            percent=req.percent,
            price=round2(req.price) if req.price is not None else None,
            description=req.description if event.type is EventType.MARKET else None,
            tickets=req.tickets,
        )

        try:
            if candidate.is_replace_mode:
                outcome, posting = await self._repo.upsert(db, candidate)
            else:
                posting = await self._repo.insert(db, candidate)
                outcome = SubmitOutcome.CREATED
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "posting %s: %s user=%s event=%s role=%s",
            outcome.value, posting.id, user_id, event.id, posting.role.value,
        )
        response = SubmitPostingResponse(outcome=outcome, posting=PostingOut.from_domain(posting))
        return response, ChangeNotice(event.id, _SUBMIT_CHANGE[outcome], posting.id)

    async def withdraw(
        self, db: AsyncSession, user_id: str, posting_id: str
    ) -> tuple[WithdrawResponse, ChangeNotice]:
        posting = await self._get_owned(db, user_id, posting_id)
        try:
            if not await self._repo.delete(db, posting_id):
                raise PostingNotFoundError(posting_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info("posting withdrawn: %s user=%s event=%s", posting_id, user_id, posting.event_id)
        return (
            WithdrawResponse(posting_id=posting_id, event_id=posting.event_id),
            ChangeNotice(posting.event_id, PostingChange.WITHDRAWN, posting_id),
        )

    async def mark_traded(
        self, db: AsyncSession, user_id: str, posting_id: str
    ) -> tuple[MarkTradedResponse, ChangeNotice]:
        """Remove the posting and record its trade in one statement.

        If the posting row is gone by the time the statement runs, nothing is
        recorded and TradeConsistencyError is raised.
        """
        posting = await self._get_owned(db, user_id, posting_id)
        price = await self._trade_price(db, posting)

        try:
            if not await self._repo.delete_as_traded(db, posting_id, generate_id(), price):
                logger.error(
                    "mark-traded failed: posting %s vanished before removal (user=%s)",
                    posting_id, user_id,
                )
                raise TradeConsistencyError(posting_id)
            total = await self._trades.total_tickets(db)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        logger.info(
            "posting traded: %s user=%s event=%s tickets=%d total=%d",
            posting_id, user_id, posting.event_id, posting.tickets, total,
        )
        return (
            MarkTradedResponse(
                posting_id=posting_id, tickets=posting.tickets, total_traded_tickets=total
            ),
            ChangeNotice(posting.event_id, PostingChange.TRADED, posting_id),
        )

    async def sync_contact_fields(
        self, db: AsyncSession, user_id: str, contact: Contact
    ) -> tuple[int, list[ChangeNotice]]:
        """Rewrite the contact snapshot on every live posting of the user.

        Runs inside the caller's transaction (profile save); returns the number
        of postings updated and one notice per affected event.
        """
        event_ids = await self._repo.sync_contact(db, user_id, contact)
        notices = [
            ChangeNotice(event_id, PostingChange.SYNCED)
            for event_id in dict.fromkeys(event_ids)
        ]
        if event_ids:
            logger.info("contact synced on %d posting(s) for user=%s", len(event_ids), user_id)
        return len(event_ids), notices

    async def admin_delete(self, db: AsyncSession, posting_id: str) -> ChangeNotice:
        posting = await self._repo.get(db, posting_id)
        if posting is None:
            raise PostingNotFoundError(posting_id)
        try:
            if not await self._repo.delete(db, posting_id):
                raise PostingNotFoundError(posting_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("posting removed by admin: %s event=%s", posting_id, posting.event_id)
        return ChangeNotice(posting.event_id, PostingChange.WITHDRAWN, posting_id)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_event_postings(self, db: AsyncSession, event_id: str) -> list[Posting]:
        """All live postings of an event in arrival order; unknown event -> []."""
        return await self._repo.list_by_event(db, event_id)

    async def list_postings(self, db: AsyncSession, event_id: str) -> PostingListResponse:
        postings = await self.list_event_postings(db, event_id)
        return PostingListResponse(items=[PostingOut.from_domain(p) for p in postings])

    async def list_mine(self, db: AsyncSession, user_id: str) -> PostingListResponse:
        postings = await self._repo.list_by_user(db, user_id)
        return PostingListResponse(items=[PostingOut.from_domain(p) for p in postings])

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _get_owned(self, db: AsyncSession, user_id: str, posting_id: str) -> Posting:
        posting = await self._repo.get(db, posting_id)
        if posting is None:
            raise PostingNotFoundError(posting_id)
        if posting.user_id.lower() != user_id.lower():
            raise PostingNotOwnedError(posting_id)
        return posting

    async def _trade_price(self, db: AsyncSession, posting: Posting) -> Decimal:
        if posting.price is not None:
            return posting.price
        event = await self._events.find_event(db, posting.event_id)
        face_value = event.face_value if event is not None else None
        return percent_of(face_value, posting.percent or 0) or Decimal("0.00")
