"""TradeService - mutual trade confirmations and the traded-ticket counter.

Trades created by mark-traded are written by the posting store in the same
statement that removes the posting; this service covers the "we traded"
confirmation and the read side.
"""

import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.tm_common.enums import Role
from src.tm_common.errors import SelfTradeError
from src.tm_common.id_generator import generate_id
from src.tm_event.application.service import EventApplicationService
from src.tm_rules.rules.price_range import check_price_positive
from src.tm_rules.rules.self_match import is_self_match
from src.tm_rules.rules.ticket_limit import check_ticket_limit
from src.tm_trade.application.schemas import (
    RecordTradeRequest,
    TradeListResponse,
    TradeOut,
    TradeStatsResponse,
)
from src.tm_trade.domain.models import Trade
from src.tm_trade.domain.repository import TradeRepositoryProtocol
from src.tm_trade.infrastructure.persistence import TradeRepository

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 100


class TradeService:
    def __init__(
        self,
        repo: TradeRepositoryProtocol | None = None,
        events: EventApplicationService | None = None,
    ) -> None:
        self._repo: TradeRepositoryProtocol = repo or TradeRepository()
        self._events = events or EventApplicationService()

    async def record_mutual_trade(
        self,
        db: AsyncSession,
        buyer_id: str,
        seller_id: str,
        event_id: str,
        price: Decimal,
        tickets: int,
    ) -> TradeOut:
        """Record a trade both parties agreed on outside the posting flow.

        The trade source follows the event's pricing model.
        """
        if is_self_match(buyer_id, seller_id):
            raise SelfTradeError()
        check_price_positive(price)
        check_ticket_limit(tickets, settings.MAX_TICKETS_PER_POSTING)
        event = await self._events.require_event(db, event_id)

        try:
            trade = await self._repo.insert(
                db,
                Trade(
                    id=generate_id(),
                    event_id=event.id,
                    source=event.type,
                    buyer_id=buyer_id,
                    seller_id=seller_id,
                    price=price,
                    tickets=tickets,
                ),
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "mutual trade recorded: %s event=%s tickets=%d", trade.id, event_id, tickets
        )
        return TradeOut.from_domain(trade)

    async def record_from_request(
        self, db: AsyncSession, user_id: str, req: RecordTradeRequest
    ) -> TradeOut:
        if req.role is Role.BUYER:
            buyer_id, seller_id = user_id, req.counterpart_id
        else:
            buyer_id, seller_id = req.counterpart_id, user_id
        return await self.record_mutual_trade(
            db, buyer_id, seller_id, req.event_id, req.price, req.tickets
        )

    async def total_traded_tickets(self, db: AsyncSession) -> int:
        return await self._repo.total_tickets(db)

    async def stats(self, db: AsyncSession) -> TradeStatsResponse:
        return TradeStatsResponse(total_traded_tickets=await self.total_traded_tickets(db))

    async def list_trades(
        self, db: AsyncSession, event_id: str | None = None, limit: int = DEFAULT_LIST_LIMIT
    ) -> TradeListResponse:
        trades = await self._repo.list_trades(db, event_id, limit)
        return TradeListResponse(items=[TradeOut.from_domain(t) for t in trades])
