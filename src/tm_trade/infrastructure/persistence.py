# src/tm_trade/infrastructure/persistence.py
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_common.enums import EventType
from src.tm_trade.domain.models import Trade

_INSERT_SQL = text("""
    INSERT INTO trades (id, event_id, source, buyer_id, seller_id, price, tickets)
    VALUES (:id, :event_id, :source, :buyer_id, :seller_id, :price, :tickets)
    RETURNING id, event_id, source, buyer_id, seller_id, price, tickets, created_at
""")

_LIST_SQL = text("""
    SELECT id, event_id, source, buyer_id, seller_id, price, tickets, created_at
    FROM trades
    WHERE (CAST(:event_id AS TEXT) IS NULL OR event_id = :event_id)
    ORDER BY created_at DESC, id DESC
    LIMIT :limit
""")

_TOTAL_TICKETS_SQL = text("SELECT COALESCE(SUM(tickets), 0) AS total FROM trades")


def _row_to_trade(row: Any) -> Trade:
    return Trade(
        id=row.id,
        event_id=row.event_id,
        source=EventType(row.source),
        buyer_id=row.buyer_id,
        seller_id=row.seller_id,
        price=row.price,
        tickets=row.tickets,
        created_at=row.created_at,
    )


class TradeRepository:
    async def insert(self, db: AsyncSession, trade: Trade) -> Trade:
        result = await db.execute(
            _INSERT_SQL,
            {
                "id": trade.id,
                "event_id": trade.event_id,
                "source": trade.source.value,
                "buyer_id": trade.buyer_id,
                "seller_id": trade.seller_id,
                "price": trade.price,
                "tickets": trade.tickets,
            },
        )
        return _row_to_trade(result.fetchone())

    async def list_trades(
        self, db: AsyncSession, event_id: str | None, limit: int
    ) -> list[Trade]:
        result = await db.execute(_LIST_SQL, {"event_id": event_id, "limit": limit})
        return [_row_to_trade(row) for row in result.fetchall()]

    async def total_tickets(self, db: AsyncSession) -> int:
        result = await db.execute(_TOTAL_TICKETS_SQL)
        return int(result.scalar_one())
