from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.tm_trade.domain.models import Trade


class TradeRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, trade: Trade) -> Trade: ...

    async def list_trades(
        self, db: AsyncSession, event_id: str | None, limit: int
    ) -> list[Trade]: ...

    async def total_tickets(self, db: AsyncSession) -> int:
        """Global traded-ticket counter: SUM(tickets) over all trades."""
        ...
