# src/tm_trade/application/schemas.py
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from src.tm_common.datetime_utils import iso_or_none
from src.tm_common.enums import Role
from src.tm_common.money import MAX_AMOUNT, to_display
from src.tm_trade.domain.models import Trade


class RecordTradeRequest(BaseModel):
    """"We traded" confirmation: the caller plus their counterpart."""

    event_id: str = Field(..., min_length=1)
    counterpart_id: str = Field(..., min_length=1)
    role: Role  # the caller's side of the trade
    price: Decimal = Field(..., gt=0, le=MAX_AMOUNT)
    tickets: int = Field(1, ge=1)

    @model_validator(mode="after")
    def round_price(self) -> "RecordTradeRequest":
        self.price = self.price.quantize(Decimal("0.01"))
        return self


class TradeOut(BaseModel):
    id: str
    event_id: str
    source: str
    buyer_id: str | None
    seller_id: str | None
    price: Decimal
    price_display: str
    tickets: int
    created_at: str | None

    @classmethod
    def from_domain(cls, t: Trade) -> "TradeOut":
        return cls(
            id=t.id,
            event_id=t.event_id,
            source=t.source.value,
            buyer_id=t.buyer_id,
            seller_id=t.seller_id,
            price=t.price,
            price_display=to_display(t.price),
            tickets=t.tickets,
            created_at=iso_or_none(t.created_at),
        )


class TradeListResponse(BaseModel):
    items: list[TradeOut]


class TradeStatsResponse(BaseModel):
    total_traded_tickets: int
