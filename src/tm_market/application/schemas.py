"""Pydantic schemas for the market summary.

Ceiling events fill distribution/curve/clearing; market events fill
price_points. Both carry buyer and seller counts.
"""

from decimal import Decimal

from pydantic import BaseModel

from src.tm_common.enums import EventType
from src.tm_common.money import to_display
from src.tm_market.domain.models import (
    Clearing,
    CurvePoint,
    DistributionBucket,
    MarketSummary,
    PricePoint,
)


class BucketOut(BaseModel):
    label: str
    sellers: int
    buyers: int
    seller_bar: int

    @classmethod
    def from_domain(cls, b: DistributionBucket) -> "BucketOut":
        return cls(label=b.label, sellers=b.sellers, buyers=b.buyers, seller_bar=b.seller_bar)


class CurvePointOut(BaseModel):
    percent: int
    supply: int
    demand: int
    matched: int

    @classmethod
    def from_domain(cls, c: CurvePoint) -> "CurvePointOut":
        return cls(percent=c.percent, supply=c.supply, demand=c.demand, matched=c.matched)


class ClearingOut(BaseModel):
    percent: int
    matched: int
    spread: Decimal
    clearing_price: Decimal | None
    clearing_price_display: str | None
    spread_price: Decimal | None
    spread_price_display: str | None

    @classmethod
    def from_domain(cls, c: Clearing) -> "ClearingOut":
        return cls(
            percent=c.percent,
            matched=c.matched,
            spread=c.spread,
            clearing_price=c.clearing_price,
            clearing_price_display=(
                to_display(c.clearing_price) if c.clearing_price is not None else None
            ),
            spread_price=c.spread_price,
            spread_price_display=to_display(c.spread_price) if c.spread_price is not None else None,
        )


class PricePointOut(BaseModel):
    price: Decimal
    price_display: str
    role: str
    label: str | None
    username: str

    @classmethod
    def from_domain(cls, p: PricePoint) -> "PricePointOut":
        return cls(
            price=p.price,
            price_display=to_display(p.price),
            role=p.role,
            label=p.label,
            username=p.username,
        )


class MarketSummaryResponse(BaseModel):
    event_id: str
    kind: EventType
    buyers: int
    sellers: int
    distribution: list[BucketOut]
    curve: list[CurvePointOut]
    clearing: ClearingOut | None
    price_points: list[PricePointOut]

    @classmethod
    def from_domain(cls, s: MarketSummary) -> "MarketSummaryResponse":
        return cls(
            event_id=s.event_id,
            kind=s.kind,
            buyers=s.buyers,
            sellers=s.sellers,
            distribution=[BucketOut.from_domain(b) for b in s.distribution],
            curve=[CurvePointOut.from_domain(c) for c in s.curve],
            clearing=ClearingOut.from_domain(s.clearing) if s.clearing is not None else None,
            price_points=[PricePointOut.from_domain(p) for p in s.price_points],
        )
