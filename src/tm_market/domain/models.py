"""Domain models for tm_market - pure dataclasses, no business logic."""

from dataclasses import dataclass, field
from decimal import Decimal

from src.tm_common.enums import EventType


@dataclass
class DistributionBucket:
    label: str  # "50-60%" ... "100%"
    low: int  # inclusive
    high: int  # exclusive, except the {100} bucket where low == high == 100
    sellers: int = 0
    buyers: int = 0

    @property
    def seller_bar(self) -> int:
        """Sellers plotted below the axis."""
        return -self.sellers


@dataclass
class CurvePoint:
    percent: int
    supply: int  # sellers with percent <= p
    demand: int  # buyers with percent >= p
    matched: int


@dataclass
class Clearing:
    percent: int
    matched: int
    spread: Decimal  # clearing percent minus average matched seller floor
    clearing_price: Decimal | None = None  # only with a known face value
    spread_price: Decimal | None = None


@dataclass
class PricePoint:
    """One market-event posting as plotted on the price axis."""

    price: Decimal
    role: str
    label: str | None
    username: str


@dataclass
class MarketSummary:
    event_id: str
    kind: EventType
    distribution: list[DistributionBucket] = field(default_factory=list)
    curve: list[CurvePoint] = field(default_factory=list)
    clearing: Clearing | None = None
    price_points: list[PricePoint] = field(default_factory=list)
    buyers: int = 0
    sellers: int = 0
