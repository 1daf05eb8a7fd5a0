from dataclasses import dataclass
from decimal import Decimal

from src.tm_posting.domain.models import Posting


@dataclass
class Match:
    """One compatible (mine, other) pair for the requesting owner."""

    mine: Posting
    other: Posting
    distance: Decimal  # |Δpercent| or |Δprice|; sort key and tier filter input
    agreed_tickets: int
    agreed_percent: int | None = None  # ceiling: always the seller's floor
    agreed_price: Decimal | None = None  # market: midpoint; ceiling: filled in by the service
