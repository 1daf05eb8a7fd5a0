"""Trade record - one row per completed hand-off."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.tm_common.enums import EventType


@dataclass
class Trade:
    id: str
    event_id: str
    source: EventType  # pricing model of the posting that traded
    price: Decimal
    tickets: int
    buyer_id: str | None = None  # None when only the seller side confirmed
    seller_id: str | None = None
    created_at: datetime | None = None
