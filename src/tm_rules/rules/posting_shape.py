"""A posting must carry the price field its event's pricing model uses."""
from decimal import Decimal

from src.tm_common.enums import EventType
from src.tm_common.errors import InvalidPostingError


def check_posting_shape(
    event_type: EventType, percent: int | None, price: Decimal | None
) -> None:
    """Ceiling events take percent only; market events take price only."""
    if event_type is EventType.CEILING:
        if percent is None:
            raise InvalidPostingError("ceiling events require percent")
        if price is not None:
            raise InvalidPostingError("ceiling events do not accept price")
    else:
        if price is None:
            raise InvalidPostingError("market events require price")
        if percent is not None:
            raise InvalidPostingError("market events do not accept percent")
