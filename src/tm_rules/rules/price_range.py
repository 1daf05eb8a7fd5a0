from decimal import Decimal

from src.tm_common.errors import PriceOutOfRangeError
from src.tm_common.money import MAX_AMOUNT, round2


def check_price_positive(price: Decimal) -> None:
    """Raise PriceOutOfRangeError(4002) unless 0 < price <= MAX_AMOUNT after rounding to cents."""
    if not price.is_finite() or price <= 0 or price > MAX_AMOUNT:
        raise PriceOutOfRangeError(price)
    if round2(price) <= 0:
        raise PriceOutOfRangeError(price)
