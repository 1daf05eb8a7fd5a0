"""Tests for tm_rules validation rules."""

from decimal import Decimal

import pytest

from src.tm_common.enums import EventType
from src.tm_common.errors import (
    InvalidMessageError,
    InvalidPostingError,
    PercentOutOfRangeError,
    PriceOutOfRangeError,
    TicketLimitExceededError,
)
from src.tm_rules.rules.message_length import check_message
from src.tm_rules.rules.percent_range import check_percent_range
from src.tm_rules.rules.posting_shape import check_posting_shape
from src.tm_rules.rules.price_range import check_price_positive
from src.tm_rules.rules.self_match import is_self_match
from src.tm_rules.rules.ticket_limit import check_ticket_limit


class TestPercentRange:
    @pytest.mark.parametrize("percent", [0, 50, 100])
    def test_bounds_accepted(self, percent: int) -> None:
        check_percent_range(percent)

    @pytest.mark.parametrize("percent", [-1, 101])
    def test_outside_rejected(self, percent: int) -> None:
        with pytest.raises(PercentOutOfRangeError):
            check_percent_range(percent)


class TestPricePositive:
    def test_positive_ok(self) -> None:
        check_price_positive(Decimal("0.01"))

    @pytest.mark.parametrize("price", [Decimal("0"), Decimal("-5"), Decimal("NaN")])
    def test_non_positive_rejected(self, price: Decimal) -> None:
        with pytest.raises(PriceOutOfRangeError):
            check_price_positive(price)

    def test_largest_storable_price_ok(self) -> None:
        check_price_positive(Decimal("9999999999.99"))

    @pytest.mark.parametrize(
        "price",
        [Decimal("1e30"), Decimal("100000000000"), Decimal("9999999999.995"), Decimal("Infinity")],
    )
    def test_oversized_rejected(self, price: Decimal) -> None:
        with pytest.raises(PriceOutOfRangeError):
            check_price_positive(price)

    def test_rounds_to_zero_rejected(self) -> None:
        with pytest.raises(PriceOutOfRangeError):
            check_price_positive(Decimal("0.004"))


class TestTicketLimit:
    def test_one_ticket_ok(self) -> None:
        check_ticket_limit(1, 1)

    @pytest.mark.parametrize("tickets", [0, 2])
    def test_outside_rejected(self, tickets: int) -> None:
        with pytest.raises(TicketLimitExceededError):
            check_ticket_limit(tickets, 1)


class TestPostingShape:
    def test_ceiling_needs_percent(self) -> None:
        with pytest.raises(InvalidPostingError):
            check_posting_shape(EventType.CEILING, None, None)

    def test_ceiling_rejects_price(self) -> None:
        with pytest.raises(InvalidPostingError):
            check_posting_shape(EventType.CEILING, 80, Decimal("10"))

    def test_market_needs_price(self) -> None:
        with pytest.raises(InvalidPostingError):
            check_posting_shape(EventType.MARKET, None, None)

    def test_market_rejects_percent(self) -> None:
        with pytest.raises(InvalidPostingError):
            check_posting_shape(EventType.MARKET, 80, Decimal("10"))

    def test_valid_shapes(self) -> None:
        check_posting_shape(EventType.CEILING, 80, None)
        check_posting_shape(EventType.MARKET, None, Decimal("10"))


class TestSelfMatch:
    def test_same_owner_case_insensitive(self) -> None:
        assert is_self_match("ABC-1", "abc-1")

    def test_different_owner(self) -> None:
        assert not is_self_match("user-a", "user-b")


class TestMessage:
    def test_trimmed(self) -> None:
        assert check_message("  hi there  ", 250) == "hi there"

    def test_blank_rejected(self) -> None:
        with pytest.raises(InvalidMessageError):
            check_message("   ", 250)

    def test_too_long_rejected(self) -> None:
        with pytest.raises(InvalidMessageError):
            check_message("x" * 251, 250)

    def test_exact_limit_ok(self) -> None:
        assert len(check_message("x" * 250, 250)) == 250
