"""Tests for the supply/demand curve, clearing point and spread."""

from decimal import Decimal

from src.tm_common.enums import EventType, Role
from src.tm_market.engine.aggregator import summarize
from src.tm_market.engine.clearing import build_curve, compute_clearing, find_clearing_point
from tests.factories import make_posting


class TestCurve:
    def test_has_one_point_per_percent(self) -> None:
        curve = build_curve([], [])
        assert [c.percent for c in curve] == list(range(101))

    def test_supply_and_demand_counts(self) -> None:
        curve = build_curve([50, 55, 60], [55, 60, 65])
        point = curve[55]
        assert (point.supply, point.demand, point.matched) == (2, 3, 2)


class TestClearing:
    def test_empty_book_clears_at_hundred(self) -> None:
        assert find_clearing_point(build_curve([], [])).percent == 100

    def test_balanced_point_beats_larger_imbalance(self) -> None:
        # matched == 2 on 55..60; supply == demand only at 59
        _, clearing = compute_clearing([50, 55, 60], [55, 60, 65])
        assert clearing.percent == 59
        assert clearing.matched == 2

    def test_ties_resolve_to_largest_percent(self) -> None:
        # matched == 2 and supply == demand everywhere on 60..70
        _, clearing = compute_clearing([50, 60], [70, 80])
        assert clearing.percent == 70
        assert clearing.matched == 2

    def test_no_overlap_prefers_balance(self) -> None:
        _, clearing = compute_clearing([70, 80], [50, 60])
        assert clearing.matched == 0
        assert clearing.percent == 69


class TestSpread:
    def test_spread_over_cheapest_matched_sellers(self) -> None:
        _, clearing = compute_clearing([50, 55, 60], [55, 60, 65])
        assert clearing.spread == Decimal("6.5")

    def test_zero_when_nothing_matches(self) -> None:
        _, clearing = compute_clearing([70, 80], [50, 60])
        assert clearing.spread == Decimal("0")

    def test_prices_need_face_value(self) -> None:
        _, clearing = compute_clearing([50, 55, 60], [55, 60, 65])
        assert clearing.clearing_price is None
        assert clearing.spread_price is None

    def test_prices_from_face_value(self) -> None:
        _, clearing = compute_clearing([50, 55, 60], [55, 60, 65], face_value=Decimal("200"))
        assert clearing.clearing_price == Decimal("118.00")
        assert clearing.spread_price == Decimal("13.00")


class TestSummarize:
    def test_ceiling_summary(self) -> None:
        postings = [
            make_posting("s1", "u1", Role.SELLER, percent=50),
            make_posting("s2", "u2", Role.SELLER, percent=55),
            make_posting("s3", "u3", Role.SELLER, percent=60),
            make_posting("b1", "u4", Role.BUYER, percent=55),
            make_posting("b2", "u5", Role.BUYER, percent=60),
            make_posting("b3", "u6", Role.BUYER, percent=65),
            make_posting("x1", "u7", Role.BUYER, percent=99, event_id="evt-other"),
        ]
        summary = summarize("evt-1", postings)
        assert (summary.buyers, summary.sellers) == (3, 3)
        assert summary.clearing.percent == 59
        assert len(summary.curve) == 101
        assert summary.price_points == []

    def test_market_summary_lists_sorted_price_points(self) -> None:
        postings = [
            make_posting("s1", "u1", Role.SELLER, price="45", description="Row A"),
            make_posting("b1", "u2", Role.BUYER, price="30"),
            make_posting("s2", "u3", Role.SELLER, price="38.50", description="GA"),
        ]
        summary = summarize("evt-1", postings, kind=EventType.MARKET)
        assert [p.price for p in summary.price_points] == [
            Decimal("30"), Decimal("38.50"), Decimal("45"),
        ]
        assert summary.price_points[1].label == "GA"
        assert summary.price_points[1].role == "seller"
        assert summary.price_points[0].username == "U2 Example"
        assert (summary.buyers, summary.sellers) == (1, 2)
        assert summary.clearing is None
        assert summary.curve == []
