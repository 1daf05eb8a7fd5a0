"""Supply/demand curve and clearing percent for ceiling events."""

from collections.abc import Sequence
from decimal import Decimal

from src.tm_common.money import round2
from src.tm_market.domain.models import Clearing, CurvePoint

CURVE_MIN = 0
CURVE_MAX = 100


def build_curve(seller_percents: Sequence[int], buyer_percents: Sequence[int]) -> list[CurvePoint]:
    """One point per integer percent in [0, 100]."""
    curve: list[CurvePoint] = []
    for p in range(CURVE_MIN, CURVE_MAX + 1):
        supply = sum(1 for s in seller_percents if s <= p)
        demand = sum(1 for b in buyer_percents if b >= p)
        curve.append(CurvePoint(percent=p, supply=supply, demand=demand, matched=min(supply, demand)))
    return curve


def find_clearing_point(curve: Sequence[CurvePoint]) -> CurvePoint:
    """Max matched; ties -> smallest |supply - demand|; then the largest percent.

    An empty book ties everywhere and clears at 100.
    """
    return max(curve, key=lambda c: (c.matched, -abs(c.supply - c.demand), c.percent))


def spread_at(point: CurvePoint, seller_percents: Sequence[int]) -> Decimal:
    """Clearing percent minus the mean floor of the m cheapest eligible sellers."""
    m = min(point.supply, point.demand)
    if m == 0:
        return Decimal("0")
    cheapest = sorted(s for s in seller_percents if s <= point.percent)[:m]
    avg = Decimal(sum(cheapest)) / Decimal(m)
    return max(Decimal("0"), round2(Decimal(point.percent) - avg))


def compute_clearing(
    seller_percents: Sequence[int],
    buyer_percents: Sequence[int],
    face_value: Decimal | None = None,
) -> tuple[list[CurvePoint], Clearing]:
    curve = build_curve(seller_percents, buyer_percents)
    point = find_clearing_point(curve)
    spread = spread_at(point, seller_percents)
    clearing = Clearing(percent=point.percent, matched=point.matched, spread=spread)
    if face_value is not None:
        clearing.clearing_price = round2(face_value * point.percent / 100)
        clearing.spread_price = round2(face_value * spread / 100)
    return curve, clearing
