"""summarize() - the per-event market view, recomputed from a posting snapshot."""

from collections.abc import Iterable
from decimal import Decimal

from src.tm_common.enums import EventType
from src.tm_market.domain.models import MarketSummary, PricePoint
from src.tm_market.engine.clearing import compute_clearing
from src.tm_market.engine.distribution import build_distribution
from src.tm_posting.domain.models import Posting


def summarize(
    event_id: str,
    postings: Iterable[Posting],
    face_value: Decimal | None = None,
    kind: EventType = EventType.CEILING,
) -> MarketSummary:
    """Pure; postings of other events are ignored."""
    own = [p for p in postings if p.event_id == event_id and p.kind is kind]
    summary = MarketSummary(
        event_id=event_id,
        kind=kind,
        buyers=sum(1 for p in own if p.is_buyer),
        sellers=sum(1 for p in own if p.is_seller),
    )

    if kind is EventType.MARKET:
        points = [
            PricePoint(
                price=p.price,
                role=p.role.value,
                label=p.description,
                username=p.contact.display_name,
            )
            for p in own
        ]
        summary.price_points = sorted(points, key=lambda pt: pt.price)
        return summary

    sellers = [p.percent for p in own if p.is_seller]
    buyers = [p.percent for p in own if p.is_buyer]
    summary.distribution = build_distribution(own)
    summary.curve, summary.clearing = compute_clearing(sellers, buyers, face_value)
    return summary
