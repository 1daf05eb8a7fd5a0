"""Match policies - one per event pricing model.

A policy bundles the three things that differ between ceiling and market
events: the compatibility test, the distance used for ordering, and the rule
that turns a pair into agreed terms. The engine loop itself is shared.
"""

from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from src.tm_common.enums import EventType
from src.tm_common.money import midpoint
from src.tm_posting.domain.models import Posting


@dataclass(frozen=True)
class Terms:
    percent: int | None = None
    price: Decimal | None = None


@dataclass(frozen=True)
class MatchPolicy:
    kind: EventType
    is_compatible: Callable[[Posting, Posting], bool]
    distance: Callable[[Posting, Posting], Decimal]
    agree: Callable[[Posting, Posting], Terms]


def _split(mine: Posting, other: Posting) -> tuple[Posting, Posting]:
    """(buyer, seller) of a role-mismatched pair."""
    return (mine, other) if mine.is_buyer else (other, mine)


# --- ceiling: percent of face value --------------------------------------


def _ceiling_compatible(mine: Posting, other: Posting) -> bool:
    if mine.role is other.role:
        return False
    buyer, seller = _split(mine, other)
    return buyer.percent >= seller.percent


def _ceiling_distance(mine: Posting, other: Posting) -> Decimal:
    return Decimal(abs(mine.percent - other.percent))


def _ceiling_terms(mine: Posting, other: Posting) -> Terms:
    # compatible pairs always have seller <= buyer, so min() is the seller's floor
    return Terms(percent=min(mine.percent, other.percent))


CEILING_POLICY = MatchPolicy(
    kind=EventType.CEILING,
    is_compatible=_ceiling_compatible,
    distance=_ceiling_distance,
    agree=_ceiling_terms,
)


# --- market: explicit price ----------------------------------------------


def _market_compatible(mine: Posting, other: Posting) -> bool:
    return mine.role is not other.role


def _market_distance(mine: Posting, other: Posting) -> Decimal:
    return abs(mine.price - other.price)


def _market_terms(mine: Posting, other: Posting) -> Terms:
    return Terms(price=midpoint(mine.price, other.price))


MARKET_POLICY = MatchPolicy(
    kind=EventType.MARKET,
    is_compatible=_market_compatible,
    distance=_market_distance,
    agree=_market_terms,
)


_POLICIES = {
    EventType.CEILING: CEILING_POLICY,
    EventType.MARKET: MARKET_POLICY,
}


def policy_for(event_type: EventType) -> MatchPolicy:
    return _POLICIES[event_type]
