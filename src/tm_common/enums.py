"""Global enums - must match DB CHECK constraints exactly."""

from enum import Enum


class Role(str, Enum):
    BUYER = "buyer"
    SELLER = "seller"

    @property
    def opposite(self) -> "Role":
        return Role.SELLER if self is Role.BUYER else Role.BUYER


class EventType(str, Enum):
    """Pricing model of an event; selects the matching/aggregation variant."""
    CEILING = "ceiling"  # percent of face value
    MARKET = "market"    # explicit price


class SubmitOutcome(str, Enum):
    CREATED = "created"
    REPLACED = "replaced"


class PostingChange(str, Enum):
    """Operations published on the posting change feed."""
    CREATED = "created"
    REPLACED = "replaced"
    WITHDRAWN = "withdrawn"
    TRADED = "traded"
    SYNCED = "synced"
    EVENT_REMOVED = "event_removed"  # posting_id is None; every posting went with the event


class Cohort(str, Enum):
    WHARTON = "Wharton"
    PENN = "Penn"
    HBS = "HBS"
    GSB = "GSB"
    WG26 = "WG26"
    WG27 = "WG27"
