"""Visibility post-filter over the engine's full output."""

from dataclasses import dataclass
from decimal import Decimal

from config.settings import settings
from src.tm_matching.domain.models import Match


@dataclass(frozen=True)
class TierPolicy:
    max_matches_per_posting: int | None = None  # None = unbounded
    max_distance: Decimal | None = None


def configured_tier() -> TierPolicy:
    """Limits from MATCH_LIMIT_PER_POSTING / MATCH_MAX_DISTANCE; unbounded by default."""
    return TierPolicy(
        max_matches_per_posting=settings.MATCH_LIMIT_PER_POSTING,
        max_distance=settings.MATCH_MAX_DISTANCE,
    )


def apply_tier(matches: list[Match], tier: TierPolicy) -> list[Match]:
    """Drop matches beyond max_distance, then keep the first N per owner posting.

    Relies on the engine's per-posting ordering (nearest first).
    """
    kept: list[Match] = []
    per_posting: dict[str, int] = {}
    for match in matches:
        if tier.max_distance is not None and match.distance > tier.max_distance:
            continue
        seen = per_posting.get(match.mine.id, 0)
        if tier.max_matches_per_posting is not None and seen >= tier.max_matches_per_posting:
            continue
        per_posting[match.mine.id] = seen + 1
        kept.append(match)
    return kept
