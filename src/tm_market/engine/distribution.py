"""Percent histogram over ceiling postings: [50,60) ... [90,100) and {100}."""

from collections.abc import Iterable

from src.tm_market.domain.models import DistributionBucket
from src.tm_posting.domain.models import Posting

# (label, low inclusive, high exclusive); the last bucket is the single value 100
BUCKET_BOUNDS: tuple[tuple[str, int, int], ...] = (
    ("50-60%", 50, 60),
    ("60-70%", 60, 70),
    ("70-80%", 70, 80),
    ("80-90%", 80, 90),
    ("90-100%", 90, 100),
    ("100%", 100, 100),
)


def bucket_index(percent: int) -> int | None:
    """Index into BUCKET_BOUNDS; None below 50 (not charted)."""
    if percent >= 100:
        return len(BUCKET_BOUNDS) - 1
    if percent < 50:
        return None
    return (percent - 50) // 10


def build_distribution(postings: Iterable[Posting]) -> list[DistributionBucket]:
    buckets = [DistributionBucket(label, low, high) for label, low, high in BUCKET_BOUNDS]
    for p in postings:
        if p.percent is None:
            continue
        idx = bucket_index(p.percent)
        if idx is None:
            continue
        if p.is_seller:
            buckets[idx].sellers += 1
        else:
            buckets[idx].buyers += 1
    return buckets
