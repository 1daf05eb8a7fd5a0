"""Owner-centric matching: for each of my postings, every compatible posting of others."""

from collections.abc import Iterable

from src.tm_matching.domain.models import Match
from src.tm_matching.engine.policy import MatchPolicy
from src.tm_posting.domain.models import Posting
from src.tm_rules.rules.self_match import is_self_match


def compute_matches(
    owner_id: str,
    event_id: str,
    postings: Iterable[Posting],
    policy: MatchPolicy,
    limit: int | None = None,
) -> list[Match]:
    """Pure function; the input may span every user and event.

    Output order: owner postings in input order, and within each, candidates
    by ascending distance with input order breaking ties (sorted() is stable).
    ``limit`` caps the candidates kept per owner posting; None keeps all.
    """
    mine: list[Posting] = []
    others: list[Posting] = []
    for p in postings:
        if p.event_id != event_id or p.kind is not policy.kind:
            continue
        if is_self_match(owner_id, p.user_id):
            mine.append(p)
        else:
            others.append(p)

    matches: list[Match] = []
    for m in mine:
        candidates = [o for o in others if policy.is_compatible(m, o)]
        candidates = sorted(candidates, key=lambda o: policy.distance(m, o))
        if limit is not None:
            candidates = candidates[:limit]
        for o in candidates:
            terms = policy.agree(m, o)
            matches.append(
                Match(
                    mine=m,
                    other=o,
                    distance=policy.distance(m, o),
                    agreed_tickets=min(m.tickets, o.tickets),
                    agreed_percent=terms.percent,
                    agreed_price=terms.price,
                )
            )
    return matches
