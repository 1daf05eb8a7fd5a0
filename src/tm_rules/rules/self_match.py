"""Self-match detection: a user's postings never match each other."""


def is_self_match(owner_id: str, counterpart_owner_id: str) -> bool:
    """UUID comparison is case-insensitive."""
    return str(owner_id).lower() == str(counterpart_owner_id).lower()
