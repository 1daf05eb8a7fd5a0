from src.tm_common.errors import TicketLimitExceededError


def check_ticket_limit(tickets: int, limit: int) -> None:
    """Raise TicketLimitExceededError(4003) if tickets is not in [1, limit]."""
    if not (1 <= tickets <= limit):
        raise TicketLimitExceededError(tickets, limit)
