from src.tm_common.errors import InvalidMessageError


def check_message(message: str, max_length: int) -> str:
    """Return the trimmed message; raise InvalidMessageError(6001) if empty or too long."""
    trimmed = (message or "").strip()
    if not trimmed:
        raise InvalidMessageError("message is empty")
    if len(trimmed) > max_length:
        raise InvalidMessageError(f"max {max_length} characters")
    return trimmed
