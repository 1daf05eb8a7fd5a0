from src.tm_common.errors import PercentOutOfRangeError

MIN_PERCENT = 0
MAX_PERCENT = 100


def check_percent_range(percent: int) -> None:
    """Raise PercentOutOfRangeError(4001) if percent is not in [0, 100]."""
    if not (MIN_PERCENT <= percent <= MAX_PERCENT):
        raise PercentOutOfRangeError(percent)
