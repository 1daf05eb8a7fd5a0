"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Profile
  3xxx: Event
  4xxx: Posting
  5xxx: Trade
  6xxx: Chat
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class UsernameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Username already exists", 409)


class EmailExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1002, "Email already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 403)


class InvalidRefreshTokenError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "Refresh token is invalid or expired", 401)


class AdminRequiredError(AppError):
    def __init__(self) -> None:
        super().__init__(1006, "Admin privileges required", 403)


# --- 2xxx: Profile ---

class ProfileNotFoundError(AppError):
    def __init__(self, user_id: str) -> None:
        super().__init__(2001, f"Profile not found for user {user_id}", 404)


# --- 3xxx: Event ---

class EventNotFoundError(AppError):
    def __init__(self, event_id: str) -> None:
        super().__init__(3001, f"Event not found: {event_id}", 404)


class EventExistsError(AppError):
    def __init__(self, event_id: str) -> None:
        super().__init__(3002, f"Event already exists: {event_id}", 409)


# --- 4xxx: Posting ---

class PercentOutOfRangeError(AppError):
    def __init__(self, percent: int) -> None:
        super().__init__(4001, f"Percent out of range [0, 100]: {percent}", 422)


class PriceOutOfRangeError(AppError):
    def __init__(self, price: object) -> None:
        super().__init__(4002, f"Price must be in (0, 9999999999.99]: {price}", 422)


class TicketLimitExceededError(AppError):
    def __init__(self, tickets: int, limit: int) -> None:
        super().__init__(4003, f"Tickets {tickets} must be in [1, {limit}]", 422)


class PostingNotFoundError(AppError):
    def __init__(self, posting_id: str) -> None:
        super().__init__(4004, f"Posting not found: {posting_id}", 404)


class PostingNotOwnedError(AppError):
    def __init__(self, posting_id: str) -> None:
        super().__init__(4005, f"Posting {posting_id} belongs to another user", 403)


class InvalidPostingError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4006, f"Invalid posting: {detail}", 422)


# --- 5xxx: Trade ---

class TradeConsistencyError(AppError):
    """Trade recording and posting removal did not both complete."""

    def __init__(self, posting_id: str) -> None:
        super().__init__(
            5001,
            f"Posting {posting_id} could not be withdrawn; trade not recorded",
            409,
        )


class SelfTradeError(AppError):
    def __init__(self) -> None:
        super().__init__(5002, "Cannot record a trade with yourself", 422)


# --- 6xxx: Chat ---

class InvalidMessageError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(6001, f"Invalid message: {detail}", 422)


class MessageNotFoundError(AppError):
    def __init__(self, message_id: str) -> None:
        super().__init__(6002, f"Chat message not found: {message_id}", 404)


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
