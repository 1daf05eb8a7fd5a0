"""Profile domain models - pure dataclasses."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Contact:
    """Contact snapshot copied onto postings at submit time.

    Postings hold a copy, not a reference; saving a profile re-syncs the copy
    on every live posting of that user.
    """

    display_name: str
    phone_e164: str | None = None
    email: str | None = None
    venmo_handle: str | None = None
    cohort: str | None = None


@dataclass
class Profile:
    user_id: str
    full_name: str
    school_email: str
    cohort: str
    phone_e164: str
    venmo_handle: str
    bio: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_contact(self) -> Contact:
        return Contact(
            display_name=self.full_name,
            phone_e164=self.phone_e164,
            email=self.school_email,
            venmo_handle=self.venmo_handle,
            cohort=self.cohort,
        )
