# src/tm_profile/application/schemas.py
"""Profile form validation.

The phone number arrives as a country calling code plus the typed digits and
is stored in E.164 form; the Venmo handle is stored without a leading "@".
"""

import re

from pydantic import BaseModel, Field, field_validator, model_validator

from src.tm_common.datetime_utils import iso_or_none
from src.tm_common.enums import Cohort
from src.tm_profile.domain.models import Profile

_FULL_NAME_RE = re.compile(r"^[A-Za-z]+ [A-Za-z]+$")
_VENMO_RE = re.compile(r"^[A-Za-z0-9!@#$%^&*()_+\-=.:@]{2,64}$")
_E164_RE = re.compile(r"^\+\d{6,16}$")


def normalize_full_name(value: str) -> str:
    return re.sub(r"\s+", " ", (value or "").strip())


def normalize_venmo(value: str) -> str:
    return (value or "").strip().removeprefix("@")


def build_e164(area_code: str, digits: str) -> str:
    """"+1", "(215) 555-0100" -> "+12155550100"."""
    only_digits = re.sub(r"\D+", "", digits or "")
    code = area_code.strip()
    if not code.startswith("+"):
        code = "+" + re.sub(r"\D+", "", code)
    return f"{code}{only_digits}"


class SaveProfileRequest(BaseModel):
    full_name: str
    school_email: str = Field(..., max_length=254)
    cohort: Cohort
    area_code: str = "+1"
    phone_digits: str
    venmo_handle: str
    bio: str = Field(..., max_length=1000)

    @field_validator("full_name")
    @classmethod
    def first_and_last_name(cls, v: str) -> str:
        v = normalize_full_name(v)
        if not _FULL_NAME_RE.match(v):
            raise ValueError("full name must be 'First Last'")
        return v

    @field_validator("school_email")
    @classmethod
    def edu_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v or not v.lower().endswith(".edu"):
            raise ValueError("school email must end in .edu")
        return v

    @field_validator("venmo_handle")
    @classmethod
    def venmo_handle_format(cls, v: str) -> str:
        v = normalize_venmo(v)
        if not _VENMO_RE.match(v):
            raise ValueError("invalid Venmo handle")
        return v

    @field_validator("bio")
    @classmethod
    def bio_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("bio is required")
        return v

    @model_validator(mode="after")
    def phone_is_e164(self) -> "SaveProfileRequest":
        if not _E164_RE.match(self.phone_e164):
            raise ValueError("invalid phone number")
        return self

    @property
    def phone_e164(self) -> str:
        return build_e164(self.area_code, self.phone_digits)

    def to_domain(self, user_id: str) -> Profile:
        return Profile(
            user_id=user_id,
            full_name=self.full_name,
            school_email=self.school_email,
            cohort=self.cohort.value,
            phone_e164=self.phone_e164,
            venmo_handle=self.venmo_handle,
            bio=self.bio,
        )


class ProfileOut(BaseModel):
    user_id: str
    full_name: str
    school_email: str
    cohort: str
    phone_e164: str
    venmo_handle: str
    bio: str
    created_at: str | None
    updated_at: str | None

    @classmethod
    def from_domain(cls, p: Profile) -> "ProfileOut":
        return cls(
            user_id=p.user_id,
            full_name=p.full_name,
            school_email=p.school_email,
            cohort=p.cohort,
            phone_e164=p.phone_e164,
            venmo_handle=p.venmo_handle,
            bio=p.bio,
            created_at=iso_or_none(p.created_at),
            updated_at=iso_or_none(p.updated_at),
        )


class SaveProfileResponse(BaseModel):
    profile: ProfileOut
    postings_synced: int
