"""Pydantic schemas for accounts and profiles.

Emails are normalised (stripped, lower-cased) at the edge so the
credential store only ever sees one spelling of an address.
"""

from typing import Optional

from pydantic import Field, field_validator

from castline.db.models import UserRole
from castline.schemas.common import CAMEL, CamelModel, CoreOutput


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("Invalid email address")
    return value


# ─── Inputs ─────────────────────────────────────────────


class CreateAccountInput(CamelModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1)
    role: UserRole

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class LoginInput(CamelModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class SeeProfileInput(CamelModel):
    user_id: int


class EditProfileInput(CamelModel):
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(None, min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return _normalize_email(v) if v is not None else None


# ─── Outputs ────────────────────────────────────────────


class UserRead(CamelModel):
    """Public view of a user. The password hash never leaves the service."""

    id: int
    email: str
    role: UserRole

    model_config = {**CAMEL, "from_attributes": True}


class LoginOutput(CoreOutput):
    token: Optional[str] = None


class UserProfileOutput(CoreOutput):
    user: Optional[UserRead] = None
