# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""User domain models for identity and role-based authorization."""

from datetime import datetime
from enum import Enum

from beartype import beartype
from pydantic import EmailStr, Field, field_validator

from .base import BaseModelConfig, IdentifiableModel


class UserRole(str, Enum):
    """Closed set of roles understood by the access policy."""

    CUSTOMER = "CUSTOMER"
    AGENT = "AGENT"
    ADJUSTER = "ADJUSTER"
    ADMIN = "ADMIN"


@beartype
class UserBase(BaseModelConfig):
    """Base user attributes shared across all user operations."""

    email: EmailStr = Field(..., description="User's email address")

    first_name: str = Field(
        ..., min_length=1, max_length=100, description="User's first name"
    )

    last_name: str = Field(
        ..., min_length=1, max_length=100, description="User's last name"
    )

    phone: str | None = Field(
        default=None, max_length=20, description="Contact phone number"
    )

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are unique case-insensitively, so store them lower-cased."""
        return str(v).lower()


@beartype
class UserCreate(UserBase):
    """Registration request.

    The plain password never reaches this core; the credential component
    hashes it and hands over only the opaque hash.
    """


@beartype
class User(UserBase, IdentifiableModel):
    """Complete user record."""

    role: UserRole = Field(default=UserRole.CUSTOMER, description="Role in the system")

    is_active: bool = Field(default=True, description="Whether the account may log in")

    last_login_at: datetime | None = Field(
        default=None, description="Timestamp of last login"
    )

    password_hash: str = Field(
        ...,
        exclude=True,
        repr=False,
        description="Opaque credential hash (internal use only)",
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
