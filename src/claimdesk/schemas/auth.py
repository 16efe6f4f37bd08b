# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Authentication schemas."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..models.user import UserCreate, UserRole


class CurrentUser(BaseModel):
    """Identity resolved by the upstream token layer."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    user_id: UUID = Field(..., description="Unique user identifier")
    role: UserRole = Field(..., description="Role granted by the token")


class LoginRecord(BaseModel):
    """Login stamp request sent after credentials were verified upstream."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    email: str = Field(..., min_length=3, max_length=255)


class RegistrationRequest(UserCreate):
    """Registration payload with the credential hash already computed."""

    password_hash: str = Field(..., min_length=1, max_length=255, repr=False)
