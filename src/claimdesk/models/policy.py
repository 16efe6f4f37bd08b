# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Policy domain models with monetary bounds and a validity window.

This module defines the policy creation request and the stored policy
record. Date ordering and the policy type name are checked by the policy
manager, so a bad request is reported as a business error rather than a
schema error.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from uuid import UUID

from beartype import beartype
from pydantic import Field, model_validator

from .base import BaseModelConfig, IdentifiableModel


class PolicyType(str, Enum):
    """Enumeration of available policy types."""

    AUTO = "AUTO"
    HOME = "HOME"
    HEALTH = "HEALTH"
    LIFE = "LIFE"
    BUSINESS = "BUSINESS"


@beartype
class PolicyCreate(BaseModelConfig):
    """Model for creating a new policy on behalf of a user."""

    user_id: UUID = Field(..., description="Owner of the new policy")

    policy_type: str = Field(
        ..., min_length=1, max_length=20, description="Policy type name"
    )

    coverage_amount: Decimal = Field(
        ...,
        ge=Decimal("1000.00"),
        le=Decimal("99999999.99"),
        decimal_places=2,
        max_digits=12,
        description="Maximum coverage amount",
    )

    deductible: Decimal = Field(
        ...,
        ge=Decimal("0.00"),
        decimal_places=2,
        max_digits=10,
        description="Policy deductible amount",
    )

    premium_amount: Decimal = Field(
        ...,
        ge=Decimal("1.00"),
        decimal_places=2,
        max_digits=10,
        description="Premium amount",
    )

    start_date: date = Field(..., description="Date when coverage begins")

    end_date: date = Field(..., description="Date when coverage ends")


@beartype
class Policy(IdentifiableModel):
    """Complete policy record."""

    policy_number: str = Field(
        ..., min_length=5, max_length=50, description="Unique policy number"
    )

    owner_id: UUID = Field(..., description="Policy holder")

    policy_type: PolicyType = Field(..., description="Type of insurance policy")

    coverage_amount: Decimal = Field(
        ..., gt=Decimal("0"), decimal_places=2, max_digits=12
    )

    deductible: Decimal = Field(..., ge=Decimal("0"), decimal_places=2, max_digits=10)

    premium_amount: Decimal = Field(
        ..., gt=Decimal("0"), decimal_places=2, max_digits=10
    )

    start_date: date = Field(..., description="Date when coverage begins")

    end_date: date = Field(..., description="Date when coverage ends")

    is_active: bool = Field(default=True, description="Whether claims may be filed")

    @model_validator(mode="after")
    def validate_dates(self) -> "Policy":
        """Ensure end date is after start date."""
        if self.end_date <= self.start_date:
            raise ValueError("End date must be after start date")
        return self
