# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Claim domain models with lifecycle status and risk assessment fields.

This module defines the claim submission request, the status update
request used by adjusters, and the stored claim record itself.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

from beartype import beartype
from pydantic import Field, field_validator

from .base import BaseModelConfig, IdentifiableModel


class ClaimStatus(str, Enum):
    """Enumeration of claim processing states."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    INVESTIGATING = "INVESTIGATING"
    APPROVED = "APPROVED"
    DENIED = "DENIED"
    CLOSED = "CLOSED"


class RiskLevel(str, Enum):
    """Ordinal scrutiny priority, also used as fraud alert severity."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


@beartype
class ClaimCreate(BaseModelConfig):
    """Model for submitting a new claim against a policy."""

    policy_id: UUID = Field(..., description="Policy the claim is filed under")

    incident_date: date = Field(..., description="Date when the incident occurred")

    description: str = Field(
        ...,
        min_length=10,
        max_length=5000,
        description="Detailed description of the incident",
    )

    location: str | None = Field(
        None, max_length=255, description="Location where the incident occurred"
    )

    claimed_amount: Decimal = Field(
        ...,
        ge=Decimal("0.01"),
        le=Decimal("9999999999.99"),
        decimal_places=2,
        max_digits=12,
        description="Amount being claimed",
    )

    @field_validator("incident_date")
    @classmethod
    def validate_incident_date(cls, v: date) -> date:
        """Ensure incident date is not in the future."""
        if v > date.today():
            raise ValueError("Incident date cannot be in the future")
        return v


@beartype
class ClaimStatusUpdate(BaseModelConfig):
    """Status change requested by an adjuster or admin.

    ``status`` stays a plain string: an unknown name is a business error
    reported by the lifecycle manager, not a schema failure.
    """

    status: str = Field(..., max_length=32, description="New status name")

    notes: str | None = Field(
        None, max_length=1000, description="Notes about the status update"
    )

    approved_amount: Decimal | None = Field(
        None,
        decimal_places=2,
        max_digits=12,
        description="Approved amount, applied as given",
    )

    assigned_adjuster_id: UUID | None = Field(
        None, description="Adjuster to assign to the claim"
    )


@beartype
class Claim(IdentifiableModel):
    """Complete claim record."""

    claim_number: str = Field(
        ..., min_length=5, max_length=50, description="Unique claim number"
    )

    policy_id: UUID = Field(..., description="Policy the claim is filed under")

    owner_id: UUID = Field(..., description="User who filed the claim")

    assigned_adjuster_id: UUID | None = Field(
        None, description="Adjuster handling the claim"
    )

    incident_date: date = Field(..., description="Date when the incident occurred")

    description: str = Field(..., min_length=1, max_length=5000)

    location: str | None = Field(None, max_length=255)

    claimed_amount: Decimal = Field(
        ..., gt=Decimal("0"), decimal_places=2, max_digits=12
    )

    approved_amount: Decimal | None = Field(None, decimal_places=2, max_digits=12)

    deductible_amount: Decimal | None = Field(
        None, ge=Decimal("0"), decimal_places=2, max_digits=10
    )

    status: ClaimStatus = Field(default=ClaimStatus.DRAFT)

    risk_score: int = Field(default=0, ge=0)

    risk_level: RiskLevel = Field(default=RiskLevel.LOW)

    fraud_flag: bool = Field(default=False)

    fraud_score: Decimal = Field(
        default=Decimal("0.00"),
        ge=Decimal("0"),
        le=Decimal("100"),
        decimal_places=2,
        max_digits=5,
    )

    reported_at: datetime | None = Field(None, description="When the loss was reported")
    submitted_at: datetime | None = Field(None, description="When the claim was submitted")
    reviewed_at: datetime | None = Field(None, description="First entry into review")
    closed_at: datetime | None = Field(None, description="Last decision or closure")
