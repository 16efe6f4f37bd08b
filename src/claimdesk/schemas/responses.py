# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Response values returned by the managers and the HTTP layer.

Each response is built by a pure mapping function from the stored record
plus whatever joined records it denormalizes. Looking those records up is
the caller's job.
"""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from beartype import beartype
from pydantic import BaseModel, ConfigDict, Field

from ..models.claim import Claim, ClaimStatus, RiskLevel
from ..models.policy import Policy, PolicyType
from ..models.user import User, UserRole


class _ResponseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )


@beartype
class UserResponse(_ResponseModel):
    """Public view of a user; the credential hash is never included."""

    id: UUID
    email: str
    first_name: str
    last_name: str
    phone: str | None = None
    role: UserRole
    is_active: bool
    last_login_at: datetime | None = None
    created_at: datetime


@beartype
class PolicyResponse(_ResponseModel):
    id: UUID
    policy_number: str
    owner_id: UUID
    customer_name: str | None = None
    policy_type: PolicyType
    coverage_amount: Decimal
    deductible: Decimal
    premium_amount: Decimal
    start_date: date
    end_date: date
    is_active: bool
    created_at: datetime
    updated_at: datetime


@beartype
class ClaimResponse(_ResponseModel):
    """Claim view with policy, customer and adjuster fields joined in."""

    id: UUID
    claim_number: str

    policy_id: UUID
    policy_number: str | None = None
    policy_type: PolicyType | None = None

    owner_id: UUID
    customer_name: str | None = None

    assigned_adjuster_id: UUID | None = None
    assigned_adjuster_name: str | None = None

    incident_date: date
    description: str
    location: str | None = None

    claimed_amount: Decimal
    approved_amount: Decimal | None = None
    deductible_amount: Decimal | None = None

    status: ClaimStatus
    risk_score: int = Field(..., ge=0)
    risk_level: RiskLevel
    fraud_flag: bool
    fraud_score: Decimal

    reported_at: datetime | None = None
    submitted_at: datetime | None = None
    reviewed_at: datetime | None = None
    closed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


@beartype
def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=str(user.email),
        first_name=user.first_name,
        last_name=user.last_name,
        phone=user.phone,
        role=user.role,
        is_active=user.is_active,
        last_login_at=user.last_login_at,
        created_at=user.created_at,
    )


@beartype
def to_policy_response(policy: Policy, owner: User | None = None) -> PolicyResponse:
    return PolicyResponse(
        id=policy.id,
        policy_number=policy.policy_number,
        owner_id=policy.owner_id,
        customer_name=owner.full_name if owner else None,
        policy_type=policy.policy_type,
        coverage_amount=policy.coverage_amount,
        deductible=policy.deductible,
        premium_amount=policy.premium_amount,
        start_date=policy.start_date,
        end_date=policy.end_date,
        is_active=policy.is_active,
        created_at=policy.created_at,
        updated_at=policy.updated_at,
    )


@beartype
def to_claim_response(
    claim: Claim,
    policy: Policy | None = None,
    owner: User | None = None,
    adjuster: User | None = None,
) -> ClaimResponse:
    """Build a claim response; absent joined records leave their fields empty."""
    return ClaimResponse(
        id=claim.id,
        claim_number=claim.claim_number,
        policy_id=claim.policy_id,
        policy_number=policy.policy_number if policy else None,
        policy_type=policy.policy_type if policy else None,
        owner_id=claim.owner_id,
        customer_name=owner.full_name if owner else None,
        assigned_adjuster_id=claim.assigned_adjuster_id,
        assigned_adjuster_name=adjuster.full_name if adjuster else None,
        incident_date=claim.incident_date,
        description=claim.description,
        location=claim.location,
        claimed_amount=claim.claimed_amount,
        approved_amount=claim.approved_amount,
        deductible_amount=claim.deductible_amount,
        status=claim.status,
        risk_score=claim.risk_score,
        risk_level=claim.risk_level,
        fraud_flag=claim.fraud_flag,
        fraud_score=claim.fraud_score,
        reported_at=claim.reported_at,
        submitted_at=claim.submitted_at,
        reviewed_at=claim.reviewed_at,
        closed_at=claim.closed_at,
        created_at=claim.created_at,
        updated_at=claim.updated_at,
    )
