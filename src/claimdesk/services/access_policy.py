# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Role-based authorization predicates.

All role checks in ClaimDesk go through this module. Staff roles read any
record of their area; everybody else reads only what they own.
"""

from typing import Final
from uuid import UUID

from beartype import beartype

from ..models.claim import Claim
from ..models.policy import Policy
from ..models.user import UserRole

CLAIM_STAFF_ROLES: Final = frozenset({UserRole.ADMIN, UserRole.ADJUSTER})
POLICY_STAFF_ROLES: Final = frozenset({UserRole.ADMIN, UserRole.AGENT})
ADMIN_ONLY: Final = frozenset({UserRole.ADMIN})


@beartype
def has_any_role(role: UserRole, allowed: frozenset[UserRole]) -> bool:
    return role in allowed


@beartype
def can_access_claim(claim: Claim, user_id: UUID, role: UserRole) -> bool:
    """Adjusters and admins see every claim; others only their own."""
    return has_any_role(role, CLAIM_STAFF_ROLES) or claim.owner_id == user_id


@beartype
def can_access_policy(policy: Policy, user_id: UUID, role: UserRole) -> bool:
    """Agents and admins see every policy; others only their own."""
    return has_any_role(role, POLICY_STAFF_ROLES) or policy.owner_id == user_id
