# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Service layer for business logic."""

from .access_policy import (
    ADMIN_ONLY,
    CLAIM_STAFF_ROLES,
    POLICY_STAFF_ROLES,
    can_access_claim,
    can_access_policy,
    has_any_role,
)
from .claim_service import ClaimService
from .document_service import DocumentService
from .fraud_alert_service import FraudAlertService
from .policy_service import PolicyService
from .risk_scorer import RiskAssessment, RiskRule, score_claim
from .user_service import UserService

__all__ = [
    "ClaimService",
    "PolicyService",
    "UserService",
    "DocumentService",
    "FraudAlertService",
    "RiskAssessment",
    "RiskRule",
    "score_claim",
    "can_access_claim",
    "can_access_policy",
    "has_any_role",
    "CLAIM_STAFF_ROLES",
    "POLICY_STAFF_ROLES",
    "ADMIN_ONLY",
]
