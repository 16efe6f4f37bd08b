# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Domain models package for ClaimDesk.

This package exports the immutable Pydantic records for users, policies,
claims and their audit, document and fraud side records.
"""

from .base import BaseModelConfig, IdentifiableModel, TimestampedModel
from .claim import Claim, ClaimCreate, ClaimStatus, ClaimStatusUpdate, RiskLevel
from .claim_event import ClaimEvent, ClaimEventCreate, ClaimEventType
from .document import ClaimDocument, ClaimDocumentCreate
from .fraud_alert import FraudAlert, FraudAlertCreate
from .policy import Policy, PolicyCreate, PolicyType
from .user import User, UserCreate, UserRole

__all__ = [
    # Base models
    "BaseModelConfig",
    "TimestampedModel",
    "IdentifiableModel",
    # Users
    "User",
    "UserCreate",
    "UserRole",
    # Policies
    "Policy",
    "PolicyCreate",
    "PolicyType",
    # Claims
    "Claim",
    "ClaimCreate",
    "ClaimStatus",
    "ClaimStatusUpdate",
    "RiskLevel",
    # Claim side records
    "ClaimEvent",
    "ClaimEventCreate",
    "ClaimEventType",
    "ClaimDocument",
    "ClaimDocumentCreate",
    "FraudAlert",
    "FraudAlertCreate",
]
