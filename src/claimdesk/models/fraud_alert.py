# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Fraud alerts raised against claims, independent of claim status."""

from datetime import datetime
from uuid import UUID

from beartype import beartype
from pydantic import Field, model_validator

from .base import BaseModelConfig
from .claim import RiskLevel


@beartype
class FraudAlertCreate(BaseModelConfig):
    """Alert reported by the fraud-detection collaborator."""

    # MULTIPLE_CLAIMS, HIGH_AMOUNT, PATTERN_MATCH, ...
    alert_type: str = Field(..., min_length=1, max_length=100)
    severity: RiskLevel
    description: str = Field(..., min_length=1)


@beartype
class FraudAlert(FraudAlertCreate):
    """Stored fraud alert."""

    id: UUID
    claim_id: UUID
    is_resolved: bool = False
    resolved_by: UUID | None = None
    resolved_at: datetime | None = None
    created_at: datetime

    @model_validator(mode="after")
    def validate_resolution(self) -> "FraudAlert":
        """A resolution timestamp only exists on resolved alerts."""
        if self.resolved_at is not None and not self.is_resolved:
            raise ValueError("Unresolved alerts cannot carry a resolution timestamp")
        return self
