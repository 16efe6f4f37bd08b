# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Fraud alert bookkeeping.

Alerts are raised by the fraud-detection collaborator and resolved by
claim staff. Neither action touches the claim's status.
"""

from datetime import datetime, timezone
from uuid import UUID

from beartype import beartype

from ..core.errors import PersistenceError, ServiceError
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.fraud_alert import FraudAlert, FraudAlertCreate
from ..models.user import UserRole
from .access_policy import CLAIM_STAFF_ROLES, has_any_role

logger = get_logger(__name__)


class FraudAlertService:
    """Record, resolve and list fraud alerts."""

    def __init__(self, gateway) -> None:
        if gateway is None:
            raise ValueError("Persistence gateway required")
        self._gateway = gateway

    @beartype
    async def record(
        self, claim_id: UUID, alert_data: FraudAlertCreate
    ) -> Result[FraudAlert, ServiceError]:
        claim = await self._gateway.get_claim(claim_id)
        if claim is None:
            return Err(ServiceError.not_found("Claim not found"))

        try:
            async with self._gateway.transaction() as tx:
                alert = await tx.insert_fraud_alert(claim.id, alert_data)
        except PersistenceError as e:
            return Err(ServiceError.conflict(str(e)))

        logger.warning(
            "Fraud alert %s (%s, %s) raised on claim %s",
            alert.id,
            alert.alert_type,
            alert.severity.value,
            claim.claim_number,
        )
        return Ok(alert)

    @beartype
    async def resolve(
        self, alert_id: UUID, resolver_id: UUID, resolver_role: UserRole
    ) -> Result[FraudAlert, ServiceError]:
        """Mark an alert resolved; only adjusters and admins may do so."""
        if not has_any_role(resolver_role, CLAIM_STAFF_ROLES):
            return Err(ServiceError.forbidden())

        alert = await self._gateway.get_fraud_alert(alert_id)
        if alert is None:
            return Err(ServiceError.not_found("Fraud alert not found"))

        if alert.is_resolved:
            return Err(ServiceError.invalid_state("Fraud alert already resolved"))

        async with self._gateway.transaction() as tx:
            saved = await tx.save_fraud_alert(
                alert.model_copy(
                    update={
                        "is_resolved": True,
                        "resolved_by": resolver_id,
                        "resolved_at": datetime.now(timezone.utc),
                    }
                )
            )

        logger.info("Fraud alert %s resolved by %s", saved.id, resolver_id)
        return Ok(saved)

    @beartype
    async def list_for_claim(
        self, claim_id: UUID, unresolved_only: bool = False
    ) -> Result[list[FraudAlert], ServiceError]:
        claim = await self._gateway.get_claim(claim_id)
        if claim is None:
            return Err(ServiceError.not_found("Claim not found"))

        return Ok(
            await self._gateway.list_fraud_alerts(
                claim.id, unresolved_only=unresolved_only
            )
        )
