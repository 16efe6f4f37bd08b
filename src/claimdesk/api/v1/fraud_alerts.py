# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Fraud alert resolution endpoint."""

from uuid import UUID

from beartype import beartype
from fastapi import APIRouter, Depends, Response

from ...models.fraud_alert import FraudAlert
from ...schemas.auth import CurrentUser
from ...services.fraud_alert_service import FraudAlertService
from ..dependencies import get_current_user, get_fraud_alert_service
from ..response_patterns import ErrorResponse, handle_result

router = APIRouter()


@router.post("/{alert_id}/resolve")
@beartype
async def resolve_fraud_alert(
    alert_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: FraudAlertService = Depends(get_fraud_alert_service),
) -> FraudAlert | ErrorResponse:
    """Resolve an alert; the service rejects callers outside claim staff."""
    result = await service.resolve(alert_id, current_user.user_id, current_user.role)
    return handle_result(result, response)
