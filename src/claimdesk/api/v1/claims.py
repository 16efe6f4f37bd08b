# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Claim endpoints with lifecycle management.

Customers file and read their own claims. Listing every claim, filtering
by status and moving claims through the lifecycle are reserved for claim
staff (adjusters and admins).
"""

from uuid import UUID

from beartype import beartype
from fastapi import APIRouter, Depends, Response, status

from ...models.claim import ClaimCreate, ClaimStatusUpdate
from ...models.claim_event import ClaimEvent
from ...models.document import ClaimDocument, ClaimDocumentCreate
from ...models.fraud_alert import FraudAlert, FraudAlertCreate
from ...schemas.auth import CurrentUser
from ...schemas.responses import ClaimResponse
from ...services.access_policy import CLAIM_STAFF_ROLES
from ...services.claim_service import ClaimService
from ...services.document_service import DocumentService
from ...services.fraud_alert_service import FraudAlertService
from ..dependencies import (
    get_claim_service,
    get_current_user,
    get_document_service,
    get_fraud_alert_service,
    require_roles,
)
from ..response_patterns import DeletedResponse, ErrorResponse, handle_result

router = APIRouter()

require_claim_staff = require_roles(CLAIM_STAFF_ROLES)


@router.post("", status_code=status.HTTP_201_CREATED)
@beartype
async def create_claim(
    claim_data: ClaimCreate,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: ClaimService = Depends(get_claim_service),
) -> ClaimResponse | ErrorResponse:
    """File a claim against one of the caller's policies."""
    result = await service.create(claim_data, current_user.user_id)
    return handle_result(result, response, status.HTTP_201_CREATED)


@router.get("/my-claims")
@beartype
async def list_my_claims(
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: ClaimService = Depends(get_claim_service),
) -> list[ClaimResponse] | ErrorResponse:
    result = await service.list_by_owner(current_user.user_id)
    return handle_result(result, response)


@router.get("/assigned")
@beartype
async def list_assigned_claims(
    response: Response,
    current_user: CurrentUser = Depends(require_claim_staff),
    service: ClaimService = Depends(get_claim_service),
) -> list[ClaimResponse] | ErrorResponse:
    """Claims assigned to the calling adjuster."""
    result = await service.list_by_adjuster(current_user.user_id)
    return handle_result(result, response)


@router.get("")
@beartype
async def list_claims(
    response: Response,
    current_user: CurrentUser = Depends(require_claim_staff),
    service: ClaimService = Depends(get_claim_service),
) -> list[ClaimResponse] | ErrorResponse:
    result = await service.list_all()
    return handle_result(result, response)


@router.get("/status/{claim_status}")
@beartype
async def list_claims_by_status(
    claim_status: str,
    response: Response,
    current_user: CurrentUser = Depends(require_claim_staff),
    service: ClaimService = Depends(get_claim_service),
) -> list[ClaimResponse] | ErrorResponse:
    result = await service.list_by_status(claim_status)
    return handle_result(result, response)


@router.get("/{claim_id}")
@beartype
async def get_claim(
    claim_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: ClaimService = Depends(get_claim_service),
) -> ClaimResponse | ErrorResponse:
    result = await service.get(claim_id, current_user.user_id, current_user.role)
    return handle_result(result, response)


@router.patch("/{claim_id}/status")
@beartype
async def update_claim_status(
    claim_id: UUID,
    status_update: ClaimStatusUpdate,
    response: Response,
    current_user: CurrentUser = Depends(require_claim_staff),
    service: ClaimService = Depends(get_claim_service),
) -> ClaimResponse | ErrorResponse:
    """Move a claim through its lifecycle, recording the caller as actor."""
    result = await service.update_status(
        claim_id, status_update, actor_id=current_user.user_id
    )
    return handle_result(result, response)


@router.delete("/{claim_id}")
@beartype
async def delete_claim(
    claim_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: ClaimService = Depends(get_claim_service),
) -> DeletedResponse | ErrorResponse:
    result = await service.delete(claim_id, current_user.user_id, current_user.role)
    return handle_result(result.map(lambda _: DeletedResponse(id=claim_id)), response)


@router.get("/{claim_id}/events")
@beartype
async def list_claim_events(
    claim_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: ClaimService = Depends(get_claim_service),
) -> list[ClaimEvent] | ErrorResponse:
    result = await service.list_events(
        claim_id, current_user.user_id, current_user.role
    )
    return handle_result(result, response)


@router.post("/{claim_id}/documents", status_code=status.HTTP_201_CREATED)
@beartype
async def attach_document(
    claim_id: UUID,
    document_data: ClaimDocumentCreate,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> ClaimDocument | ErrorResponse:
    """Record the storage locator of an uploaded document."""
    result = await service.attach(
        claim_id, document_data, current_user.user_id, current_user.role
    )
    return handle_result(result, response, status.HTTP_201_CREATED)


@router.get("/{claim_id}/documents")
@beartype
async def list_documents(
    claim_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
) -> list[ClaimDocument] | ErrorResponse:
    result = await service.list_for_claim(
        claim_id, current_user.user_id, current_user.role
    )
    return handle_result(result, response)


@router.post("/{claim_id}/fraud-alerts", status_code=status.HTTP_201_CREATED)
@beartype
async def raise_fraud_alert(
    claim_id: UUID,
    alert_data: FraudAlertCreate,
    response: Response,
    current_user: CurrentUser = Depends(require_claim_staff),
    service: FraudAlertService = Depends(get_fraud_alert_service),
) -> FraudAlert | ErrorResponse:
    result = await service.record(claim_id, alert_data)
    return handle_result(result, response, status.HTTP_201_CREATED)


@router.get("/{claim_id}/fraud-alerts")
@beartype
async def list_fraud_alerts(
    claim_id: UUID,
    response: Response,
    unresolved_only: bool = False,
    current_user: CurrentUser = Depends(require_claim_staff),
    service: FraudAlertService = Depends(get_fraud_alert_service),
) -> list[FraudAlert] | ErrorResponse:
    result = await service.list_for_claim(claim_id, unresolved_only=unresolved_only)
    return handle_result(result, response)
