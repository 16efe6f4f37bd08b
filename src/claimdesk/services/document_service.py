# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Claim document references."""

from uuid import UUID

from beartype import beartype

from ..core.errors import PersistenceError, ServiceError
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.document import ClaimDocument, ClaimDocumentCreate
from ..models.user import UserRole
from .access_policy import can_access_claim

logger = get_logger(__name__)


class DocumentService:
    """Attach and list storage locators for claim documents."""

    def __init__(self, gateway) -> None:
        if gateway is None:
            raise ValueError("Persistence gateway required")
        self._gateway = gateway

    @beartype
    async def attach(
        self,
        claim_id: UUID,
        document_data: ClaimDocumentCreate,
        uploader_id: UUID,
        uploader_role: UserRole,
    ) -> Result[ClaimDocument, ServiceError]:
        claim = await self._gateway.get_claim(claim_id)
        if claim is None:
            return Err(ServiceError.not_found("Claim not found"))

        if not can_access_claim(claim, uploader_id, uploader_role):
            return Err(ServiceError.forbidden())

        try:
            async with self._gateway.transaction() as tx:
                document = await tx.insert_document(claim.id, uploader_id, document_data)
        except PersistenceError as e:
            return Err(ServiceError.conflict(str(e)))

        logger.info(
            "Document %s (%s) attached to claim %s",
            document.id,
            document.document_type,
            claim.claim_number,
        )
        return Ok(document)

    @beartype
    async def list_for_claim(
        self, claim_id: UUID, requester_id: UUID, requester_role: UserRole
    ) -> Result[list[ClaimDocument], ServiceError]:
        claim = await self._gateway.get_claim(claim_id)
        if claim is None:
            return Err(ServiceError.not_found("Claim not found"))

        if not can_access_claim(claim, requester_id, requester_role):
            return Err(ServiceError.forbidden())

        return Ok(await self._gateway.list_documents(claim.id))
