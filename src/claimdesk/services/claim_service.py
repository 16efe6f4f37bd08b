# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Claim lifecycle business logic.

Claims are filed by the owner of an active policy and enter the lifecycle
as SUBMITTED. Adjusters and admins then move them between states. The only
restriction is that a CLOSED or DENIED claim can never be reopened: from
either of those states the only legal targets are CLOSED and DENIED.
"""

from datetime import datetime, timezone
from typing import Final
from uuid import UUID

from beartype import beartype

from ..core.config import Settings, get_settings
from ..core.errors import PersistenceError, ServiceError
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.claim import Claim, ClaimCreate, ClaimStatus, ClaimStatusUpdate
from ..models.claim_event import ClaimEvent, ClaimEventCreate, ClaimEventType
from ..models.user import UserRole
from ..repositories.gateway import CLAIM_NUMBER_KEY
from ..schemas.responses import ClaimResponse, to_claim_response
from .access_policy import ADMIN_ONLY, can_access_claim, has_any_role
from .numbering import generate_claim_number, insert_with_unique_number
from .risk_scorer import score_claim

logger = get_logger(__name__)

TERMINAL_STATUSES: Final = frozenset({ClaimStatus.CLOSED, ClaimStatus.DENIED})
CLOSING_STATUSES: Final = frozenset(
    {ClaimStatus.CLOSED, ClaimStatus.APPROVED, ClaimStatus.DENIED}
)


@beartype
def parse_claim_status(name: str) -> ClaimStatus | None:
    """Case-insensitive status lookup; ``None`` for unknown names."""
    try:
        return ClaimStatus(name.strip().upper())
    except ValueError:
        return None


@beartype
def is_transition_allowed(current: ClaimStatus, target: ClaimStatus) -> bool:
    if current in TERMINAL_STATUSES:
        return target in TERMINAL_STATUSES
    return True


class ClaimService:
    """Service for claim business logic."""

    def __init__(self, gateway, settings: Settings | None = None) -> None:
        """Initialize claim service with dependency validation."""
        if gateway is None:
            raise ValueError("Persistence gateway required")

        self._gateway = gateway
        self._max_attempts = (settings or get_settings()).number_max_attempts

    @beartype
    async def create(
        self, claim_data: ClaimCreate, owner_id: UUID
    ) -> Result[ClaimResponse, ServiceError]:
        """File a new claim against one of the owner's active policies."""
        policy = await self._gateway.get_policy(claim_data.policy_id)
        if policy is None:
            return Err(ServiceError.not_found("Policy not found"))

        if policy.owner_id != owner_id:
            logger.warning(
                "User %s attempted to claim against policy %s", owner_id, policy.id
            )
            return Err(ServiceError.forbidden("You do not own this policy"))

        if not policy.is_active:
            return Err(
                ServiceError.invalid_state(
                    "Cannot create a claim for an inactive policy"
                )
            )

        risk = score_claim(claim_data.claimed_amount, policy)
        now = datetime.now(timezone.utc)

        try:
            async with self._gateway.transaction() as tx:

                async def insert(claim_number: str) -> Claim:
                    return await tx.insert_claim(
                        claim_data,
                        claim_number=claim_number,
                        owner_id=owner_id,
                        deductible_amount=policy.deductible,
                        status=ClaimStatus.SUBMITTED,
                        risk_score=risk.score,
                        risk_level=risk.level,
                        submitted_at=now,
                    )

                claim = await insert_with_unique_number(
                    generate=generate_claim_number,
                    exists=tx.claim_number_exists,
                    insert=insert,
                    constraint=CLAIM_NUMBER_KEY,
                    max_attempts=self._max_attempts,
                )
                if claim is None:
                    return Err(
                        ServiceError.exhausted("Could not allocate a unique claim number")
                    )

                await tx.insert_claim_event(
                    ClaimEventCreate(
                        claim_id=claim.id,
                        user_id=owner_id,
                        event_type=ClaimEventType.CLAIM_SUBMITTED,
                        new_status=ClaimStatus.SUBMITTED,
                        notes="Claim submitted",
                    )
                )
        except PersistenceError as e:
            logger.warning("Claim creation rejected by the store: %s", e)
            return Err(ServiceError.conflict(str(e)))

        logger.info(
            "Claim %s submitted against policy %s (risk %d, %s)",
            claim.claim_number,
            policy.id,
            risk.score,
            risk.level.value,
        )
        return Ok(await self._respond(claim))

    @beartype
    async def get(
        self, claim_id: UUID, requester_id: UUID, requester_role: UserRole
    ) -> Result[ClaimResponse, ServiceError]:
        """Get a claim; staff read any claim, others only their own."""
        claim = await self._gateway.get_claim(claim_id)
        if claim is None:
            return Err(ServiceError.not_found("Claim not found"))

        if not can_access_claim(claim, requester_id, requester_role):
            return Err(ServiceError.forbidden())

        return Ok(await self._respond(claim))

    @beartype
    async def list_by_owner(
        self, owner_id: UUID
    ) -> Result[list[ClaimResponse], ServiceError]:
        claims = await self._gateway.list_claims(owner_id=owner_id)
        return Ok([await self._respond(claim) for claim in claims])

    @beartype
    async def list_all(self) -> Result[list[ClaimResponse], ServiceError]:
        claims = await self._gateway.list_claims()
        return Ok([await self._respond(claim) for claim in claims])

    @beartype
    async def list_by_status(
        self, status: str
    ) -> Result[list[ClaimResponse], ServiceError]:
        parsed = parse_claim_status(status)
        if parsed is None:
            return Err(ServiceError.invalid_input(f"Invalid status: {status}"))

        claims = await self._gateway.list_claims(status=parsed)
        return Ok([await self._respond(claim) for claim in claims])

    @beartype
    async def list_by_adjuster(
        self, adjuster_id: UUID
    ) -> Result[list[ClaimResponse], ServiceError]:
        claims = await self._gateway.list_claims(adjuster_id=adjuster_id)
        return Ok([await self._respond(claim) for claim in claims])

    @beartype
    async def update_status(
        self,
        claim_id: UUID,
        status_update: ClaimStatusUpdate,
        actor_id: UUID | None = None,
    ) -> Result[ClaimResponse, ServiceError]:
        """Move a claim to a new status.

        Entering UNDER_REVIEW stamps ``reviewed_at`` only the first time.
        Entering CLOSED, APPROVED or DENIED stamps ``closed_at`` on every
        entry. When ``actor_id`` is given the change is recorded as a
        STATUS_CHANGED event in the same transaction.
        """
        claim = await self._gateway.get_claim(claim_id)
        if claim is None:
            return Err(ServiceError.not_found("Claim not found"))

        new_status = parse_claim_status(status_update.status)
        if new_status is None:
            return Err(
                ServiceError.invalid_input(f"Invalid status: {status_update.status}")
            )

        if not is_transition_allowed(claim.status, new_status):
            logger.warning(
                "Rejected transition %s -> %s for claim %s",
                claim.status.value,
                new_status.value,
                claim.claim_number,
            )
            return Err(
                ServiceError.invalid_state(
                    f"Cannot move a {claim.status.value} claim to {new_status.value}"
                )
            )

        updates: dict[str, object] = {"status": new_status}

        if status_update.assigned_adjuster_id is not None:
            adjuster = await self._gateway.get_user(status_update.assigned_adjuster_id)
            if adjuster is None:
                return Err(ServiceError.not_found("Adjuster not found"))
            updates["assigned_adjuster_id"] = adjuster.id

        now = datetime.now(timezone.utc)
        if new_status == ClaimStatus.UNDER_REVIEW and claim.reviewed_at is None:
            updates["reviewed_at"] = now
        if new_status in CLOSING_STATUSES:
            updates["closed_at"] = now
        if status_update.approved_amount is not None:
            updates["approved_amount"] = status_update.approved_amount

        try:
            async with self._gateway.transaction() as tx:
                saved = await tx.save_claim(claim.model_copy(update=updates))
                if actor_id is not None:
                    await tx.insert_claim_event(
                        ClaimEventCreate(
                            claim_id=claim.id,
                            user_id=actor_id,
                            event_type=ClaimEventType.STATUS_CHANGED,
                            old_status=claim.status,
                            new_status=new_status,
                            notes=status_update.notes,
                        )
                    )
        except PersistenceError as e:
            logger.warning("Status update for claim %s rejected: %s", claim_id, e)
            return Err(ServiceError.conflict(str(e)))

        logger.info(
            "Claim %s moved %s -> %s",
            saved.claim_number,
            claim.status.value,
            new_status.value,
        )
        return Ok(await self._respond(saved))

    @beartype
    async def delete(
        self, claim_id: UUID, requester_id: UUID, requester_role: UserRole
    ) -> Result[None, ServiceError]:
        """Delete a claim.

        Admins delete unconditionally. Anyone else may only delete their own
        claim while it is still a DRAFT.
        """
        claim = await self._gateway.get_claim(claim_id)
        if claim is None:
            return Err(ServiceError.not_found("Claim not found"))

        if not has_any_role(requester_role, ADMIN_ONLY):
            if claim.owner_id != requester_id:
                return Err(ServiceError.forbidden())
            if claim.status != ClaimStatus.DRAFT:
                return Err(
                    ServiceError.invalid_state("Can only delete draft claims")
                )

        try:
            async with self._gateway.transaction() as tx:
                await tx.delete_claim(claim.id)
        except PersistenceError as e:
            return Err(ServiceError.conflict(str(e)))

        logger.info("Claim %s deleted by %s", claim.claim_number, requester_id)
        return Ok(None)

    @beartype
    async def list_events(
        self, claim_id: UUID, requester_id: UUID, requester_role: UserRole
    ) -> Result[list[ClaimEvent], ServiceError]:
        """Audit history of a claim, oldest first."""
        claim = await self._gateway.get_claim(claim_id)
        if claim is None:
            return Err(ServiceError.not_found("Claim not found"))

        if not can_access_claim(claim, requester_id, requester_role):
            return Err(ServiceError.forbidden())

        return Ok(await self._gateway.list_claim_events(claim.id))

    async def _respond(self, claim: Claim) -> ClaimResponse:
        policy = await self._gateway.get_policy(claim.policy_id)
        owner = await self._gateway.get_user(claim.owner_id)
        adjuster = None
        if claim.assigned_adjuster_id is not None:
            adjuster = await self._gateway.get_user(claim.assigned_adjuster_id)
        return to_claim_response(claim, policy, owner, adjuster)
