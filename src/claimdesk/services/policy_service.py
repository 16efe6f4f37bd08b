# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Policy business logic service."""

from uuid import UUID

from beartype import beartype

from ..core.config import Settings, get_settings
from ..core.errors import PersistenceError, ReferentialIntegrityError, ServiceError
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.policy import Policy, PolicyCreate, PolicyType
from ..models.user import UserRole
from ..repositories.gateway import POLICY_NUMBER_KEY
from ..schemas.responses import PolicyResponse, to_policy_response
from .access_policy import can_access_policy
from .numbering import generate_policy_number, insert_with_unique_number

logger = get_logger(__name__)


@beartype
def parse_policy_type(name: str) -> PolicyType | None:
    """Case-insensitive policy type lookup; ``None`` for unknown names."""
    try:
        return PolicyType(name.strip().upper())
    except ValueError:
        return None


class PolicyService:
    """Service for policy business logic.

    Creation, deactivation and deletion are staff operations; the request
    boundary gates them before calling in. Reads are gated here through
    the access policy.
    """

    def __init__(self, gateway, settings: Settings | None = None) -> None:
        """Initialize policy service with dependency validation."""
        if gateway is None:
            raise ValueError("Persistence gateway required")

        self._gateway = gateway
        self._max_attempts = (settings or get_settings()).number_max_attempts

    @beartype
    async def create(
        self, policy_data: PolicyCreate
    ) -> Result[PolicyResponse, ServiceError]:
        """Create a new policy for an existing user."""
        owner = await self._gateway.get_user(policy_data.user_id)
        if owner is None:
            return Err(ServiceError.not_found("User not found"))

        if policy_data.end_date <= policy_data.start_date:
            return Err(ServiceError.invalid_input("End date must be after start date"))

        policy_type = parse_policy_type(policy_data.policy_type)
        if policy_type is None:
            return Err(
                ServiceError.invalid_input(
                    f"Invalid policy type: {policy_data.policy_type}"
                )
            )

        try:
            async with self._gateway.transaction() as tx:

                async def insert(policy_number: str) -> Policy:
                    return await tx.insert_policy(
                        policy_data,
                        policy_number=policy_number,
                        policy_type=policy_type,
                    )

                policy = await insert_with_unique_number(
                    generate=lambda: generate_policy_number(policy_type),
                    exists=tx.policy_number_exists,
                    insert=insert,
                    constraint=POLICY_NUMBER_KEY,
                    max_attempts=self._max_attempts,
                )
        except PersistenceError as e:
            logger.warning("Policy creation rejected by the store: %s", e)
            return Err(ServiceError.conflict(str(e)))

        if policy is None:
            return Err(
                ServiceError.exhausted("Could not allocate a unique policy number")
            )

        logger.info("Policy %s created for user %s", policy.policy_number, owner.id)
        return Ok(to_policy_response(policy, owner))

    @beartype
    async def get(
        self, policy_id: UUID, requester_id: UUID, requester_role: UserRole
    ) -> Result[PolicyResponse, ServiceError]:
        """Get a policy; agents and admins read any policy, others their own."""
        policy = await self._gateway.get_policy(policy_id)
        if policy is None:
            return Err(ServiceError.not_found("Policy not found"))

        if not can_access_policy(policy, requester_id, requester_role):
            return Err(ServiceError.forbidden())

        return Ok(await self._respond(policy))

    @beartype
    async def list_by_owner(
        self, owner_id: UUID
    ) -> Result[list[PolicyResponse], ServiceError]:
        policies = await self._gateway.list_policies(owner_id=owner_id)
        return Ok([await self._respond(policy) for policy in policies])

    @beartype
    async def list_active_by_owner(
        self, owner_id: UUID
    ) -> Result[list[PolicyResponse], ServiceError]:
        policies = await self._gateway.list_policies(owner_id=owner_id, active_only=True)
        return Ok([await self._respond(policy) for policy in policies])

    @beartype
    async def list_all(self) -> Result[list[PolicyResponse], ServiceError]:
        policies = await self._gateway.list_policies()
        return Ok([await self._respond(policy) for policy in policies])

    @beartype
    async def deactivate(self, policy_id: UUID) -> Result[PolicyResponse, ServiceError]:
        """Stop accepting claims against a policy."""
        policy = await self._gateway.get_policy(policy_id)
        if policy is None:
            return Err(ServiceError.not_found("Policy not found"))

        async with self._gateway.transaction() as tx:
            saved = await tx.save_policy(policy.model_copy(update={"is_active": False}))

        logger.info("Policy %s deactivated", saved.policy_number)
        return Ok(await self._respond(saved))

    @beartype
    async def delete(self, policy_id: UUID) -> Result[None, ServiceError]:
        """Delete a policy; the store refuses while claims reference it."""
        policy = await self._gateway.get_policy(policy_id)
        if policy is None:
            return Err(ServiceError.not_found("Policy not found"))

        try:
            async with self._gateway.transaction() as tx:
                await tx.delete_policy(policy.id)
        except ReferentialIntegrityError:
            logger.warning(
                "Policy %s still has claims and cannot be deleted",
                policy.policy_number,
            )
            return Err(
                ServiceError.conflict("Cannot delete a policy with existing claims")
            )

        logger.info("Policy %s deleted", policy.policy_number)
        return Ok(None)

    async def _respond(self, policy: Policy) -> PolicyResponse:
        owner = await self._gateway.get_user(policy.owner_id)
        return to_policy_response(policy, owner)
