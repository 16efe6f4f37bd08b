# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""User account service.

Hashing and verifying passwords happen in the credential component before
these calls; this service only ever sees the opaque hash.
"""

from datetime import datetime, timezone
from uuid import UUID

from beartype import beartype

from ..core.errors import DuplicateKeyError, ServiceError
from ..core.logging_utils import get_logger
from ..core.result_types import Err, Ok, Result
from ..models.user import UserCreate, UserRole
from ..schemas.responses import UserResponse, to_user_response
from .access_policy import ADMIN_ONLY, has_any_role

logger = get_logger(__name__)


class UserService:
    """Service for user registration and account state."""

    def __init__(self, gateway) -> None:
        if gateway is None:
            raise ValueError("Persistence gateway required")
        self._gateway = gateway

    @beartype
    async def register(
        self,
        user_data: UserCreate,
        password_hash: str,
        role: UserRole = UserRole.CUSTOMER,
    ) -> Result[UserResponse, ServiceError]:
        """Register a new account; emails are unique case-insensitively."""
        if await self._gateway.get_user_by_email(str(user_data.email)) is not None:
            return Err(ServiceError.conflict("Email already registered"))

        try:
            async with self._gateway.transaction() as tx:
                user = await tx.insert_user(
                    user_data, password_hash=password_hash, role=role
                )
        except DuplicateKeyError:
            return Err(ServiceError.conflict("Email already registered"))

        logger.info("Registered user %s with role %s", user.id, user.role.value)
        return Ok(to_user_response(user))

    @beartype
    async def record_login(
        self, email: str, requester_id: UUID, requester_role: UserRole
    ) -> Result[UserResponse, ServiceError]:
        """Stamp a successful login for an active account.

        Admins may stamp any account; everybody else only their own. A
        non-admin asking about another email gets FORBIDDEN whether or not
        the email exists.
        """
        user = await self._gateway.get_user_by_email(email.strip().lower())
        is_admin = has_any_role(requester_role, ADMIN_ONLY)
        if not is_admin and (user is None or user.id != requester_id):
            logger.warning(
                "User %s denied login stamp on another account", requester_id
            )
            return Err(ServiceError.forbidden())

        if user is None:
            return Err(ServiceError.not_found("User not found"))

        if not user.is_active:
            logger.warning("Login attempt on deactivated account %s", user.id)
            return Err(ServiceError.invalid_state("Account is deactivated"))

        async with self._gateway.transaction() as tx:
            saved = await tx.save_user(
                user.model_copy(update={"last_login_at": datetime.now(timezone.utc)})
            )

        return Ok(to_user_response(saved))

    @beartype
    async def get(self, user_id: UUID) -> Result[UserResponse, ServiceError]:
        user = await self._gateway.get_user(user_id)
        if user is None:
            return Err(ServiceError.not_found("User not found"))
        return Ok(to_user_response(user))

    @beartype
    async def deactivate(self, user_id: UUID) -> Result[UserResponse, ServiceError]:
        user = await self._gateway.get_user(user_id)
        if user is None:
            return Err(ServiceError.not_found("User not found"))

        async with self._gateway.transaction() as tx:
            saved = await tx.save_user(user.model_copy(update={"is_active": False}))

        logger.info("Deactivated user %s", saved.id)
        return Ok(to_user_response(saved))
