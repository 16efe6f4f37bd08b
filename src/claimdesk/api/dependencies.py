# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""FastAPI dependencies for identity, persistence and services.

Tokens are validated upstream; requests reach this service with the
resolved identity in the ``X-User-Id`` and ``X-User-Role`` headers.
"""

from collections.abc import Awaitable, Callable
from uuid import UUID

from beartype import beartype
from fastapi import Depends, Header, HTTPException, status

from ..core.database import get_database
from ..models.user import UserRole
from ..repositories.postgres import PostgresGateway
from ..schemas.auth import CurrentUser
from ..services.access_policy import has_any_role
from ..services.claim_service import ClaimService
from ..services.document_service import DocumentService
from ..services.fraud_alert_service import FraudAlertService
from ..services.policy_service import PolicyService
from ..services.user_service import UserService


@beartype
async def get_gateway() -> PostgresGateway:
    """Provide a gateway over the shared connection pool."""
    return PostgresGateway(get_database())


async def get_claim_service(gateway=Depends(get_gateway)) -> ClaimService:
    return ClaimService(gateway)


async def get_policy_service(gateway=Depends(get_gateway)) -> PolicyService:
    return PolicyService(gateway)


async def get_user_service(gateway=Depends(get_gateway)) -> UserService:
    return UserService(gateway)


async def get_document_service(gateway=Depends(get_gateway)) -> DocumentService:
    return DocumentService(gateway)


async def get_fraud_alert_service(gateway=Depends(get_gateway)) -> FraudAlertService:
    return FraudAlertService(gateway)


@beartype
async def get_current_user(
    x_user_id: str = Header(..., description="Authenticated user id"),
    x_user_role: str = Header(..., description="Authenticated user role"),
) -> CurrentUser:
    """Read the identity forwarded by the token layer.

    Raises:
        HTTPException: 401 if either header is malformed
    """
    try:
        user_id = UUID(x_user_id)
        role = UserRole(x_user_role.strip().upper())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid identity headers",
        ) from None

    return CurrentUser(user_id=user_id, role=role)


def require_roles(
    allowed: frozenset[UserRole],
) -> Callable[..., Awaitable[CurrentUser]]:
    """Build a dependency admitting only users holding one of ``allowed``."""

    async def dependency(
        current_user: CurrentUser = Depends(get_current_user),
    ) -> CurrentUser:
        if not has_any_role(current_user.role, allowed):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return dependency
