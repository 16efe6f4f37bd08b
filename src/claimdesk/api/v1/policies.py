# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Policy endpoints.

Agents and admins issue policies and may read any of them. Deactivation
and deletion are admin-only.
"""

from uuid import UUID

from beartype import beartype
from fastapi import APIRouter, Depends, Response, status

from ...models.policy import PolicyCreate
from ...schemas.auth import CurrentUser
from ...schemas.responses import PolicyResponse
from ...services.access_policy import ADMIN_ONLY, POLICY_STAFF_ROLES
from ...services.policy_service import PolicyService
from ..dependencies import get_current_user, get_policy_service, require_roles
from ..response_patterns import DeletedResponse, ErrorResponse, handle_result

router = APIRouter()

require_policy_staff = require_roles(POLICY_STAFF_ROLES)
require_admin = require_roles(ADMIN_ONLY)


@router.post("", status_code=status.HTTP_201_CREATED)
@beartype
async def create_policy(
    policy_data: PolicyCreate,
    response: Response,
    current_user: CurrentUser = Depends(require_policy_staff),
    service: PolicyService = Depends(get_policy_service),
) -> PolicyResponse | ErrorResponse:
    """Issue a policy on behalf of a customer."""
    result = await service.create(policy_data)
    return handle_result(result, response, status.HTTP_201_CREATED)


@router.get("/my-policies")
@beartype
async def list_my_policies(
    response: Response,
    active_only: bool = False,
    current_user: CurrentUser = Depends(get_current_user),
    service: PolicyService = Depends(get_policy_service),
) -> list[PolicyResponse] | ErrorResponse:
    if active_only:
        result = await service.list_active_by_owner(current_user.user_id)
    else:
        result = await service.list_by_owner(current_user.user_id)
    return handle_result(result, response)


@router.get("")
@beartype
async def list_policies(
    response: Response,
    current_user: CurrentUser = Depends(require_policy_staff),
    service: PolicyService = Depends(get_policy_service),
) -> list[PolicyResponse] | ErrorResponse:
    result = await service.list_all()
    return handle_result(result, response)


@router.get("/owner/{owner_id}")
@beartype
async def list_policies_by_owner(
    owner_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(require_policy_staff),
    service: PolicyService = Depends(get_policy_service),
) -> list[PolicyResponse] | ErrorResponse:
    result = await service.list_by_owner(owner_id)
    return handle_result(result, response)


@router.get("/{policy_id}")
@beartype
async def get_policy(
    policy_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: PolicyService = Depends(get_policy_service),
) -> PolicyResponse | ErrorResponse:
    result = await service.get(policy_id, current_user.user_id, current_user.role)
    return handle_result(result, response)


@router.patch("/{policy_id}/deactivate")
@beartype
async def deactivate_policy(
    policy_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(require_admin),
    service: PolicyService = Depends(get_policy_service),
) -> PolicyResponse | ErrorResponse:
    result = await service.deactivate(policy_id)
    return handle_result(result, response)


@router.delete("/{policy_id}")
@beartype
async def delete_policy(
    policy_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(require_admin),
    service: PolicyService = Depends(get_policy_service),
) -> DeletedResponse | ErrorResponse:
    """Delete a policy; fails with 409 while claims reference it."""
    result = await service.delete(policy_id)
    return handle_result(result.map(lambda _: DeletedResponse(id=policy_id)), response)
