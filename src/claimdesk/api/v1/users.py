# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""User account endpoints.

Registration is called by the credential component after it has hashed
the password, so it carries no identity headers. Login stamping runs once
the token layer has issued an identity for the verified account.
"""

from uuid import UUID

from beartype import beartype
from fastapi import APIRouter, Depends, Response, status

from ...models.user import UserCreate
from ...schemas.auth import CurrentUser, LoginRecord, RegistrationRequest
from ...schemas.responses import UserResponse
from ...services.access_policy import ADMIN_ONLY
from ...services.user_service import UserService
from ..dependencies import get_current_user, get_user_service, require_roles
from ..response_patterns import ErrorResponse, handle_result

router = APIRouter()

require_admin = require_roles(ADMIN_ONLY)


@router.post("/register", status_code=status.HTTP_201_CREATED)
@beartype
async def register_user(
    registration: RegistrationRequest,
    response: Response,
    service: UserService = Depends(get_user_service),
) -> UserResponse | ErrorResponse:
    user_data = UserCreate.model_validate(
        registration.model_dump(exclude={"password_hash"})
    )
    result = await service.register(user_data, registration.password_hash)
    return handle_result(result, response, status.HTTP_201_CREATED)


@router.post("/login")
@beartype
async def record_login(
    login: LoginRecord,
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse | ErrorResponse:
    result = await service.record_login(
        login.email, current_user.user_id, current_user.role
    )
    return handle_result(result, response)


@router.get("/me")
@beartype
async def get_me(
    response: Response,
    current_user: CurrentUser = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse | ErrorResponse:
    result = await service.get(current_user.user_id)
    return handle_result(result, response)


@router.get("/{user_id}")
@beartype
async def get_user(
    user_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> UserResponse | ErrorResponse:
    result = await service.get(user_id)
    return handle_result(result, response)


@router.post("/{user_id}/deactivate")
@beartype
async def deactivate_user(
    user_id: UUID,
    response: Response,
    current_user: CurrentUser = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> UserResponse | ErrorResponse:
    result = await service.deactivate(user_id)
    return handle_result(result, response)
