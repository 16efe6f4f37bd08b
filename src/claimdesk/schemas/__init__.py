# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""API request and response schemas."""

from .auth import CurrentUser, LoginRecord, RegistrationRequest
from .health import ComponentStatus, HealthResponse
from .responses import (
    ClaimResponse,
    PolicyResponse,
    UserResponse,
    to_claim_response,
    to_policy_response,
    to_user_response,
)

__all__ = [
    "CurrentUser",
    "LoginRecord",
    "RegistrationRequest",
    "ComponentStatus",
    "HealthResponse",
    "ClaimResponse",
    "PolicyResponse",
    "UserResponse",
    "to_claim_response",
    "to_policy_response",
    "to_user_response",
]
