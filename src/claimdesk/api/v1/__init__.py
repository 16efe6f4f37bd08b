# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""API v1 router aggregation.

This module combines all v1 API routers into a single router
that can be mounted on the main FastAPI application.
"""

from fastapi import APIRouter

from .claims import router as claims_router
from .fraud_alerts import router as fraud_alerts_router
from .health import router as health_router
from .policies import router as policies_router
from .users import router as users_router

# Create main v1 router
router = APIRouter(prefix="/api/v1")

router.include_router(health_router, tags=["health"])
router.include_router(users_router, prefix="/users", tags=["users"])
router.include_router(policies_router, prefix="/policies", tags=["policies"])
router.include_router(claims_router, prefix="/claims", tags=["claims"])
router.include_router(
    fraud_alerts_router, prefix="/fraud-alerts", tags=["fraud-alerts"]
)

__all__ = ["router"]
