# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Health check endpoint."""

from datetime import datetime, timezone

from beartype import beartype
from fastapi import APIRouter, Depends, Response, status

from ...core.config import Settings, get_settings
from ...core.database import Database, get_database
from ...schemas.health import ComponentStatus, HealthResponse

router = APIRouter()

API_VERSION = "1.0.0"


@router.get("/health")
@beartype
async def health_check(
    response: Response,
    db: Database = Depends(get_database),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """Report service health, including database reachability."""
    result = await db.health_check()
    if result.is_ok():
        database = ComponentStatus(status="healthy", message="Database reachable")
    else:
        database = ComponentStatus(status="unhealthy", message=result.unwrap_err())
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=database.status,
        timestamp=datetime.now(timezone.utc),
        version=API_VERSION,
        environment=settings.api_env,
        database=database,
    )
