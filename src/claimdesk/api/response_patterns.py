# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""API response patterns mapping ``Result`` values onto HTTP semantics."""

from typing import Final, TypeVar
from uuid import UUID

from beartype import beartype
from fastapi import Response
from pydantic import BaseModel, ConfigDict, Field

from ..core.errors import ErrorKind, ServiceError
from ..core.result_types import Result

T = TypeVar("T")

ERROR_STATUS_CODES: Final[dict[ErrorKind, int]] = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.FORBIDDEN: 403,
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.INVALID_STATE: 409,
    ErrorKind.CONFLICT: 409,
    ErrorKind.EXHAUSTED: 503,
}


@beartype
class ErrorResponse(BaseModel):
    """Standardized error response for business logic failures."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    success: bool = Field(default=False, description="Always false for error responses")
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorKind = Field(..., description="Machine-readable error kind")


@beartype
class DeletedResponse(BaseModel):
    """Standard response for resource deletion."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )

    id: UUID = Field(..., description="ID of deleted resource")
    message: str = Field(default="Resource deleted successfully")


@beartype
def map_error_to_status(error: ServiceError) -> int:
    """HTTP status for a business failure."""
    return ERROR_STATUS_CODES[error.kind]


@beartype
def handle_result(
    result: Result[T, ServiceError],
    response: Response,
    success_status: int = 200,
):
    """Unwrap a service result, or turn its error into an ``ErrorResponse``.

    The status code is written onto ``response`` in both cases.
    """
    if result.is_err():
        error = result.unwrap_err()
        response.status_code = map_error_to_status(error)
        return ErrorResponse(error=error.message, error_code=error.kind)

    response.status_code = success_status
    return result.unwrap()
