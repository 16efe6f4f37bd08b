# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Error kinds carried by ``Err`` results, plus persistence exceptions.

Managers never raise for business failures. They return
``Err(ServiceError(...))`` and let the request boundary decide how to
render the failure. The persistence gateway, on the other hand, raises
``PersistenceError`` subclasses when the store rejects a write; managers
catch those and convert them into ``CONFLICT`` errors.
"""

from enum import Enum

from attrs import field, frozen
from beartype import beartype


class ErrorKind(str, Enum):
    """Recoverable failure categories surfaced by the managers."""

    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_STATE = "INVALID_STATE"
    CONFLICT = "CONFLICT"
    EXHAUSTED = "EXHAUSTED"


@frozen
class ServiceError:
    """A single rejected operation: what went wrong and why."""

    kind: ErrorKind = field()
    message: str = field()

    @classmethod
    @beartype
    def not_found(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    @beartype
    def forbidden(cls, message: str = "Access denied") -> "ServiceError":
        return cls(ErrorKind.FORBIDDEN, message)

    @classmethod
    @beartype
    def invalid_input(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.INVALID_INPUT, message)

    @classmethod
    @beartype
    def invalid_state(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.INVALID_STATE, message)

    @classmethod
    @beartype
    def conflict(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.CONFLICT, message)

    @classmethod
    @beartype
    def exhausted(cls, message: str) -> "ServiceError":
        return cls(ErrorKind.EXHAUSTED, message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class PersistenceError(Exception):
    """Base class for failures reported by the persistence gateway."""


class DuplicateKeyError(PersistenceError):
    """A uniqueness constraint (email, policy number, claim number) was violated."""

    def __init__(self, constraint: str, message: str | None = None) -> None:
        self.constraint = constraint
        super().__init__(message or f"Duplicate value for {constraint}")


class ReferentialIntegrityError(PersistenceError):
    """A foreign-key rule rejected the write or delete."""

    def __init__(self, constraint: str, message: str | None = None) -> None:
        self.constraint = constraint
        super().__init__(message or f"Foreign key rule {constraint} rejected the change")
