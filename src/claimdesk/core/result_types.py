# ClaimDesk - Insurance Claims Back Office
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Result types so managers report business failures without raising."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, NoReturn, TypeVar

from attrs import frozen
from beartype import beartype

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


@frozen
class Ok(Generic[T]):
    """Success result wrapper."""

    value: T

    @beartype
    def is_ok(self) -> bool:
        return True

    @beartype
    def is_err(self) -> bool:
        return False

    @property
    def ok_value(self) -> T:
        return self.value

    @property
    def err_value(self) -> None:
        return None

    @beartype
    def unwrap(self) -> T:
        """Get the success value."""
        return self.value

    @beartype
    def unwrap_or(self, default: Any) -> Any:
        return self.value

    @beartype
    def unwrap_err(self) -> NoReturn:
        """Raise ValueError as this is Ok."""
        raise ValueError("Called unwrap_err on Ok value")

    def map(self, func: Callable[[T], U]) -> "Ok[U]":
        """Transform the success value."""
        return Ok(func(self.value))


@frozen
class Err(Generic[E]):
    """Error result wrapper."""

    error: E

    @beartype
    def is_ok(self) -> bool:
        return False

    @beartype
    def is_err(self) -> bool:
        return True

    @property
    def ok_value(self) -> None:
        return None

    @property
    def err_value(self) -> E:
        return self.error

    @beartype
    def unwrap(self) -> NoReturn:
        """Raise ValueError as this is Err."""
        raise ValueError(f"Called unwrap on Err value: {self.error}")

    @beartype
    def unwrap_or(self, default: Any) -> Any:
        return default

    @beartype
    def unwrap_err(self) -> E:
        """Get the error value."""
        return self.error

    def map(self, func: Callable[[Any], Any]) -> "Err[E]":
        """No-op for Err values."""
        return self


if TYPE_CHECKING:
    Result = Ok[T] | Err[E]
else:

    class Result(Generic[T, E]):
        """Runtime stand-in so ``Result[T, E]`` works in annotations."""

        @staticmethod
        def ok(value: Any) -> Ok[Any]:
            return Ok(value)

        @staticmethod
        def err(error: Any) -> Err[Any]:
            return Err(error)

        def __class_getitem__(cls, params: Any) -> Any:
            return Ok[Any] | Err[Any]
