"""
Contract for type systems used to check and coerce values.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import GenericAlias, UnionType
from typing import Any, Protocol, TypeAlias, get_origin, runtime_checkable

__all__ = [
    "TypeSystem",
    "Result",
    "Success",
    "Failure",
    "SUCCESS",
    "success",
    "failure",
    "describe_type",
]


@dataclass(frozen=True)
class Success:
    """
    Successful type check.
    """

    @property
    def success(self) -> bool:
        return True

    @property
    def message(self) -> None:
        return None


@dataclass(frozen=True)
class Failure:
    """
    Failed type check.
    """

    message: str
    """
    Human-readable reason, e.g. "Expected int, got str".
    """

    @property
    def success(self) -> bool:
        return False


Result: TypeAlias = Success | Failure
"""
Outcome of `TypeSystem.check_type()`.
"""

SUCCESS = Success()


def success() -> Success:
    return SUCCESS


def failure(message: str) -> Failure:
    return Failure(message)


@runtime_checkable
class TypeSystem(Protocol):
    """
    Structural contract for type systems. Any object providing both methods can be
    used as a type system; no registration is needed.
    """

    def check_type(self, value: Any, type_: Any, /) -> Result:
        """
        Check whether value satisfies the type descriptor.
        """
        ...

    def coerce(self, value: Any, type_: Any, /) -> Any:
        """
        Transform a value which already passed `check_type()`; return it unchanged
        if the type system doesn't support coercion.
        """
        ...


def describe_type(type_: Any) -> str:
    """
    Get a readable name of a type descriptor for error messages.
    """
    if isinstance(type_, type) and not isinstance(type_, GenericAlias):
        return type_.__name__
    if isinstance(type_, UnionType) or get_origin(type_) is not None:
        return str(type_).replace("typing.", "")
    return repr(type_)
