"""
Builtin type system: nullable `isinstance()` checks without coercion.
"""

from __future__ import annotations

from types import NoneType, UnionType
from typing import Literal, Union, get_args, get_origin

from .base import Result, describe_type, failure, success

__all__ = [
    "BuiltinToken",
    "Any",
    "Bool",
    "BuiltinTypeSystem",
    "BUILTIN",
]


class BuiltinToken:
    """
    Singleton type descriptor with special meaning in the builtin type system.
    """

    __name: str

    def __init__(self, name: str):
        self.__name = name

    def __repr__(self) -> str:
        return self.__name

    def __reduce__(self) -> str:
        # keep singleton identity through copy/pickle
        return self.__name


Any = BuiltinToken("Any")
"""
Matches any value, including `None`.
"""

Bool = BuiltinToken("Bool")
"""
Matches `True` or `False` only.
"""


class BuiltinTypeSystem:
    """
    Default type system. Any field may be `None`; otherwise values must be instances
    of the class given as descriptor. Unions (`int | str`) and parameterized generics
    (`list[int]`, checked against `list`) are accepted as descriptors.
    """

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def check_type(self, value: object, type_: object, /) -> Result:
        if type_ is Any:
            return success()
        if value is None:
            return success()
        if type_ is Bool:
            return self.__check_bool(value)

        classes = _get_classes(type_)
        if classes is None:
            return failure(f"Unsupported type descriptor {type_!r}")

        if isinstance(value, classes):
            # bool only satisfies int if a class other than int admits it
            if isinstance(value, bool) and not any(
                c is not int and issubclass(bool, c) for c in classes
            ):
                return failure(f"Expected {describe_type(type_)}, got bool")
            return success()

        return failure(f"Expected {describe_type(type_)}, got {type(value).__name__}")

    def coerce(self, value: object, type_: object, /) -> object:
        _ = type_
        return value

    def __check_bool(self, value: object) -> Result:
        if value is True or value is False:
            return success()
        return failure(f"Expected Bool, got {type(value).__name__}")


def _get_classes(type_: object) -> tuple[type, ...] | None:
    """
    Get classes to pass to `isinstance()` for descriptor, or `None` if the descriptor
    can't be checked this way.
    """
    if type_ is None:
        return (NoneType,)
    if type_ is Bool:
        return (bool,)

    origin = get_origin(type_)

    if isinstance(type_, UnionType) or origin is Union:
        classes: list[type] = []
        for arg in get_args(type_):
            arg_classes = _get_classes(arg)
            if arg_classes is None:
                return None
            classes += arg_classes
        return tuple(classes)

    if origin is Literal:
        return tuple({type(a) for a in get_args(type_)})

    if origin is not None:
        return (origin,) if isinstance(origin, type) else None

    if isinstance(type_, type):
        return (type_,)

    return None


BUILTIN = BuiltinTypeSystem()
