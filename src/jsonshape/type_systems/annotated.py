"""
Type system which checks values against arbitrary type annotations via `pydantic`,
with optional coercion.
"""

from __future__ import annotations

import typing
from typing import Any

from pydantic import (
    ConfigDict,
    PydanticUndefinedAnnotation,
    PydanticUserError,
    TypeAdapter,
    ValidationError,
)

from .base import Result, describe_type, failure, success
from .builtin import Any as AnyToken
from .builtin import Bool as BoolToken

__all__ = [
    "AnnotatedTypeSystem",
]

ADAPTER_CONFIG = ConfigDict(arbitrary_types_allowed=True)
"""
Allow plain classes as annotations, checked with `isinstance()`.
"""


class AnnotatedTypeSystem:
    """
    Checks values against type annotations such as `int | None`,
    `Literal["male", "female"]`, or `Annotated[int, Field(gt=0)]`.

    Unlike the builtin type system, `None` is only accepted where the annotation
    allows it. In strict mode (default) values must already have the annotated type;
    in lax mode values are converted where `pydantic` supports it (e.g. `"12"` to
    `12` for `int`) and `coerce()` returns the converted value.
    """

    strict: bool
    """
    Whether to reject values which would need conversion.
    """

    __adapters: dict[int, tuple[Any, TypeAdapter[Any]]]
    """
    Mapping of annotation id to annotation and its adapter; the annotation is kept
    to preserve its id.
    """

    def __init__(self, *, strict: bool = True):
        self.strict = strict
        self.__adapters = {}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strict={self.strict})"

    def check_type(self, value: Any, type_: Any, /) -> Result:
        try:
            self.__validate(value, type_)
        except ValidationError as e:
            reason = e.errors()[0]["msg"]
            return failure(
                f"Expected {describe_type(type_)}, got {type(value).__name__}: {reason}"
            )
        except (PydanticUserError, PydanticUndefinedAnnotation) as e:
            return failure(f"Unsupported type descriptor {type_!r}: {e}")
        return success()

    def coerce(self, value: Any, type_: Any, /) -> Any:
        return self.__validate(value, type_)

    def __validate(self, value: Any, type_: Any) -> Any:
        return self.__get_adapter(type_).validate_python(value, strict=self.strict)

    def __get_adapter(self, type_: Any) -> TypeAdapter[Any]:
        if entry := self.__adapters.get(id(type_)):
            return entry[1]

        annotation = _normalize_annotation(type_)
        try:
            adapter = TypeAdapter(annotation, config=ADAPTER_CONFIG)
        except PydanticUserError:
            # models, dataclasses, and typed dicts carry their own config
            adapter = TypeAdapter(annotation)

        self.__adapters[id(type_)] = (type_, adapter)
        return adapter


def _normalize_annotation(type_: Any) -> Any:
    """
    Map builtin type system tokens to equivalent annotations.
    """
    if type_ is AnyToken:
        return typing.Any
    if type_ is BoolToken:
        return bool
    return type_
