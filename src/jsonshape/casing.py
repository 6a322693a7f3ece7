"""
String casing utilities for keys, root keys, and namespaces.
"""

from __future__ import annotations

import re
from typing import Any

from .exceptions import InvalidNestingLevelError

__all__ = [
    "camelize",
    "underscore",
    "uncapitalize",
    "extract_class",
    "namespace_path",
    "break_namespaces",
    "camelize_keys",
]

NAMESPACE_SEPARATOR = "."

LOCALS_MARKER = "<locals>"


def camelize(string: str, capitalize_first: bool = True) -> str:
    """
    Convert snake_case string to CamelCase, or lowerCamelCase if
    `capitalize_first` is `False`.

    Examples:

    - `camelize("snake_case") -> "SnakeCase"`
    - `camelize("snake_case", False) -> "snakeCase"`
    """
    if capitalize_first:
        return re.sub(r"(?:^|_)([^_\s]+)", lambda m: m.group(1).capitalize(), string)

    head, *tail = string.split("_", 1)
    return head + camelize(tail[0]) if tail else head


def underscore(string: str) -> str:
    """
    Convert CamelCase (possibly dotted) string to snake_case.
    """
    string = string.replace(NAMESPACE_SEPARATOR, "_")
    string = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", string)
    string = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", string)
    return string.replace("-", "_").lower()


def uncapitalize(string: str) -> str:
    return string[:1].lower() + string[1:]


def extract_class(qualname: str) -> str:
    """
    Extract last class from a qualified name, with its first character lowercased.

    Example: `extract_class("Animal.Dog.Collie") -> "collie"`
    """
    return uncapitalize(qualname.split(NAMESPACE_SEPARATOR)[-1])


def namespace_path(cls: type) -> str:
    """
    Get qualified name of class, dropping the enclosing function scope for classes
    defined in a function body.
    """
    qualname = cls.__qualname__
    marker = f"{LOCALS_MARKER}{NAMESPACE_SEPARATOR}"
    if marker in qualname:
        qualname = qualname.rsplit(marker, 1)[1]
    return qualname


def break_namespaces(
    qualname: str, *, camelize: bool, nesting_level: int
) -> dict[str, Any]:
    """
    Create a nested chain of single-key mappings from the last `nesting_level`
    segments of a qualified name, with an empty mapping at the innermost key.

    Example, with `nesting_level=3`:

    `"Business.System.Cashier.Reports.Withdraws" ->
    {"cashier": {"reports": {"withdraws": {}}}}`

    :raises InvalidNestingLevelError: If `nesting_level` is 0
    """
    if nesting_level == 0:
        raise InvalidNestingLevelError()

    segments = qualname.split(NAMESPACE_SEPARATOR)[-nesting_level:]

    chain: dict[str, Any] = {}
    for segment in reversed(segments):
        key = (
            _lower_camelize(uncapitalize(segment)) if camelize else underscore(segment)
        )
        chain = {key: chain}
    return chain


def camelize_keys(obj: Any) -> Any:
    """
    Recursively convert string keys of mappings to lowerCamelCase, descending into
    mappings and lists.
    """
    if isinstance(obj, dict):
        return {
            (_lower_camelize(k) if isinstance(k, str) else k): camelize_keys(v)
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [camelize_keys(o) for o in obj]
    return obj


def _lower_camelize(string: str) -> str:
    return camelize(string, False)
