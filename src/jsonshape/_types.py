"""
Types used throughout package.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

__all__ = [
    "SCALAR_ITERABLE_TYPES",
    "is_collection",
]

SCALAR_ITERABLE_TYPES = (str, bytes, bytearray, memoryview)
"""
Iterable types which are treated as single values rather than collections.
"""


def is_collection(obj: Any) -> bool:
    """
    Check whether object is collection-like: iterable, but neither a mapping nor a
    string-like value.
    """
    return isinstance(obj, Iterable) and not isinstance(
        obj, (Mapping, *SCALAR_ITERABLE_TYPES)
    )
