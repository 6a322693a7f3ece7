"""
Schema leaves with an explicit accessor binding.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

__all__ = [
    "Field",
]


@dataclass(frozen=True)
class Field:
    """
    Schema leaf which binds a type descriptor to an explicit accessor, used instead
    of looking up the schema key on the instance.

    Example:

    ```python
    json_schema = {
        "full_name": Field(str, source=lambda user: f"{user.first} {user.last}"),
        "avatar": Field(str, source="image_url"),
    }
    ```
    """

    type_: Any
    """
    Type descriptor for the active type system.
    """

    source: str | Callable[[Any], Any] | None = None
    """
    Name of the attribute/method/key to read, or a function invoked with the
    instance. If `None`, the schema key is used.
    """

    def __repr__(self) -> str:
        return f"Field({self.type_!r}, source={self.source!r})"
