"""
Serializers: classes which carry a schema for objects of another class.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar

from ._types import is_collection
from .exceptions import UndefinedMethodError
from .model import Serializable

__all__ = [
    "Serializer",
]


class Serializer(Serializable):
    """
    Wraps an object (or a collection of objects) to build it using the schema
    declared on the serializer. Schema keys defined on the serializer class are read
    from the serializer, all others from the wrapped object.

    Example:

    ```python
    class UserSerializer(Serializer):
        json_schema = {"name": str, "greeting": str}
        serializer_context = ("salutation",)

        def greeting(self) -> str:
            return f"{self.salutation}, {self.obj.name}"

    UserSerializer(user, salutation="Hello").build_schema()
    ```
    """

    serializer_context: ClassVar[tuple[str, ...]] = ()
    """
    Names of context entries exposed as attributes.
    """

    obj: Any
    """
    Wrapped object or collection.
    """

    context: Mapping[str, Any]
    """
    Extra values passed at construction.
    """

    def __init__(self, obj: Any, /, **context: Any):
        self.obj = obj
        self.context = context

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        if "serializer_context" not in vars(cls):
            return

        names = cls.serializer_context
        if not (
            isinstance(names, tuple)
            and names
            and all(isinstance(n, str) and n.isidentifier() for n in names)
        ):
            raise TypeError("Please provide a tuple of names to `serializer_context`")

        for name in names:
            setattr(cls, name, _context_property(name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.obj!r})"

    @classmethod
    def defines(cls, name: str, /) -> bool:
        """
        Check whether a serializer class (not `Serializer` itself) defines the given
        attribute.
        """
        for base in cls.__mro__:
            if base is Serializer:
                return False
            if name in vars(base):
                return True
        return False

    def build_schema(self, **options: Any) -> Any:
        """
        Build mapping from the wrapped object, or a list of mappings if the wrapped
        object is a collection.
        """
        if is_collection(self.obj):
            from .api import build_collection

            return build_collection(self.__wrap_elements(), **options)
        return super().build_schema(**options)

    def serialize(self, **options: Any) -> str:
        if is_collection(self.obj):
            from .api import serialize_collection

            return serialize_collection(self.__wrap_elements(), **options)
        return super().serialize(**options)

    def __wrap_elements(self) -> list[Serializer]:
        return [type(self)(o, **self.context) for o in self.obj]


def _context_property(name: str) -> property:
    def get(self: Serializer) -> Any:
        try:
            return self.context[name]
        except KeyError as e:
            raise UndefinedMethodError(
                f"{type(self).__name__} has no context entry `{name}`"
            ) from e

    return property(get, doc=f"Context entry `{name}`.")
