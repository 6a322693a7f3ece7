"""
Mixin to declare schemas as class attributes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from .registry import DEFAULT_TAG, REGISTRY, Schema

if TYPE_CHECKING:
    from .serializer import Serializer

__all__ = [
    "Serializable",
]


class Serializable:
    """
    Base class which registers declarations made as class attributes when a
    subclass is created:

    - `json_schema`: Mapping of output keys to type descriptors or nested schemas
    - `json_aliases`: Mapping of output keys to the names of accessors to read
    - `json_delegate`: Class whose schema to use instead of declaring one
    - `json_serializers`: Serializer class for the default tag, or mapping of tag to
    serializer class

    Declarations apply to the class they are made on. Schemas are inherited by
    subclasses, delegation is not.

    Example:

    ```python
    class Note(Serializable):
        json_schema = {"foo": int, "nested": {"left": str, "right": Bool}}

        def foo(self) -> int:
            return 4
        ...

    Note().build_schema()
    ```
    """

    json_schema: ClassVar[Mapping[str, Any] | None] = None
    json_aliases: ClassVar[Mapping[str, str] | None] = None
    json_delegate: ClassVar[type | None] = None
    json_serializers: ClassVar[
        Mapping[str, type[Serializer]] | type[Serializer] | None
    ] = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)

        REGISTRY.register(cls)
        namespace = vars(cls)

        if (schema := namespace.get("json_schema")) is not None:
            REGISTRY.declare_schema(cls, schema)
        if (aliases := namespace.get("json_aliases")) is not None:
            REGISTRY.declare_aliases(cls, aliases)
        if (delegate := namespace.get("json_delegate")) is not None:
            REGISTRY.delegate(cls, delegate)
        if (serializers := namespace.get("json_serializers")) is not None:
            if not isinstance(serializers, Mapping):
                serializers = {DEFAULT_TAG: serializers}
            for tag, serializer in serializers.items():
                REGISTRY.register_serializer(cls, serializer, tag=tag)

    @classmethod
    def defined_schema(cls) -> Schema:
        """
        Get the effective schema of this class.
        """
        return REGISTRY.resolve_schema(cls)

    def build_schema(self, **options: Any) -> dict[str, Any]:
        """
        Build mapping from this object's schema. See `jsonshape.build_schema()`.
        """
        from .api import build_schema

        return build_schema(self, **options)

    def serialize(self, **options: Any) -> str:
        """
        Serialize this object to JSON. See `jsonshape.serialize()`.
        """
        from .api import serialize

        return serialize(self, **options)
