"""
Per-class storage of declared schemas, aliases, delegation targets, and serializers.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, TypeAlias, TypeVar
from weakref import WeakKeyDictionary

from .exceptions import (
    InvalidAliasesError,
    InvalidSchemaDelegationError,
    InvalidSchemaError,
    InvalidSerializerError,
    UnknownSchemaError,
    UnknownTagError,
)

if TYPE_CHECKING:
    from .serializer import Serializer

__all__ = [
    "DEFAULT_TAG",
    "RegistryEntry",
    "SchemaRegistry",
    "REGISTRY",
    "declare_schema",
    "declare_aliases",
    "delegate_to",
    "serialize_with",
    "find_serializer",
    "defined_schema",
    "is_schema_bearing",
]

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=type)

DEFAULT_TAG = "default"
"""
Tag of the serializer used when no tag is requested.
"""

Schema: TypeAlias = Mapping[str, Any]
"""
Mapping of output keys to type descriptors or nested schemas.
"""


@dataclass
class RegistryEntry:
    """
    Declarations made directly on a single class.
    """

    schema: Schema | None = None
    """
    Read-only copy of the declared schema.
    """

    aliases: Mapping[str, str] | None = None
    """
    Mapping of schema key to the name of the accessor to read instead.
    """

    delegate: type | None = None
    """
    Class whose schema is borrowed.
    """

    serializers: dict[str, type[Serializer]] = field(default_factory=dict)
    """
    Mapping of tag to serializer class.
    """


class SchemaRegistry:
    """
    Associates classes with their declarations and resolves the effective schema
    of a class.

    Entries are written when declarations execute, typically at class definition,
    and only read afterward.
    """

    __entries: WeakKeyDictionary[type, RegistryEntry]

    def __init__(self):
        self.__entries = WeakKeyDictionary()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(classes={len(self.__entries)})"

    def register(self, cls: type, /) -> RegistryEntry:
        """
        Get the entry of a class, creating an empty one if needed. A registered class
        is schema-bearing even before declaring a schema.
        """
        entry = self.__entries.get(cls)
        if entry is None:
            entry = self.__entries[cls] = RegistryEntry()
        return entry

    def is_registered(self, cls: type, /) -> bool:
        """
        Check whether class or any of its ancestors has an entry.
        """
        return any(base in self.__entries for base in cls.__mro__)

    def declare_schema(self, cls: type, schema: Any, /):
        """
        Declare the schema of a class.

        :raises InvalidSchemaError: If schema is not a mapping with string keys
        """
        if not isinstance(schema, Mapping):
            raise InvalidSchemaError("Schema should be defined as a mapping")

        self.register(cls).schema = _freeze_schema(schema)
        logger.debug("Declared schema of %s: %s", cls.__qualname__, list(schema))

    def declare_aliases(self, cls: type, aliases: Any, /):
        """
        Declare key aliases of a class as `{output_key: accessor_name}`.

        :raises InvalidAliasesError: If aliases are not a mapping of strings
        """
        if not isinstance(aliases, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in aliases.items()
        ):
            raise InvalidAliasesError("Aliases should be defined as a mapping")

        self.register(cls).aliases = MappingProxyType(dict(aliases))

    def delegate(self, cls: type, target: Any, /):
        """
        Make a class borrow the schema of the target class. Delegation is not
        inherited by subclasses of `cls`.

        :raises TypeError: If target is not a class
        :raises InvalidSchemaDelegationError: If target has no schema
        """
        if not isinstance(target, type):
            raise TypeError(
                f"Expected type of class, got {type(target).__name__} instead"
            )
        if self.find_schema(target) is None:
            raise InvalidSchemaDelegationError(
                f"Class {target.__name__} does not declare a schema"
            )

        self.register(cls).delegate = target
        logger.debug("Delegated schema of %s to %s", cls.__qualname__, target.__qualname__)

    def register_serializer(
        self, cls: type, serializer: Any, /, *, tag: str = DEFAULT_TAG
    ):
        """
        Register a serializer for a class under a tag.

        :raises InvalidSerializerError: If serializer is not a `Serializer` subclass
        """
        from .serializer import Serializer

        if not (isinstance(serializer, type) and issubclass(serializer, Serializer)):
            raise InvalidSerializerError(
                f"{serializer} should be inherited from Serializer"
            )

        self.register(cls).serializers[tag] = serializer
        logger.debug(
            "Registered serializer %s for %s with tag %r",
            serializer.__qualname__,
            cls.__qualname__,
            tag,
        )

    def find_schema(self, cls: type, /) -> Schema | None:
        """
        Find the effective schema of a class, in order of precedence:

        1. Schema declared on the class itself
        2. Schema of the delegation target of the class
        3. Schema declared on the nearest ancestor; an ancestor which delegates
        without declaring a schema ends the search
        """
        if entry := self.__entries.get(cls):
            if entry.schema is not None:
                return entry.schema
            if entry.delegate is not None:
                logger.debug(
                    "Using schema of %s for %s",
                    entry.delegate.__qualname__,
                    cls.__qualname__,
                )
                return self.find_schema(entry.delegate)

        for base in cls.__mro__[1:]:
            if not (base_entry := self.__entries.get(base)):
                continue
            if base_entry.schema is not None:
                logger.debug(
                    "Using schema of %s for %s", base.__qualname__, cls.__qualname__
                )
                return base_entry.schema
            if base_entry.delegate is not None:
                # delegation of an ancestor is not inherited
                return None

        return None

    def resolve_schema(self, cls: type, /) -> Schema:
        """
        Get the effective schema of a class.

        :raises UnknownSchemaError: If no schema can be resolved
        """
        schema = self.find_schema(cls)
        if schema is None:
            raise UnknownSchemaError(cls)
        return schema

    def find_aliases(self, cls: type, /) -> Mapping[str, str]:
        """
        Get aliases declared on the class or its nearest ancestor declaring any.
        """
        for base in cls.__mro__:
            entry = self.__entries.get(base)
            if entry and entry.aliases is not None:
                return entry.aliases
        return MappingProxyType({})

    def find_serializer(
        self, cls: type, /, tag: str | None = None
    ) -> type[Serializer] | None:
        """
        Find the serializer registered for a class (or its ancestors) under a tag.

        :param tag: Serializer tag, `DEFAULT_TAG` if `None`
        :raises UnknownTagError: If a non-default tag has no serializer
        :return: Serializer class, or `None` if no default serializer is registered
        """
        tag_ = DEFAULT_TAG if tag is None else tag

        for base in cls.__mro__:
            entry = self.__entries.get(base)
            if entry and (serializer := entry.serializers.get(tag_)):
                return serializer

        if tag_ != DEFAULT_TAG:
            raise UnknownTagError(tag_)
        return None


REGISTRY = SchemaRegistry()
"""
Registry used for all declarations.
"""


def declare_schema(cls: T, schema: Mapping[str, Any], /) -> T:
    """
    Declare the schema of a class. Returns the class.
    """
    REGISTRY.declare_schema(cls, schema)
    return cls


def declare_aliases(cls: T, aliases: Mapping[str, str], /) -> T:
    """
    Declare key aliases of a class. Returns the class.
    """
    REGISTRY.declare_aliases(cls, aliases)
    return cls


def delegate_to(cls: T, target: type, /) -> T:
    """
    Make a class borrow the schema of another class. Returns the class.
    """
    REGISTRY.delegate(cls, target)
    return cls


def serialize_with(
    cls: T, serializer: type[Serializer], /, *, tag: str = DEFAULT_TAG
) -> T:
    """
    Register a serializer for a class under a tag. Returns the class.
    """
    REGISTRY.register_serializer(cls, serializer, tag=tag)
    return cls


def find_serializer(cls: type, /, tag: str | None = None) -> type[Serializer] | None:
    return REGISTRY.find_serializer(cls, tag)


def defined_schema(cls: type, /) -> Schema:
    """
    Get the effective schema of a class, e.g. to compose it into another schema.
    """
    return REGISTRY.resolve_schema(cls)


def is_schema_bearing(obj: Any, /) -> bool:
    """
    Check whether object can be built as a nested record.
    """
    return REGISTRY.is_registered(type(obj))


def _freeze_schema(schema: Mapping[Any, Any], path: tuple[str, ...] = ()) -> Schema:
    """
    Create a read-only copy of a (possibly nested) schema.
    """
    frozen: dict[str, Any] = {}
    for key, value in schema.items():
        if not isinstance(key, str):
            location = ".".join(path) or "<root>"
            raise InvalidSchemaError(
                f"Schema keys should be strings, got {key!r} at {location}"
            )
        frozen[key] = (
            _freeze_schema(value, (*path, key)) if isinstance(value, Mapping) else value
        )
    return MappingProxyType(frozen)
