"""
Walking of schemas to build output mappings.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from ._types import is_collection
from .assigning import assign_value, provides, read_value
from .configuration import Configuration
from .exceptions import InvalidSerializerError
from .registry import REGISTRY, Schema, SchemaRegistry
from .serializer import Serializer

__all__ = [
    "SchemaBuilder",
    "BuildFrame",
    "select_serializer",
]

logger = logging.getLogger(__name__)


class SchemaBuilder:
    """
    Builds output mappings by walking the effective schema of an instance,
    resolving each leaf with the value assigner and recursing into nested schemas,
    records, and collections.
    """

    config: Configuration
    """
    Configuration for this build.
    """

    registry: SchemaRegistry
    """
    Registry from which schemas, aliases, and serializers are resolved.
    """

    def __init__(self, config: Configuration, registry: SchemaRegistry = REGISTRY):
        self.config = config
        self.registry = registry

    def __repr__(self) -> str:
        return f"{type(self).__name__}(config={self.config})"

    def build(self, instance: Any) -> dict[str, Any]:
        """
        Build mapping from instance using a fresh frame.
        """
        return self.build_record(instance, BuildFrame(builder=self))

    def build_record(self, instance: Any, frame: BuildFrame) -> dict[str, Any]:
        """
        Build mapping from an instance's effective schema, first wrapping it in its
        default serializer if it has one.

        :raises UnknownSchemaError: If no schema can be resolved
        """
        subject = select_serializer(instance, registry=self.registry)
        schema = self.registry.resolve_schema(type(subject))
        logger.debug(
            "Building %s at %s with %s",
            type(instance).__qualname__,
            frame.location,
            type(subject).__qualname__,
        )
        return self.walk(schema, subject, frame)

    def walk(self, schema: Schema, instance: Any, frame: BuildFrame) -> dict[str, Any]:
        """
        Build mapping from the given schema, visiting entries in declaration order.
        """
        aliases = self.registry.find_aliases(type(instance))
        result: dict[str, Any] = {}

        for key, descriptor in schema.items():
            frame_ = frame.descend(key)
            if isinstance(descriptor, Mapping):
                result[key] = self.__walk_nested(
                    descriptor, instance, aliases.get(key, key), frame_
                )
            else:
                result[key] = assign_value(instance, key, descriptor, aliases, frame_)

        return result

    def __walk_nested(
        self, schema: Schema, instance: Any, name: str, frame: BuildFrame
    ) -> dict[str, Any] | list[dict[str, Any]] | None:
        """
        Walk nested schema against the value the instance provides for it, or against
        the instance itself if it provides none.
        """
        if not provides(instance, name):
            return self.walk(schema, instance, frame)

        value = read_value(instance, name)
        if value is None:
            return None
        if is_collection(value):
            return [
                self.walk(schema, v, frame.descend(i)) for i, v in enumerate(value)
            ]
        return self.walk(schema, value, frame)


class BuildFrame:
    """
    Position within a single build: the path of keys/indices from the top-level
    instance, and the classes currently being built.
    """

    skip: set[type]
    """
    Classes being built further up the tree; nested values of these classes are
    output as `None`. Shared by all frames of a build.
    """

    __builder: SchemaBuilder
    __path: tuple[str | int, ...]

    def __init__(
        self,
        *,
        builder: SchemaBuilder,
        path: tuple[str | int, ...] = (),
        skip: set[type] | None = None,
    ):
        self.skip = skip if skip is not None else set()
        self.__builder = builder
        self.__path = path

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={self.location}, skip={self.skip})"

    @property
    def config(self) -> Configuration:
        return self.__builder.config

    @property
    def location(self) -> str:
        """
        The current path formatted for messages.
        """
        return ".".join(str(p) for p in self.__path) or "<root>"

    def descend(self, segment: str | int, /) -> BuildFrame:
        """
        Create a frame for a child key or index, sharing the skip set.
        """
        return BuildFrame(
            builder=self.__builder, path=(*self.__path, segment), skip=self.skip
        )

    def recurse(self, obj: Any, segment: str | int | None = None, /) -> dict[str, Any]:
        """
        Build a nested record, optionally at a child index.
        """
        frame = self if segment is None else self.descend(segment)
        return self.__builder.build_record(obj, frame)

    @contextmanager
    def skipping(self, cls: type) -> Iterator[None]:
        """
        Add class to the skip set for the duration of the block, removing it
        afterward only if it was added here.
        """
        added = cls not in self.skip
        self.skip.add(cls)
        try:
            yield
        finally:
            if added:
                self.skip.discard(cls)


def select_serializer(
    instance: Any,
    *,
    serializer: type[Serializer] | None = None,
    tag: str | None = None,
    registry: SchemaRegistry = REGISTRY,
) -> Any:
    """
    Get the object to build for an instance:

    - Serializers are returned as-is
    - An explicit serializer class wraps the instance
    - Otherwise the serializer registered for the instance's class under the tag
    wraps the instance, if any

    :raises InvalidSerializerError: If `serializer` is not a `Serializer` subclass
    :raises UnknownTagError: If a non-default tag has no serializer
    """
    if isinstance(instance, Serializer):
        return instance

    if serializer is not None:
        if not (isinstance(serializer, type) and issubclass(serializer, Serializer)):
            raise InvalidSerializerError(
                f"{serializer} should be inherited from Serializer"
            )
        return serializer(instance)

    if serializer_cls := registry.find_serializer(type(instance), tag):
        logger.debug(
            "Selected serializer %s for %s",
            serializer_cls.__qualname__,
            type(instance).__qualname__,
        )
        return serializer_cls(instance)

    return instance
