"""
Entry points to build and serialize objects.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from ._types import is_collection
from .assigning import subject_type
from .building import SchemaBuilder, select_serializer
from .casing import camelize_keys
from .configuration import Configuration, get_config
from .exceptions import InvalidCollectionError
from .registry import is_schema_bearing
from .serializer import Serializer
from .wrapping import wrap

__all__ = [
    "build_schema",
    "serialize",
    "build_collection",
    "serialize_collection",
    "dump_json",
]


def build_schema(
    instance: Any,
    /,
    *,
    serializer: type[Serializer] | None = None,
    tag: str | None = None,
    **options: Any,
) -> dict[str, Any]:
    """
    Build a mapping from the effective schema of an instance.

    :param serializer: Serializer class to wrap the instance in
    :param tag: Tag of the registered serializer to use, `"default"` if not passed
    :param options: Configuration settings overriding the process-wide defaults
    :raises ConfigurationError: If an option is unknown or invalid
    :raises UnknownSchemaError: If no schema can be resolved
    """
    config = get_config().with_overrides(**options)
    return _build(instance, config, serializer, tag)


def serialize(
    instance: Any,
    /,
    *,
    serializer: type[Serializer] | None = None,
    tag: str | None = None,
    **options: Any,
) -> str:
    """
    Serialize an instance to JSON. Accepts the same arguments as `build_schema()`.
    """
    return dump_json(build_schema(instance, serializer=serializer, tag=tag, **options))


def build_collection(
    collection: Iterable[Any],
    /,
    *,
    serializer: type[Serializer] | None = None,
    tag: str | None = None,
    **options: Any,
) -> list[Any]:
    """
    Build a list from a collection in iteration order. Elements are built as
    mappings if schema-bearing (or if a serializer is passed), and passed through
    as-is otherwise.

    :raises InvalidCollectionError: If collection is not iterable, or is a string or
    mapping
    """
    if not is_collection(collection):
        raise InvalidCollectionError()

    config = get_config().with_overrides(**options)
    return [
        (
            _build(item, config, serializer, tag)
            if serializer is not None or is_schema_bearing(item)
            else item
        )
        for item in collection
    ]


def serialize_collection(
    collection: Iterable[Any],
    /,
    *,
    serializer: type[Serializer] | None = None,
    tag: str | None = None,
    **options: Any,
) -> str:
    """
    Serialize a collection to a JSON array. Accepts the same arguments as
    `build_collection()`.
    """
    return dump_json(
        build_collection(collection, serializer=serializer, tag=tag, **options)
    )


def dump_json(obj: Any) -> str:
    """
    Encode to compact JSON, keeping non-ASCII characters.
    """
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def _build(
    instance: Any,
    config: Configuration,
    serializer: type[Serializer] | None,
    tag: str | None,
) -> dict[str, Any]:
    subject = select_serializer(instance, serializer=serializer, tag=tag)
    mapping = SchemaBuilder(config).build(subject)

    if config.camelize:
        mapping = camelize_keys(mapping)

    return wrap(mapping, config, _get_wrap_class(subject))


def _get_wrap_class(subject: Any) -> type:
    """
    Get class whose name is used for root and namespace keys: the wrapped object's
    class for serializers of objects, the serializer's own class for serializers of
    mappings or of nothing.
    """
    if isinstance(subject, Serializer):
        obj = subject.obj
        if obj is None or isinstance(obj, Mapping):
            return type(subject)
    return subject_type(subject)
