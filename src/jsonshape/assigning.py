"""
Resolution, type checking, and dispatch of the value of a single schema leaf.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Collection, Mapping
from typing import TYPE_CHECKING, Any

from ._types import is_collection
from .exceptions import InvalidTypeError, UndefinedMethodError
from .fields import Field
from .registry import is_schema_bearing
from .serializer import Serializer

if TYPE_CHECKING:
    from .building import BuildFrame

__all__ = [
    "assign_value",
    "read_value",
    "provides",
    "subject_type",
]

logger = logging.getLogger(__name__)


def assign_value(
    instance: Any,
    key: str,
    descriptor: Any,
    aliases: Mapping[str, str],
    frame: BuildFrame,
) -> Any:
    """
    Get the output value of a schema leaf:

    1. Resolve the raw value through the accessor bound to the key
    2. Check it against the descriptor using the configured type system
    3. Coerce it
    4. Build it as a nested record or collection if applicable

    :raises UndefinedMethodError: If the accessor doesn't exist
    :raises InvalidTypeError: If the value fails the type check
    """
    if isinstance(descriptor, Field):
        type_ = descriptor.type_
        value = _read_source(instance, descriptor.source or aliases.get(key, key))
    else:
        type_ = descriptor
        value = read_value(instance, aliases.get(key, key))

    type_system = frame.config.type_system
    result = type_system.check_type(value, type_)
    if not result.success:
        raise InvalidTypeError(key, result.message)
    value = type_system.coerce(value, type_)

    if is_schema_bearing(value):
        return _assign_nested_record(instance, value, frame)

    if (
        is_collection(value)
        and isinstance(value, Collection)
        and len(value)
        and all(is_schema_bearing(v) for v in value)
    ):
        return _assign_nested_collection(instance, value, frame)

    return value


def read_value(instance: Any, name: str) -> Any:
    """
    Read the value of the named accessor:

    - Serializer: own attribute if the serializer class defines it, otherwise read
    from the wrapped object
    - Mapping: value of key
    - Other objects: attribute value, invoking bound methods with no arguments

    :raises UndefinedMethodError: If the accessor doesn't exist
    """
    if isinstance(instance, Serializer) and not instance.defines(name):
        return read_value(instance.obj, name)

    if isinstance(instance, Mapping):
        try:
            return instance[name]
        except KeyError as e:
            raise UndefinedMethodError(
                f"{type(instance).__name__} has no key '{name}'"
            ) from e

    try:
        value = getattr(instance, name)
        if inspect.ismethod(value):
            value = value()
    except UndefinedMethodError:
        raise
    except AttributeError as e:
        raise UndefinedMethodError(str(e)) from e

    return value


def provides(instance: Any, name: str) -> bool:
    """
    Check whether the named accessor exists on the instance without invoking it.
    """
    if isinstance(instance, Serializer):
        if instance.defines(name):
            return True
        return provides(instance.obj, name)

    if isinstance(instance, Mapping):
        return name in instance

    return hasattr(type(instance), name) or name in getattr(instance, "__dict__", ())


def subject_type(obj: Any) -> type:
    """
    Get the class an object is serialized as: the wrapped object's class for
    serializers, otherwise the object's own.
    """
    return type(obj.obj) if isinstance(obj, Serializer) else type(obj)


def _read_source(instance: Any, source: Any) -> Any:
    if isinstance(source, str):
        return read_value(instance, source)

    try:
        return source(instance)
    except UndefinedMethodError:
        raise
    except AttributeError as e:
        raise UndefinedMethodError(str(e)) from e


def _assign_nested_record(instance: Any, value: Any, frame: BuildFrame) -> Any:
    value_type = subject_type(value)
    if value_type in frame.skip:
        logger.debug(
            "Skipping %s at %s: already being built",
            value_type.__qualname__,
            frame.location,
        )
        return None

    with frame.skipping(subject_type(instance)):
        return frame.recurse(value)


def _assign_nested_collection(
    instance: Any, value: Collection[Any], frame: BuildFrame
) -> list[Any] | None:
    if skipped := {subject_type(v) for v in value} & frame.skip:
        logger.debug(
            "Skipping collection at %s: %s already being built",
            frame.location,
            ", ".join(sorted(t.__qualname__ for t in skipped)),
        )
        return None

    with frame.skipping(subject_type(instance)):
        return [frame.recurse(v, i) for i, v in enumerate(value)]
