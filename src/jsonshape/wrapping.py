"""
Wrapping of built mappings in root and namespace keys.
"""

from __future__ import annotations

from typing import Any

from .casing import (
    break_namespaces,
    camelize,
    extract_class,
    namespace_path,
    underscore,
)
from .configuration import Configuration
from .exceptions import UnknownRootError

__all__ = [
    "wrap",
]


def wrap(
    mapping: dict[str, Any], config: Configuration, cls: type | None = None
) -> dict[str, Any]:
    """
    Wrap a built mapping according to configuration, in order of precedence:

    1. `root`: Wrap in the given key
    2. `include_namespaces` or a non-default `namespace_nesting_level`: Wrap in
    nested keys derived from the qualified name of `cls`
    3. `include_root`: Wrap in a key derived from the name of `cls`

    The result never shares containers with the input.

    :param cls: Class whose name is used for the keys
    :raises UnknownRootError: If wrapping by class name is requested without a class
    :raises InvalidNestingLevelError: If `namespace_nesting_level` is 0
    """
    copied = _copy(mapping)

    if not config.wraps:
        return copied

    if config.root is not None:
        return {_transform_key(config.root, config.camelize): copied}

    if cls is None:
        raise UnknownRootError()

    qualname = namespace_path(cls)

    if config.wraps_namespaces:
        chain = break_namespaces(
            qualname,
            camelize=config.camelize,
            nesting_level=config.namespace_nesting_level,
        )
        _inject(chain, copied)
        return chain

    return {_transform_key(extract_class(qualname), config.camelize): copied}


def _transform_key(key: str, camelize_: bool) -> str:
    return camelize(key, False) if camelize_ else underscore(key)


def _inject(chain: dict[str, Any], mapping: dict[str, Any]):
    """
    Replace the empty innermost mapping of a chain with the given mapping.
    """
    node = chain
    while True:
        ((key, child),) = node.items()
        if not child:
            node[key] = mapping
            return
        node = child


def _copy(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {k: _copy(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_copy(o) for o in obj]
    return obj
