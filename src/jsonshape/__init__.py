"""
Declarative serialization of objects to JSON-compatible mappings using schemas.
"""

from .api import (
    build_collection,
    build_schema,
    dump_json,
    serialize,
    serialize_collection,
)
from .configuration import (
    Configuration,
    configure,
    get_config,
    load_config,
    reset_config,
)
from .exceptions import (
    ConfigurationError,
    InvalidAliasesError,
    InvalidCollectionError,
    InvalidNestingLevelError,
    InvalidSchemaDelegationError,
    InvalidSchemaError,
    InvalidSerializerError,
    InvalidTypeError,
    JsonShapeError,
    UndefinedMethodError,
    UnknownRootError,
    UnknownSchemaError,
    UnknownTagError,
)
from .fields import Field
from .model import Serializable
from .registry import (
    declare_aliases,
    declare_schema,
    defined_schema,
    delegate_to,
    find_serializer,
    serialize_with,
)
from .serializer import Serializer
from .type_systems import AnnotatedTypeSystem, Any, Bool, TypeSystem

__all__ = [
    "build_collection",
    "build_schema",
    "dump_json",
    "serialize",
    "serialize_collection",
    "Configuration",
    "configure",
    "get_config",
    "load_config",
    "reset_config",
    "ConfigurationError",
    "InvalidAliasesError",
    "InvalidCollectionError",
    "InvalidNestingLevelError",
    "InvalidSchemaDelegationError",
    "InvalidSchemaError",
    "InvalidSerializerError",
    "InvalidTypeError",
    "JsonShapeError",
    "UndefinedMethodError",
    "UnknownRootError",
    "UnknownSchemaError",
    "UnknownTagError",
    "Field",
    "Serializable",
    "declare_aliases",
    "declare_schema",
    "defined_schema",
    "delegate_to",
    "find_serializer",
    "serialize_with",
    "Serializer",
    "AnnotatedTypeSystem",
    "Any",
    "Bool",
    "TypeSystem",
]
