"""
Exception classes.

Each error also derives from the closest builtin exception so callers may catch
either the specific error or the builtin one.
"""

from __future__ import annotations

__all__ = [
    "JsonShapeError",
    "UnknownSchemaError",
    "InvalidSchemaError",
    "InvalidAliasesError",
    "InvalidSchemaDelegationError",
    "InvalidSerializerError",
    "UndefinedMethodError",
    "InvalidTypeError",
    "UnknownRootError",
    "UnknownTagError",
    "InvalidCollectionError",
    "InvalidNestingLevelError",
    "ConfigurationError",
]


class JsonShapeError(Exception):
    """
    Base class for all errors raised by this package.
    """


class UnknownSchemaError(JsonShapeError, LookupError):
    """
    No schema could be resolved for an instance's class through direct declaration,
    delegation, or inheritance.
    """

    def __init__(self, cls: type):
        super().__init__(f"Can't serialize {cls.__name__} - no schema was provided.")


class InvalidSchemaError(JsonShapeError, TypeError):
    """
    Schema was not declared as a mapping with string keys.
    """


class InvalidAliasesError(JsonShapeError, TypeError):
    """
    Aliases were not declared as a mapping of strings.
    """


class InvalidSchemaDelegationError(JsonShapeError, TypeError):
    """
    Delegation target does not declare a schema.
    """


class InvalidSerializerError(JsonShapeError, TypeError):
    """
    Object registered or passed as serializer is not a `Serializer` subclass.
    """


class UndefinedMethodError(JsonShapeError, AttributeError):
    """
    A schema key has no corresponding accessor on the instance.
    """

    HINT = (
        "You have probably defined a key in the schema that doesn't have a "
        "corresponding method."
    )

    def __init__(self, detail: str):
        super().__init__(f"{detail}. {self.HINT}")


class InvalidTypeError(JsonShapeError, TypeError):
    """
    A resolved value failed the active type system's check.
    """

    key: str
    """
    Schema key whose value failed the check.
    """

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Wrong type for key `{key}`. {message}.")


class UnknownRootError(JsonShapeError, ValueError):
    """
    Root or namespace wrapping was requested without a class name.
    """

    def __init__(self):
        super().__init__("Can't wrap schema in root key - class name was not passed")


class UnknownTagError(JsonShapeError, LookupError):
    """
    A non-default serializer tag was requested but not registered.
    """

    tag: str

    def __init__(self, tag: str):
        self.tag = tag
        super().__init__(f"The tag specified ({tag}) has no corresponding serializer")


class InvalidCollectionError(JsonShapeError, TypeError):
    """
    Collection serialization was requested for a non-iterable object.
    """

    def __init__(self):
        super().__init__("Can't serialize collection - must be iterable")


class InvalidNestingLevelError(JsonShapeError, ValueError):
    """
    Namespace wrapping was requested with a nesting level of 0.
    """

    def __init__(self):
        super().__init__("There is no point in specifying `namespace_nesting_level: 0`")


class ConfigurationError(JsonShapeError, ValueError):
    """
    Invalid configuration option, unknown option name, or unreadable configuration
    file.
    """
