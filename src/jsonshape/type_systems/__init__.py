"""
Type systems used to check and coerce values returned by schema accessors.
"""

from .annotated import AnnotatedTypeSystem
from .base import (
    SUCCESS,
    Failure,
    Result,
    Success,
    TypeSystem,
    describe_type,
    failure,
    success,
)
from .builtin import BUILTIN, Any, Bool, BuiltinToken, BuiltinTypeSystem

__all__ = [
    "TypeSystem",
    "Result",
    "Success",
    "Failure",
    "SUCCESS",
    "success",
    "failure",
    "describe_type",
    "BuiltinToken",
    "Any",
    "Bool",
    "BuiltinTypeSystem",
    "BUILTIN",
    "AnnotatedTypeSystem",
]
