"""
Tests for the builtin type system.
"""

import copy
import pickle
from typing import Literal

from jsonshape.type_systems import (
    BUILTIN,
    Any,
    Bool,
    BuiltinTypeSystem,
    Failure,
    TypeSystem,
    describe_type,
)


def test_any():
    """
    Test that `Any` accepts every value.
    """
    for value in (None, 1, "a", [], object()):
        assert BUILTIN.check_type(value, Any).success


def test_none():
    """
    Test that `None` is accepted for any descriptor.
    """
    assert BUILTIN.check_type(None, int).success
    assert BUILTIN.check_type(None, Bool).success
    assert BUILTIN.check_type(None, list[str]).success


def test_bool():
    """
    Test that `Bool` only accepts `True` and `False`.
    """
    assert BUILTIN.check_type(True, Bool).success
    assert BUILTIN.check_type(False, Bool).success

    result = BUILTIN.check_type(1, Bool)
    assert not result.success
    assert result.message == "Expected Bool, got int"

    assert not BUILTIN.check_type("true", Bool).success


def test_class():
    result = BUILTIN.check_type("4", int)
    assert isinstance(result, Failure)
    assert result.message == "Expected int, got str"

    assert BUILTIN.check_type(4, int).success

    # bool is an int subclass but not an int value
    result = BUILTIN.check_type(True, int)
    assert isinstance(result, Failure)
    assert result.message == "Expected int, got bool"
    assert not BUILTIN.check_type(False, int | str).success

    assert BUILTIN.check_type(True, object).success
    assert BUILTIN.check_type(True, int | bool).success


def test_union():
    assert BUILTIN.check_type(1, int | str).success
    assert BUILTIN.check_type("a", int | str).success

    result = BUILTIN.check_type(1.5, int | str)
    assert result.message == "Expected int | str, got float"


def test_generic():
    """
    Test that generics are checked by their origin only.
    """
    assert BUILTIN.check_type([1, 2], list[int]).success
    assert BUILTIN.check_type(["a"], list[int]).success
    assert BUILTIN.check_type({"a": 1}, dict[str, int]).success

    result = BUILTIN.check_type((1,), list[int])
    assert result.message == "Expected list[int], got tuple"


def test_literal():
    """
    Test that literals are checked by the types of their values.
    """
    assert BUILTIN.check_type("b", Literal["a", "b"]).success
    assert not BUILTIN.check_type(1, Literal["a", "b"]).success


def test_unsupported():
    result = BUILTIN.check_type(1, "int")
    assert not result.success
    assert result.message == "Unsupported type descriptor 'int'"


def test_coerce():
    """
    Test that values are never transformed.
    """
    value = ["1"]
    assert BUILTIN.coerce(value, list) is value


def test_protocol():
    assert isinstance(BUILTIN, TypeSystem)
    assert isinstance(BuiltinTypeSystem(), TypeSystem)
    assert not isinstance(object(), TypeSystem)


def test_tokens():
    """
    Test that tokens keep their identity when copied or pickled.
    """
    assert repr(Any) == "Any"
    assert repr(Bool) == "Bool"
    assert copy.deepcopy(Bool) is Bool
    assert pickle.loads(pickle.dumps(Any)) is Any


def test_describe_type():
    assert describe_type(int) == "int"
    assert describe_type(int | None) == "int | None"
    assert describe_type(list[int]) == "list[int]"
    assert describe_type(Bool) == "Bool"
