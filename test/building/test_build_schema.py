"""
Tests for building mappings from schemas: accessor resolution, type checks, nested
schemas, and aliases.
"""

from dataclasses import dataclass

from pytest import raises

from jsonshape import (
    Any,
    Bool,
    Field,
    InvalidTypeError,
    Serializable,
    UndefinedMethodError,
    build_schema,
    declare_schema,
    defined_schema,
    serialize,
)


class Note(Serializable):
    json_schema = {
        "foo": int,
        "bar": list,
        "nested": {"left": str, "right": Bool},
    }

    def foo(self) -> int:
        return 4

    def bar(self) -> list[int]:
        return [1, 3, 5]

    def left(self) -> str:
        return "left"

    def right(self) -> bool:
        return True


class WrongTypes(Serializable):
    json_schema = {"name": str, "age": int}

    def name(self) -> str:
        return "Jane"

    def age(self) -> str:
        return "twenty"


class MissingMethod(Serializable):
    json_schema = {"name": str, "email": str}

    def name(self) -> str:
        return "Jane"


@dataclass
class Person(Serializable):
    json_schema = {"first": str, "last": str, "age": int | None, "admin": Bool}

    first: str
    last: str
    age: int | None = None
    admin: bool = False


class Avatar(Serializable):
    json_schema = {"avatar": str, "image": str}
    json_aliases = {"avatar": "image_url"}

    image = "image.png"

    @property
    def image_url(self) -> str:
        return "https://example.com/image.png"


class Nullable(Serializable):
    json_schema = {"name": str, "flag": Bool, "anything": Any}

    name = None
    flag = None
    anything = object


def test_note():
    """
    Test the basic example: methods as accessors and a nested schema evaluated
    against the same instance.
    """
    expected = {
        "foo": 4,
        "bar": [1, 3, 5],
        "nested": {"left": "left", "right": True},
    }

    assert Note().build_schema() == expected
    assert build_schema(Note()) == expected
    assert (
        Note().serialize()
        == '{"foo":4,"bar":[1,3,5],"nested":{"left":"left","right":true}}'
    )


def test_idempotent():
    """
    Test that repeated builds are equal and never share containers.
    """
    note = Note()
    first = build_schema(note)
    second = build_schema(note)

    assert first == second
    assert first is not second
    assert first["bar"] is not second["bar"]
    assert first["nested"] is not second["nested"]


def test_key_order():
    assert list(build_schema(Note())) == ["foo", "bar", "nested"]


def test_wrong_type():
    with raises(InvalidTypeError) as exc_info:
        build_schema(WrongTypes())

    assert exc_info.value.key == "age"
    assert (
        str(exc_info.value) == "Wrong type for key `age`. Expected int, got str."
    )

    # also a TypeError
    with raises(TypeError):
        serialize(WrongTypes())


def test_undefined_method():
    with raises(UndefinedMethodError) as exc_info:
        build_schema(MissingMethod())

    message = str(exc_info.value)
    assert "email" in message
    assert message.endswith(
        "You have probably defined a key in the schema that doesn't have a "
        "corresponding method."
    )
    assert isinstance(exc_info.value.__cause__, AttributeError)


def test_property_attribute_error():
    """
    Test that an attribute error raised by an accessor is reported with the
    original error as cause.
    """

    class Broken(Serializable):
        json_schema = {"value": int}

        @property
        def value(self) -> int:
            raise AttributeError("backing store is gone")

    with raises(UndefinedMethodError, match="backing store is gone") as exc_info:
        build_schema(Broken())
    assert str(exc_info.value.__cause__) == "backing store is gone"


def test_dataclass():
    """
    Test that plain attributes are used as accessors.
    """
    assert build_schema(Person("Jane", "Doe", 30, True)) == {
        "first": "Jane",
        "last": "Doe",
        "age": 30,
        "admin": True,
    }


def test_nullable():
    """
    Test that `None` is accepted for every type except as checked by `Any`.
    """
    assert build_schema(Nullable()) == {"name": None, "flag": None, "anything": object}


def test_aliases():
    """
    Test that an alias reads the target accessor while keeping the key, and a key
    equal to a target of another alias is read directly.
    """
    assert build_schema(Avatar()) == {
        "avatar": "https://example.com/image.png",
        "image": "image.png",
    }


def test_missing_alias_target():
    class MissingTarget(Serializable):
        json_schema = {"avatar": str}
        json_aliases = {"avatar": "image_url"}

    with raises(UndefinedMethodError, match="image_url"):
        build_schema(MissingTarget())


def test_field_source():
    class User(Serializable):
        json_schema = {
            "full_name": Field(str, source=lambda u: f"{u.first} {u.last}"),
            "email": Field(str, source="contact"),
            "age": Field(int),
        }

        first = "Jane"
        last = "Doe"
        contact = "jane@example.com"
        age = 30

    assert build_schema(User()) == {
        "full_name": "Jane Doe",
        "email": "jane@example.com",
        "age": 30,
    }


def test_field_source_errors():
    class User(Serializable):
        json_schema = {
            "name": Field(str, source=lambda u: u.missing),
            "age": Field(int, source=lambda u: "30"),
        }

    with raises(UndefinedMethodError, match="missing"):
        build_schema(User())

    class Aged(Serializable):
        json_schema = {"age": Field(int, source=lambda u: "30")}

    with raises(InvalidTypeError, match="Wrong type for key `age`"):
        build_schema(Aged())


def test_nested_value():
    """
    Test that a nested schema is evaluated against the value the instance provides
    for its key.
    """

    @dataclass
    class Address:
        city: str
        zip_code: str

    class Customer(Serializable):
        json_schema = {"name": str, "address": {"city": str, "zip_code": str}}

        name = "Jane"
        address = Address("Paris", "75001")

    assert build_schema(Customer()) == {
        "name": "Jane",
        "address": {"city": "Paris", "zip_code": "75001"},
    }


def test_nested_collection_value():
    """
    Test that a nested schema is evaluated against each element of a collection
    value.
    """

    class Order(Serializable):
        json_schema = {"lines": {"sku": str, "quantity": int}}

        lines = [
            {"sku": "A-1", "quantity": 2},
            {"sku": "B-2", "quantity": 1},
        ]

    assert build_schema(Order()) == {
        "lines": [
            {"sku": "A-1", "quantity": 2},
            {"sku": "B-2", "quantity": 1},
        ]
    }


def test_nested_none_value():
    class Customer(Serializable):
        json_schema = {"address": {"city": str}}

        address = None

    assert build_schema(Customer()) == {"address": None}


def test_deeply_nested():
    class Deep(Serializable):
        json_schema = {"a": {"b": {"c": int}}}

        c = 1

    assert build_schema(Deep()) == {"a": {"b": {"c": 1}}}


def test_mapping_instance():
    """
    Test that mappings with a schema are read by key.
    """

    class Complex(dict):
        pass

    declare_schema(Complex, {"real": float, "imaginary": float})

    assert build_schema(Complex(real=1.0, imaginary=-2.5)) == {
        "real": 1.0,
        "imaginary": -2.5,
    }

    with raises(UndefinedMethodError, match="has no key 'imaginary'"):
        build_schema(Complex(real=1.0))


def test_composed_schema():
    """
    Test composing the schema of one class into another.
    """

    class Base(Serializable):
        json_schema = {"id": int}

    class Extended(Serializable):
        json_schema = {**defined_schema(Base), "name": str}

        id = 1
        name = "x"

    assert build_schema(Extended()) == {"id": 1, "name": "x"}
