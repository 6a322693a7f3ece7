"""
Tests for root and namespace wrapping of built mappings.
"""

from pytest import raises

from jsonshape import (
    InvalidNestingLevelError,
    Serializable,
    UnknownRootError,
    build_schema,
    configure,
)
from jsonshape.configuration import DEFAULT_CONFIG
from jsonshape.wrapping import wrap


class Business:
    class System:
        class Cashier:
            class Reports:
                class Withdraws(Serializable):
                    json_schema = {"amount": int, "due_date": str}

                    amount = 100
                    due_date = "2024-01-01"


class ArticleNote(Serializable):
    json_schema = {"note_text": str}

    note_text = "text"


WITHDRAWS = Business.System.Cashier.Reports.Withdraws


def test_default():
    """
    Test that the default configuration returns an unwrapped copy.
    """
    mapping = {"a": {"b": [1, {"c": 2}]}}
    wrapped = wrap(mapping, DEFAULT_CONFIG)

    assert wrapped == mapping
    assert wrapped is not mapping
    assert wrapped["a"] is not mapping["a"]
    assert wrapped["a"]["b"] is not mapping["a"]["b"]
    assert wrapped["a"]["b"][1] is not mapping["a"]["b"][1]


def test_include_root():
    assert build_schema(ArticleNote(), include_root=True) == {
        "article_note": {"note_text": "text"}
    }
    assert build_schema(ArticleNote(), include_root=True, camelize=True) == {
        "articleNote": {"noteText": "text"}
    }

    # only the class itself is used, not its namespaces
    assert build_schema(WITHDRAWS(), include_root=True) == {
        "withdraws": {"amount": 100, "due_date": "2024-01-01"}
    }


def test_root():
    assert build_schema(ArticleNote(), root="my_note") == {
        "my_note": {"note_text": "text"}
    }
    assert build_schema(ArticleNote(), root="my_note", camelize=True) == {
        "myNote": {"noteText": "text"}
    }
    assert build_schema(ArticleNote(), root="MyNote") == {
        "my_note": {"note_text": "text"}
    }


def test_root_precedence():
    """
    Test that root takes precedence over namespaces, which take precedence over the
    class name.
    """
    assert build_schema(
        WITHDRAWS(), root="data", include_root=True, include_namespaces=True
    ) == {"data": {"amount": 100, "due_date": "2024-01-01"}}

    assert build_schema(
        WITHDRAWS(), include_root=True, include_namespaces=True, namespace_nesting_level=2
    ) == {"reports": {"withdraws": {"amount": 100, "due_date": "2024-01-01"}}}


def test_namespaces():
    data = {"amount": 100, "due_date": "2024-01-01"}

    assert build_schema(WITHDRAWS(), include_namespaces=True) == {
        "business": {"system": {"cashier": {"reports": {"withdraws": data}}}}
    }
    assert build_schema(WITHDRAWS(), namespace_nesting_level=1) == {"withdraws": data}
    assert build_schema(WITHDRAWS(), namespace_nesting_level=3) == {
        "cashier": {"reports": {"withdraws": data}}
    }

    # saturates at the number of namespaces
    assert build_schema(WITHDRAWS(), namespace_nesting_level=10) == build_schema(
        WITHDRAWS(), include_namespaces=True
    )


def test_namespaces_camelize():
    assert build_schema(
        WITHDRAWS(), namespace_nesting_level=2, camelize=True
    ) == {"reports": {"withdraws": {"amount": 100, "dueDate": "2024-01-01"}}}


def test_local_class():
    """
    Test that the function scope of a locally defined class is not a namespace.
    """

    class Local(Serializable):
        json_schema = {"a": int}

        a = 1

    assert build_schema(Local(), include_namespaces=True) == {"local": {"a": 1}}


def test_zero_nesting_level():
    with raises(InvalidNestingLevelError, match="namespace_nesting_level: 0"):
        build_schema(WITHDRAWS(), namespace_nesting_level=0)

    with raises(InvalidNestingLevelError):
        build_schema(WITHDRAWS(), include_namespaces=True, namespace_nesting_level=0)

    with raises(InvalidNestingLevelError):
        build_schema(ArticleNote(), root="data", namespace_nesting_level=0)

    # options are checked before any value is read
    class BadValue(Serializable):
        json_schema = {"a": int}

        a = "x"

    with raises(InvalidNestingLevelError):
        build_schema(BadValue(), namespace_nesting_level=0)


def test_unknown_root():
    with raises(UnknownRootError, match="class name was not passed"):
        wrap({"a": 1}, DEFAULT_CONFIG.with_overrides(include_root=True))

    # root doesn't need a class name
    assert wrap({"a": 1}, DEFAULT_CONFIG.with_overrides(root="data")) == {
        "data": {"a": 1}
    }


def test_configured_defaults():
    """
    Test that process-wide settings apply and explicit options override them.
    """
    configure({"include_root": True, "camelize": True})

    assert build_schema(ArticleNote()) == {"articleNote": {"noteText": "text"}}
    assert build_schema(ArticleNote(), camelize=False) == {
        "article_note": {"note_text": "text"}
    }
    assert build_schema(ArticleNote(), include_root=None, camelize=None) == {
        "note_text": "text"
    }
