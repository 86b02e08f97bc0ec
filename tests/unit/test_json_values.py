"""Unit tests for JSON value cloning and comparison."""

import pytest

from jsonkit.utils.errors import InvalidOperationError
from jsonkit.utils.json_values import deep_clone, deep_equal


def test_deep_clone_is_independent(user_document):
    clone = deep_clone(user_document)

    clone["user"]["tags"].append("viewer")
    assert clone != user_document
    assert user_document["user"]["tags"] == ["admin", "editor"]


def test_deep_clone_tuples_become_lists():
    assert deep_clone({"pair": (1, 2)}) == {"pair": [1, 2]}


def test_deep_clone_shared_reference_is_not_a_cycle():
    shared = {"x": 1}
    clone = deep_clone({"a": shared, "b": shared})

    assert clone == {"a": {"x": 1}, "b": {"x": 1}}
    assert clone["a"] is not clone["b"]


def test_deep_clone_rejects_cycles():
    items = [1]
    items.append(items)

    with pytest.raises(InvalidOperationError, match="cyclic"):
        deep_clone(items)


@pytest.mark.parametrize("left,right,expected", [
    (1, 1.0, True),
    (True, 1, False),
    (False, 0, False),
    (True, True, True),
    (None, None, True),
    (None, 0, False),
    ("1", 1, False),
    ([1, [2]], [1, [2]], True),
    ([1, 2], [2, 1], False),
    ({"a": [1]}, {"a": [1]}, True),
    ({"a": 1}, {"a": 1, "b": 2}, False),
    ({"a": True}, {"a": 1}, False),
])
def test_deep_equal(left, right, expected):
    assert deep_equal(left, right) is expected
