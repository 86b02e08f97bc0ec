"""Unit tests for JSON Pointer resolution."""

import pytest

from jsonkit.utils.errors import MalformedPointerError, PathNotFoundError
from jsonkit.utils.pointer import (
    array_index,
    escape_token,
    exists,
    locate,
    parse_pointer,
    resolve,
)


def test_parse_pointer_root():
    """Both "" and "/" address the document root."""
    assert parse_pointer("") == []
    assert parse_pointer("/") == []


def test_parse_pointer_segments():
    assert parse_pointer("/users/0/name") == ["users", "0", "name"]


def test_parse_pointer_trailing_empty_segment():
    """A trailing slash addresses a key literally named ''."""
    assert parse_pointer("/a/") == ["a", ""]


def test_parse_pointer_unescapes_tokens():
    assert parse_pointer("/a~1b/c~0d") == ["a/b", "c~d"]


def test_parse_pointer_requires_leading_slash():
    with pytest.raises(MalformedPointerError, match="must start with '/'"):
        parse_pointer("users/0")


def test_parse_pointer_rejects_bad_escape():
    with pytest.raises(MalformedPointerError, match="Invalid escape"):
        parse_pointer("/a~2b")


def test_escape_token_round_trips_through_parse():
    key = "odd/key~name"
    assert parse_pointer("/" + escape_token(key)) == [key]


def test_resolve_root_returns_whole_document(user_document):
    assert resolve(user_document, "/") is user_document


def test_resolve_nested_object(user_document):
    assert resolve(user_document, "/user/address/city") == "Springfield"


def test_resolve_array_index(user_document):
    assert resolve(user_document, "/user/tags/1") == "editor"


def test_resolve_empty_key():
    document = {"a": {"": "empty"}}
    assert resolve(document, "/a/") == "empty"


def test_resolve_numeric_key_in_object():
    """Numeric tokens are plain keys when the container is an object."""
    assert resolve({"0": "zero"}, "/0") == "zero"


def test_resolve_missing_key(user_document):
    with pytest.raises(PathNotFoundError) as exc_info:
        resolve(user_document, "/user/missing")
    assert exc_info.value.details["missing"] == "missing"


def test_resolve_into_scalar(user_document):
    with pytest.raises(PathNotFoundError, match="cannot descend into str"):
        resolve(user_document, "/message/length")


def test_resolve_index_out_of_range(user_document):
    with pytest.raises(PathNotFoundError, match="out of range"):
        resolve(user_document, "/user/tags/2")


def test_resolve_non_numeric_index(user_document):
    with pytest.raises(MalformedPointerError, match="Invalid array index"):
        resolve(user_document, "/user/tags/first")


def test_resolve_leading_zero_index(user_document):
    with pytest.raises(MalformedPointerError):
        resolve(user_document, "/user/tags/01")


def test_resolve_end_marker_is_not_readable(user_document):
    with pytest.raises(MalformedPointerError):
        resolve(user_document, "/user/tags/-")


def test_exists(user_document):
    assert exists(user_document, "/user/name") is True
    assert exists(user_document, "/user/nickname") is False
    assert exists(user_document, "/nothing/here") is False


def test_locate_returns_parent_and_key(user_document):
    location = locate(user_document, "/user/nickname")

    assert location.container is user_document["user"]
    assert location.key == "nickname"


def test_locate_missing_parent(user_document):
    with pytest.raises(PathNotFoundError):
        locate(user_document, "/profile/nickname")


def test_locate_scalar_parent(user_document):
    with pytest.raises(PathNotFoundError, match="parent is a str"):
        locate(user_document, "/message/extra")


def test_locate_root_has_no_parent(user_document):
    with pytest.raises(MalformedPointerError):
        locate(user_document, "/")


def test_array_index_allows_end_for_add():
    items = ["a", "b"]
    assert array_index(items, "2", "/items/2", allow_end=True) == 2
    assert array_index(items, "-", "/items/-", allow_end=True) == 2


def test_array_index_past_end_for_add():
    with pytest.raises(PathNotFoundError):
        array_index(["a"], "3", "/items/3", allow_end=True)
