"""Integration tests: file stores, field-coercing parser and patch engine together.

Exercises the real filesystem through pytest's tmp_path.
"""
from datetime import datetime, timezone

import pytest

from jsonkit.builder import JsonPatchBuilder
from jsonkit.db.file_db import MultiEntryFileDb, MultiEntryFileDbOptions, SingleEntryFileDb
from jsonkit.parser import JsonFieldConversion, JsonParser, ParseField
from jsonkit.patcher import JsonPatcher


@pytest.fixture
def typed_parser():
    return JsonParser([
        ParseField(path="createdAt", conversion=JsonFieldConversion.DATE),
        ParseField(path=["stats", "views"], conversion=JsonFieldConversion.INT),
    ])


def test_typed_entries_round_trip(tmp_path, typed_parser):
    """Dates written by the store come back as datetimes through the parser."""
    db = MultiEntryFileDb(tmp_path / "posts", MultiEntryFileDbOptions(parser=typed_parser))
    created = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
    db.create({"id": "post-1", "createdAt": created, "stats": {"views": "12"}, "body": "Hello"})

    entry = db.get_by_id("post-1")

    assert entry["createdAt"] == created
    assert entry["stats"]["views"] == 12


def test_update_entry_with_patch(tmp_path, typed_parser):
    db = MultiEntryFileDb(tmp_path / "posts", MultiEntryFileDbOptions(parser=typed_parser))
    db.create({"id": "post-1", "createdAt": "2024-03-01T09:30:00Z", "stats": {"views": 1}, "body": "Hello"})
    patcher = JsonPatcher()
    patches = (
        JsonPatchBuilder()
        .test(["stats", "views"], 1)
        .replace(["stats", "views"], 2)
        .add("body", ", world")
        .add("tags", ["news"])
        .patches()
    )

    updated = db.update("post-1", lambda entry: patcher.apply(entry, patches))

    assert updated["body"] == "Hello, world"
    assert db.get_by_id("post-1")["stats"]["views"] == 2
    assert db.get_by_id("post-1")["tags"] == ["news"]


def test_failed_patch_leaves_stored_entry_untouched(tmp_path):
    db = SingleEntryFileDb(tmp_path / "settings.json")
    db.write({"theme": "dark", "fontSize": 12})
    patches = JsonPatchBuilder().replace("theme", "light").test("fontSize", 14).patches()

    result = JsonPatcher().apply_safe(db.read(), patches)
    if result.success:
        db.write(result.data)

    assert result.success is False
    assert db.read() == {"theme": "dark", "fontSize": 12}


def test_streamed_text_chunks_accumulate(tmp_path):
    """Successive string `add`s append, e.g. when streaming generated text into a document."""
    db = SingleEntryFileDb(tmp_path / "message.json")
    db.write({"role": "assistant", "content": ""})
    patcher = JsonPatcher()

    for chunk in ["The ", "quick ", "brown ", "fox"]:
        db.write(patcher.apply(db.read(), [{"op": "add", "path": "/content", "value": chunk}]))

    assert db.read() == {"role": "assistant", "content": "The quick brown fox"}
