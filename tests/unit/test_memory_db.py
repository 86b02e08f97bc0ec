"""Unit tests for the in-memory stores."""

import pytest

from jsonkit.db.memory import MultiEntryMemDb, SingleEntryMemDb
from jsonkit.utils.errors import EntryNotFoundError, StoreError


@pytest.fixture
def mem_db(sample_entries):
    db = MultiEntryMemDb()
    for entry in sample_entries:
        db.create(entry)
    return db


# ============================================================================
# SingleEntryMemDb
# ============================================================================

def test_single_starts_uninitialized():
    db = SingleEntryMemDb()

    assert db.is_inited() is False
    with pytest.raises(StoreError, match="not initialized"):
        db.read()


def test_single_initial_entry():
    db = SingleEntryMemDb({"name": "John"})

    assert db.is_inited() is True
    assert db.read() == {"name": "John"}


def test_single_write_entry():
    db = SingleEntryMemDb()

    assert db.write({"name": "John"}) == {"name": "John"}
    assert db.read() == {"name": "John"}


def test_single_write_updater_merges_fields():
    db = SingleEntryMemDb({"name": "John", "age": 30})

    result = db.write(lambda entry: {"age": entry["age"] + 1})

    assert result == {"name": "John", "age": 31}
    assert db.read() == {"name": "John", "age": 31}


def test_single_updater_requires_initialized_entry():
    db = SingleEntryMemDb()

    with pytest.raises(StoreError, match="Cannot update uninitialized entry"):
        db.write(lambda entry: {"age": 1})


def test_single_delete():
    db = SingleEntryMemDb({"name": "John"})
    db.delete()

    assert db.is_inited() is False


# ============================================================================
# MultiEntryMemDb
# ============================================================================

def test_multi_starts_empty():
    db = MultiEntryMemDb()

    assert db.get_all() == []
    assert db.count_all() == 0


def test_create_overwrites_same_id(mem_db):
    mem_db.create({"id": "alpha", "title": "Replaced"})

    assert mem_db.get_by_id("alpha") == {"id": "alpha", "title": "Replaced"}
    assert mem_db.count_all() == 4


def test_get_by_id_missing(mem_db):
    assert mem_db.get_by_id("missing") is None


def test_get_by_id_or_throw(mem_db):
    assert mem_db.get_by_id_or_throw("beta")["count"] == 2
    with pytest.raises(EntryNotFoundError, match="does not exist"):
        mem_db.get_by_id_or_throw("missing")


def test_get_all_where_ids_skips_missing(mem_db):
    entries = mem_db.get_all(["gamma", "missing", "alpha"])

    assert [entry["id"] for entry in entries] == ["gamma", "alpha"]


def test_get_all_ids(mem_db):
    assert mem_db.get_all_ids() == ["alpha", "beta", "gamma", "delta"]


def test_get_where_and_max(mem_db):
    assert len(mem_db.get_where(lambda entry: entry["count"] > 1)) == 3
    assert len(mem_db.get_where(lambda entry: entry["count"] > 1, max=2)) == 2
    assert mem_db.get_where(lambda entry: entry["count"] > 10) == []


def test_update(mem_db):
    updated = mem_db.update("alpha", lambda entry: {"title": entry["title"].upper()})

    assert updated == {"id": "alpha", "title": "ITEM ALPHA", "count": 1}
    assert mem_db.get_by_id("alpha") == updated


def test_update_changes_id(mem_db):
    mem_db.update("alpha", lambda entry: {"id": "omega"})

    assert mem_db.exists("alpha") is False
    assert mem_db.get_by_id("omega")["title"] == "Item alpha"


def test_update_missing_entry(mem_db):
    with pytest.raises(EntryNotFoundError):
        mem_db.update("missing", lambda entry: {})


def test_delete(mem_db):
    assert mem_db.delete("alpha") is True
    assert mem_db.delete("alpha") is False
    assert mem_db.count_all() == 3


def test_delete_by_ids(mem_db):
    output = mem_db.delete_by_ids(["alpha", "gamma", "missing"])

    assert sorted(output.deleted_ids) == ["alpha", "gamma"]
    assert output.ignored_ids == []
    assert mem_db.get_all_ids() == ["beta", "delta"]


def test_delete_where(mem_db):
    output = mem_db.delete_where(lambda entry: entry["count"] % 2 == 0)

    assert sorted(output.deleted_ids) == ["beta", "delta"]
    assert mem_db.count_all() == 2


def test_delete_where_no_matches(mem_db):
    output = mem_db.delete_where(lambda entry: False)

    assert output.deleted_ids == []
    assert output.ignored_ids == []


def test_destroy(mem_db):
    mem_db.destroy()

    assert mem_db.count_all() == 0


def test_count_where(mem_db):
    assert mem_db.count_where(lambda entry: entry["count"] >= 3) == 2


def test_instances_are_isolated():
    first, second = MultiEntryMemDb(), MultiEntryMemDb()
    first.create({"id": "one"})

    assert second.count_all() == 0
