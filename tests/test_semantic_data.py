import json

import pytest

from goodguess.semantic_data import (
    get_semantic_entry,
    get_semantic_table,
    get_semantic_tables,
    load_semantic_tables,
)


@pytest.mark.unit
def test_tables_loaded_for_scored_categories():
    tables = get_semantic_tables()
    assert set(tables) == {"animals", "food", "countries", "sports", "movies"}
    assert get_semantic_table("technology") is None
    assert get_semantic_table(" Animals ") is tables["animals"]


@pytest.mark.unit
def test_entries_match_their_keys():
    for category_id, table in get_semantic_tables().items():
        for key, entry in table.items():
            assert entry.name == key
            assert key == key.lower()
            for values in entry.properties.values():
                assert len(values) > 0


@pytest.mark.unit
def test_lookup():
    entry = get_semantic_entry("animals", "Lion")
    assert entry.name == "lion"
    assert "feline" in entry.properties["species"]
    assert "cat" in entry.related
    assert get_semantic_entry("animals", "blorp") is None
    assert get_semantic_entry("technology", "robot") is None


@pytest.mark.unit
def test_tables_are_read_only():
    tables = get_semantic_tables()
    with pytest.raises(TypeError):
        tables["animals"]["dragon"] = None
    entry = tables["animals"]["lion"]
    with pytest.raises(TypeError):
        entry.properties["species"] = ("reptile",)
    assert isinstance(entry.related, tuple)


def write_tables(tmp_path, data):
    path = tmp_path / "semantic.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.mark.unit
def test_load_rejects_mismatched_name(tmp_path):
    path = write_tables(tmp_path, {"animals": {"lion": {"name": "tiger", "related": [], "properties": {}}}})
    with pytest.raises(ValueError):
        load_semantic_tables(path)


@pytest.mark.unit
def test_load_rejects_empty_property(tmp_path):
    path = write_tables(tmp_path, {"animals": {"lion": {"name": "lion", "related": [],
                                                        "properties": {"species": []}}}})
    with pytest.raises(ValueError):
        load_semantic_tables(path)


@pytest.mark.unit
def test_load_custom_tables(tmp_path):
    path = write_tables(tmp_path, {"birds": {"Robin": {"name": "robin", "related": ["Bird"],
                                                       "properties": {"color": ["Red"]}}}})
    tables = load_semantic_tables(path)
    entry = tables["birds"]["robin"]
    assert entry.related == ("bird",)
    assert entry.properties["color"] == ("red",)
