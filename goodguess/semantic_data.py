"""
Semantic knowledge base.

Curated per-category tables mapping a lowercase word to its related terms and
typed property lists. The tables are read from data/semantic.json once, on
first use, and exposed as read-only mappings of tuples.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

SEMANTIC_DATA_FILE = Path(__file__).parent / 'data' / 'semantic.json'


class SemanticEntry(NamedTuple):
    name: str
    related: Tuple[str, ...]
    properties: Mapping[str, Tuple[str, ...]]


SemanticTable = Mapping[str, SemanticEntry]

_tables: Optional[Mapping[str, SemanticTable]] = None


def _build_entry(category_id: str, key: str, raw: dict) -> SemanticEntry:
    name = str(raw.get('name', key)).strip().lower()
    if name != key:
        raise ValueError(f"Semantic entry '{key}' in '{category_id}' has mismatched name '{name}'")
    properties = {}
    for prop, values in (raw.get('properties') or {}).items():
        values = tuple(str(v).strip().lower() for v in values)
        if not values:
            raise ValueError(f"Property '{prop}' of '{key}' in '{category_id}' is empty")
        properties[str(prop)] = values
    related = tuple(str(r).strip().lower() for r in raw.get('related') or ())
    return SemanticEntry(name=name, related=related, properties=MappingProxyType(properties))


def load_semantic_tables(path: Path = SEMANTIC_DATA_FILE) -> Mapping[str, SemanticTable]:
    """Parse a semantic tables file into read-only mappings."""
    with open(path, 'r', encoding='utf-8') as f:
        raw_tables = json.load(f)
    tables = {}
    for category_id, raw_table in raw_tables.items():
        table = {}
        for key, raw_entry in raw_table.items():
            key = key.strip().lower()
            table[key] = _build_entry(category_id, key, raw_entry)
        tables[category_id] = MappingProxyType(table)
        logger.debug(f"Loaded {len(table)} semantic entries for '{category_id}'")
    return MappingProxyType(tables)


def get_semantic_tables() -> Mapping[str, SemanticTable]:
    """Return every category's semantic table, loading them on first use."""
    global _tables
    if _tables is None:
        _tables = load_semantic_tables()
        logger.info(f"Semantic knowledge base ready: {', '.join(sorted(_tables))}")
    return _tables


def get_semantic_table(category_id: str) -> Optional[SemanticTable]:
    """Return the semantic table for a category, or None if it has none."""
    return get_semantic_tables().get(str(category_id).strip().lower())


def get_semantic_entry(category_id: str, word: str) -> Optional[SemanticEntry]:
    """Look up a word's entry within one category."""
    table = get_semantic_table(category_id)
    if table is None:
        return None
    return table.get(str(word).strip().lower())
