"""
Column-set builders.

Generic insert/update procedures take one ``list_column`` parameter: a JSON
array of ``{"Key": column, "Value": value}`` objects in field declaration
order. These helpers build that list from an entity under three policies.
"""

import json
from typing import Any, Iterable

from taskboard.entity.mapping import ColumnValue, mapping_for, to_column_value

ColumnPair = tuple[str, ColumnValue]

EMPTY_ARRAY = "[]"


def _is_empty_array(value: Any) -> bool:
    if isinstance(value, str):
        return value == EMPTY_ARRAY
    return json.dumps(to_column_value(value)) == EMPTY_ARRAY


def build_insert_columns(entity) -> list[ColumnPair]:
    """
    Columns for an insert.

    The key is included only when it is caller-assigned (declared ``str``);
    generated keys are left to the database.
    """
    mapping = mapping_for(entity)
    start = 0 if mapping.key_assigned else 1
    return [(f.name, to_column_value(getattr(entity, f.name))) for f in mapping.fields[start:]]


def build_update_columns(entity) -> list[ColumnPair]:
    """
    Columns for a sparse update: every non-key field that is not None
    and not an empty array.
    """
    pairs = []
    for f in mapping_for(entity).fields[1:]:
        value = getattr(entity, f.name)
        if value is None or _is_empty_array(value):
            continue
        pairs.append((f.name, to_column_value(value)))
    return pairs


def build_update_columns_keep_empty(entity) -> list[ColumnPair]:
    """
    Columns for an update that may clear a collection: every non-key field
    that is not None. Empty arrays are written.
    """
    pairs = []
    for f in mapping_for(entity).fields[1:]:
        value = getattr(entity, f.name)
        if value is None:
            continue
        pairs.append((f.name, to_column_value(value)))
    return pairs


def serialize_columns(pairs: Iterable[tuple[str, Any]]) -> str:
    return json.dumps(
        [{"Key": name, "Value": to_column_value(value)} for name, value in pairs],
        ensure_ascii=False,
    )


def deserialize_columns(text: str) -> list[ColumnPair]:
    """Inverse of serialize_columns(); order is preserved."""
    items = json.loads(text)
    if not isinstance(items, list):
        raise ValueError("Column list must be a JSON array")
    pairs = []
    for item in items:
        if not isinstance(item, dict) or "Key" not in item:
            raise ValueError(f"Malformed column pair: {item!r}")
        pairs.append((item["Key"], item.get("Value")))
    return pairs


def serialize_ids(ids: Iterable[Any]) -> str:
    return json.dumps([to_column_value(i) for i in ids], ensure_ascii=False)
