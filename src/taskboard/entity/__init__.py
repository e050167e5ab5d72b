"""
Entity

Declared entity mappings and the column/filter/paging value types the
generic repository is built on.
"""

from taskboard.entity.columns import (
    ColumnPair,
    build_insert_columns,
    build_update_columns,
    build_update_columns_keep_empty,
    deserialize_columns,
    serialize_columns,
    serialize_ids,
)
from taskboard.entity.filters import Filter, Predicate, build_predicate, parse_filters
from taskboard.entity.mapping import (
    ColumnValue,
    EntityMapping,
    FieldDescriptor,
    entity,
    mapping_for,
    to_column_value,
)
from taskboard.entity.paging import PagingResult

__all__ = [
    "ColumnPair",
    "ColumnValue",
    "EntityMapping",
    "FieldDescriptor",
    "Filter",
    "PagingResult",
    "Predicate",
    "build_insert_columns",
    "build_predicate",
    "build_update_columns",
    "build_update_columns_keep_empty",
    "deserialize_columns",
    "entity",
    "mapping_for",
    "parse_filters",
    "serialize_columns",
    "serialize_ids",
    "to_column_value",
]
