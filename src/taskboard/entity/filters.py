"""
Paging filters rendered as parameterized predicates.

A filter list arrives as JSON (``[{"Column": "status_id", "Value": "2"}]``).
Each entry becomes `` AND "<column>" = ($1[i])::<type>`` where ``$1`` is the
text array the paging procedure binds with ``EXECUTE ... USING``. Values
never appear in the fragment, and columns must be declared on the entity.
"""

import datetime
import decimal
import json
import uuid
from dataclasses import dataclass
from typing import Any

from taskboard.entity.mapping import EntityMapping, FieldDescriptor

_TRUE = {"true", "t", "1", "yes"}
_FALSE = {"false", "f", "0", "no"}


@dataclass(frozen=True)
class Filter:
    column: str
    value: str


@dataclass(frozen=True)
class Predicate:
    fragment: str = ""
    params: tuple[str, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.fragment)


def _value_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def parse_filters(raw) -> list[Filter]:
    """
    Accept None, an empty string, JSON text, or a list of dicts/Filters.

    Raises:
        ValueError: If the input is not a list of {Column, Value} entries
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ValueError("filter is not valid JSON") from e
    if not isinstance(raw, list):
        raise ValueError("filter must be a list of {Column, Value} objects")

    filters = []
    for item in raw:
        if isinstance(item, Filter):
            filters.append(item)
            continue
        if not isinstance(item, dict):
            raise ValueError(f"Malformed filter entry: {item!r}")
        column = item.get("Column", item.get("column"))
        value = item.get("Value", item.get("value"))
        if not isinstance(column, str) or not column or value is None:
            raise ValueError(f"Malformed filter entry: {item!r}")
        filters.append(Filter(column, _value_text(value)))
    return filters


def _parse_bool(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(text)


_PARSERS = {
    bool: _parse_bool,
    int: int,
    float: float,
    decimal.Decimal: decimal.Decimal,
    datetime.date: datetime.date.fromisoformat,
    datetime.datetime: datetime.datetime.fromisoformat,
    uuid.UUID: uuid.UUID,
}


def _coerce(field: FieldDescriptor, value: Any) -> str:
    """
    Check a filter value against the column type and return its text form.

    Raises:
        ValueError: If the value cannot be read as the column type
    """
    text = _value_text(value)
    parse = _PARSERS.get(field.python_type)
    if parse is None:
        return text
    try:
        return _value_text(parse(text.strip()))
    except (ValueError, ArithmeticError):
        raise ValueError(
            f"Invalid value '{text}' for column '{field.name}' ({field.sql_type})"
        ) from None


def build_predicate(mapping: EntityMapping, filters: list[Filter]) -> Predicate:
    parts = []
    params = []
    for f in filters:
        field = mapping.field(f.column)
        params.append(_coerce(field, f.value))
        parts.append(f' AND "{field.name}" = ($1[{len(params)}])::{field.sql_type}')
    return Predicate("".join(parts), tuple(params))
