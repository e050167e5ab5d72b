"""
Declared entity mappings.

An entity is a dataclass decorated with ``@entity``. The decorator records,
once per type, the table name and an ordered list of field descriptors. The
first declared field is the primary key. Repositories and column builders
work from this mapping instead of inspecting objects on every call.

    @entity(table="status")
    class Status:
        status_id: str | None = None
        status_name: str | None = None
"""

import dataclasses
import datetime
import decimal
import enum
import types
import typing
import uuid
from dataclasses import dataclass
from typing import Any, Union

# Values that can cross into a stored-procedure parameter list.
ColumnValue = Union[str, int, float, bool, None, list["ColumnValue"]]

_SQL_TYPES = {
    bool: "boolean",
    int: "bigint",
    float: "double precision",
    str: "text",
    decimal.Decimal: "numeric",
    datetime.date: "date",
    datetime.datetime: "timestamptz",
    uuid.UUID: "uuid",
    list: "jsonb",
}


@dataclass(frozen=True)
class FieldDescriptor:
    name: str
    python_type: type
    sql_type: str


@dataclass(frozen=True)
class EntityMapping:
    """Table name plus ordered field descriptors for one entity type."""

    entity_type: type
    table: str
    fields: tuple[FieldDescriptor, ...]

    @property
    def key(self) -> FieldDescriptor:
        return self.fields[0]

    @property
    def key_assigned(self) -> bool:
        """String keys are supplied by the caller; anything else is generated."""
        return self.key.python_type is str

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def field(self, name: str) -> FieldDescriptor:
        for f in self.fields:
            if f.name == name:
                return f
        raise ValueError(f"Unknown column '{name}' for table {self.table}")

    def from_row(self, row: dict[str, Any]):
        """Build an entity from a row dict, ignoring columns it does not declare."""
        kwargs = {f.name: row[f.name] for f in self.fields if f.name in row}
        return self.entity_type(**kwargs)

    def to_dict(self, obj) -> dict[str, Any]:
        return {f.name: getattr(obj, f.name) for f in self.fields}


def _resolve_type(hint) -> type:
    # Optional[X] / X | None -> X
    if typing.get_origin(hint) in (Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        hint = args[0] if args else str
    origin = typing.get_origin(hint)
    if origin is not None:
        return origin
    return hint if isinstance(hint, type) else str


def entity(table: str | None = None):
    """
    Class decorator declaring a dataclass as a table-backed entity.

    Args:
        table: Table name; defaults to the class name
    """

    def decorate(cls):
        if not dataclasses.is_dataclass(cls):
            cls = dataclass(cls)
        hints = typing.get_type_hints(cls)
        fields = []
        for f in dataclasses.fields(cls):
            python_type = _resolve_type(hints.get(f.name, str))
            fields.append(FieldDescriptor(f.name, python_type, _SQL_TYPES.get(python_type, "text")))
        if not fields:
            raise TypeError(f"{cls.__name__} declares no fields")
        cls.__mapping__ = EntityMapping(cls, table or cls.__name__, tuple(fields))
        return cls

    return decorate


def mapping_for(obj) -> EntityMapping:
    """Return the mapping for an entity type or instance."""
    cls = obj if isinstance(obj, type) else type(obj)
    mapping = getattr(cls, "__mapping__", None)
    if mapping is None:
        raise TypeError(f"{cls.__name__} is not declared with @entity")
    return mapping


def to_column_value(value: Any) -> ColumnValue:
    """Normalise a Python value into something JSON can carry."""
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, enum.Enum):
        return to_column_value(value.value)
    if isinstance(value, decimal.Decimal):
        return str(value)
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (list, tuple, set)):
        return [to_column_value(v) for v in value]
    raise TypeError(f"Unsupported column value type: {type(value).__name__}")
