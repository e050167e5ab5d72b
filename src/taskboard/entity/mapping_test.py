"""
Tests for entity declarations and column value normalisation.

Run with: pytest src/taskboard/entity/mapping_test.py -v
"""
import datetime
import decimal
import enum
import uuid
from dataclasses import dataclass

import pytest

from taskboard.entity import entity, mapping_for, to_column_value


@entity(table="widget")
class Widget:
    id: int | None = None
    name: str | None = None
    price: decimal.Decimal | None = None
    tags: list[str] | None = None
    active: bool | None = None


@entity()
class Label:
    code: str | None = None
    title: str | None = None


class Colour(enum.Enum):
    RED = "red"


class TestEntityDecorator:
    """Tests for the @entity decorator"""

    def test_fields_keep_declaration_order(self):
        mapping = mapping_for(Widget)

        assert mapping.column_names == ("id", "name", "price", "tags", "active")

    def test_first_field_is_key(self):
        assert mapping_for(Widget).key.name == "id"

    @pytest.mark.parametrize("cls,assigned", [(Widget, False), (Label, True)])
    def test_key_assigned_only_for_string_keys(self, cls, assigned):
        assert mapping_for(cls).key_assigned is assigned

    def test_table_defaults_to_class_name(self):
        assert mapping_for(Label).table == "Label"

    @pytest.mark.parametrize("column,sql_type", [
        ("id", "bigint"),
        ("name", "text"),
        ("price", "numeric"),
        ("tags", "jsonb"),
        ("active", "boolean"),
    ])
    def test_sql_types(self, column, sql_type):
        assert mapping_for(Widget).field(column).sql_type == sql_type

    def test_unknown_column_raises(self):
        with pytest.raises(ValueError, match="Unknown column 'nope'"):
            mapping_for(Widget).field("nope")

    def test_mapping_for_instance(self):
        assert mapping_for(Widget(id=1)) is mapping_for(Widget)

    def test_undeclared_type_raises(self):
        @dataclass
        class Plain:
            id: int = 0

        with pytest.raises(TypeError, match="not declared with @entity"):
            mapping_for(Plain)

    def test_from_row_ignores_extra_columns(self):
        row = {"id": 3, "name": "bolt", "row_number": 1}

        widget = mapping_for(Widget).from_row(row)

        assert widget == Widget(id=3, name="bolt")

    def test_to_dict(self):
        widget = Widget(id=1, name="bolt", active=True)

        assert mapping_for(Widget).to_dict(widget) == {
            "id": 1,
            "name": "bolt",
            "price": None,
            "tags": None,
            "active": True,
        }


class TestToColumnValue:
    """Tests for to_column_value()"""

    @pytest.mark.parametrize("value,expected", [
        (None, None),
        ("a", "a"),
        (0, 0),
        (False, False),
        (1.5, 1.5),
        (decimal.Decimal("2.50"), "2.50"),
        (decimal.Decimal("12345678901234567890.123456789"), "12345678901234567890.123456789"),
        (datetime.date(2024, 1, 31), "2024-01-31"),
        (datetime.datetime(2024, 1, 31, 8, 30), "2024-01-31T08:30:00"),
        (uuid.UUID("12345678-1234-5678-1234-567812345678"), "12345678-1234-5678-1234-567812345678"),
        (Colour.RED, "red"),
        ((1, [2, 3]), [1, [2, 3]]),
    ])
    def test_normalises(self, value, expected):
        assert to_column_value(value) == expected

    def test_unsupported_type_raises(self):
        with pytest.raises(TypeError):
            to_column_value(object())
