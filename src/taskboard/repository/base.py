"""
Generic repository over the table-agnostic stored procedures.

Every operation is one round trip: open a connection, call one procedure,
close the connection, return. Nothing is cached and no transaction spans
two calls. Database errors propagate to the caller unchanged.
"""

import logging
from typing import Any, Generic, Iterable, Mapping, Sequence, TypeVar

from taskboard import db
from taskboard.config import config
from taskboard.entity import (
    PagingResult,
    build_insert_columns,
    build_predicate,
    build_update_columns,
    build_update_columns_keep_empty,
    mapping_for,
    parse_filters,
    serialize_columns,
    serialize_ids,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

Conditions = Sequence[tuple[str, Any]] | Mapping[str, Any]


class RepositoryBase(Generic[T]):
    """
    CRUD, lookup and paging operations for one entity type.

    Subclasses set ``entity_type``:

        class ProjectRepository(RepositoryBase[Project]):
            entity_type = Project
    """

    entity_type: type[T] = None

    def __init__(self, connection_string: str | None = None, entity_type: type[T] | None = None):
        if entity_type is not None:
            self.entity_type = entity_type
        if self.entity_type is None:
            raise TypeError(f"{type(self).__name__} has no entity_type")
        self.mapping = mapping_for(self.entity_type)
        self._connection_string = connection_string or config.database_url
        self._table = self.mapping.table

    @property
    def table(self) -> str:
        return self._table

    # ------------------------------------------------------------------
    # Procedure calls
    # ------------------------------------------------------------------

    def _params(self, **params) -> dict[str, Any]:
        return {"table_name": self._table, **params}

    def _fetch_all(self, name: str, params: dict[str, Any]) -> list[T]:
        logger.debug("%s on %s", name, self._table)
        rows = db.fetch_all(db.procedure(name, params), params, conninfo=self._connection_string)
        return [self.mapping.from_row(row) for row in rows]

    def _fetch_row(self, name: str, params: dict[str, Any]) -> dict[str, Any] | None:
        logger.debug("%s on %s", name, self._table)
        return db.fetch_one(db.procedure(name, params), params, conninfo=self._connection_string)

    def _fetch_one(self, name: str, params: dict[str, Any]) -> T | None:
        row = self._fetch_row(name, params)
        return self.mapping.from_row(row) if row else None

    def _fetch_value(self, name: str, params: dict[str, Any]) -> Any:
        logger.debug("%s on %s", name, self._table)
        return db.fetch_value(db.procedure(name, params), params, conninfo=self._connection_string)

    def _execute(self, name: str, params: dict[str, Any]) -> int:
        logger.debug("%s on %s", name, self._table)
        return db.execute(db.procedure(name, params), params, conninfo=self._connection_string)

    def _conditions(self, conditions: Conditions) -> str:
        pairs = list(conditions.items()) if isinstance(conditions, Mapping) else list(conditions)
        for column, _ in pairs:
            self.mapping.field(column)
        return serialize_columns(pairs)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get_all(self) -> list[T]:
        """All rows of the table."""
        return self._fetch_all("get_all_data", self._params())

    def get_paging(
        self,
        page_index: int,
        page_size: int,
        keywords: str = "",
        filter: str | list | None = None,
    ) -> PagingResult[T]:
        """
        One page of rows matching ``keywords`` and ``filter``.

        ``filter`` is a list (or JSON text) of ``{"Column", "Value"}`` pairs,
        combined with AND. The procedure reports the full match count in its
        ``total_row`` output column and the page in ``items``.
        """
        predicate = build_predicate(self.mapping, parse_filters(filter))
        params = self._params(
            page_index=page_index,
            page_size=page_size,
            keywords=keywords or "",
            filter=predicate.fragment,
            filter_values=list(predicate.params),
        )
        row = self._fetch_row("get_paging_data", params)
        total_row = int(row.get("total_row") or 0) if row else 0
        items = [self.mapping.from_row(r) for r in (row.get("items") or [])] if row else []
        return PagingResult(
            items=items,
            page_index=page_index,
            page_size=page_size,
            keywords=keywords or "",
            total_row=total_row,
        )

    def get_multi_by_id(self, ids: Iterable[Any]) -> list[T]:
        ids = list(ids or [])
        if not ids:
            return []
        return self._fetch_all("get_data_by_id", self._params(list_id=serialize_ids(ids)))

    def get_single_by_list_id(self, ids: Iterable[Any]) -> T | None:
        ids = list(ids or [])
        if not ids:
            return None
        return self._fetch_one("get_data_by_id", self._params(list_id=serialize_ids(ids)))

    def get_single_by_id(self, id: Any) -> T | None:
        return self.get_single_by_list_id([id])

    def get_single_by_condition(self, column: str, value: Any) -> T | None:
        return self.get_single_by_list_condition([(column, value)])

    def get_multi_by_condition(self, column: str, value: Any) -> list[T]:
        return self.get_multi_by_list_condition([(column, value)])

    def get_single_by_list_condition(self, columns: Conditions) -> T | None:
        return self._fetch_one("get_single_data", self._params(list_column=self._conditions(columns)))

    def get_multi_by_list_condition(self, columns: Conditions) -> list[T]:
        """Rows matching the conditions as combined by ``get_multi_data``."""
        return self._fetch_all("get_multi_data", self._params(list_column=self._conditions(columns)))

    def get_multi_by_list_condition_and(self, columns: Conditions) -> list[T]:
        """Rows matching every condition."""
        return self._fetch_all("get_multi_data_and", self._params(list_column=self._conditions(columns)))

    def check_valid_by_condition(self, column: str, value: Any) -> bool:
        """True when at least one row has ``column = value``."""
        params = self._params(list_column=self._conditions([(column, value)]))
        return bool(self._fetch_value("check_valid", params))

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def insert(self, entity: T) -> T:
        """
        Insert ``entity`` and return it as given.

        Generated keys and defaults are not read back; look the row up by a
        natural key when they are needed.
        """
        columns = serialize_columns(build_insert_columns(entity))
        self._execute("insert_data", self._params(list_column=columns))
        return entity

    def update(self, id: Any, entity: T) -> T:
        """Write the non-empty fields of ``entity`` to the row with key ``id``."""
        columns = serialize_columns(build_update_columns(entity))
        self._execute("update_data", {"id": id, **self._params(list_column=columns)})
        return entity

    def update_by_key(self, key: str, value: Any, entity: T) -> T:
        """Write the non-empty fields of ``entity`` to rows where ``key = value``."""
        self.mapping.field(key)
        columns = serialize_columns(build_update_columns(entity))
        params = {"key_update": key, "value_update": value, **self._params(list_column=columns)}
        self._execute("update_data_by_key", params)
        return entity

    def update_by_condition(self, key_column: str, key_value: Any, entity: T) -> T:
        return self.update_by_key(key_column, key_value, entity)

    def update_keep_empty(self, id: Any, entity: T) -> T:
        """Like update(), but empty collections are written instead of skipped."""
        columns = serialize_columns(build_update_columns_keep_empty(entity))
        self._execute("update_data", {"id": id, **self._params(list_column=columns)})
        return entity

    def delete_by_id(self, ids: Iterable[Any]) -> int:
        """Delete rows by primary key. Returns the number of rows removed."""
        ids = list(ids or [])
        if not ids:
            return 0
        count = self._fetch_value("delete_data_by_id", self._params(list_id=serialize_ids(ids)))
        return int(count or 0)

    def delete_by_task_id(self, ids: Iterable[Any]) -> int:
        """Delete rows by their ``task_id`` column. Returns the number of rows removed."""
        ids = list(ids or [])
        if not ids:
            return 0
        count = self._fetch_value("delete_data_by_task_id", self._params(list_id=serialize_ids(ids)))
        return int(count or 0)
