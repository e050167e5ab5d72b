"""
Database connection and stored-procedure utilities.

Every operation opens its own psycopg connection from a connection string,
runs one statement and releases the connection before returning. Rows come
back as dictionaries.

For testing, use set_connection_override() to inject a connection
that will be used instead of creating new ones.
"""

import logging
from contextlib import contextmanager
from typing import Any, Mapping

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from taskboard.config import config

logger = logging.getLogger(__name__)

# =============================================================================
# Connection Override (for testing)
# =============================================================================

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    """
    Set a connection to use instead of creating new ones.

    Used by test fixtures to route every repository call through a
    single connection (real or fake).

    Args:
        conn: The connection to use for all subsequent operations
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    """Clear the connection override, restoring normal behavior."""
    global _connection_override
    _connection_override = None


# =============================================================================
# Connection Management
# =============================================================================


@contextmanager
def get_connection(conninfo: str | None = None):
    """
    Context manager for database connections.

    In normal operation:
        - Opens a new connection from ``conninfo`` (or DATABASE_URL)
        - Commits on successful exit
        - Rolls back on exception and re-raises it unchanged
        - Closes connection when done, on every exit path

    With override set (testing):
        - Returns the override connection
        - Does NOT commit, rollback, or close

    Usage:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("SELECT ...")
    """
    if _connection_override is not None:
        yield _connection_override
        return

    conn = psycopg.connect(conninfo or config.database_url)
    try:
        yield conn
        conn.commit()
    except Exception as e:
        logger.warning("Rolling back transaction: %s", e)
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def get_cursor(conninfo: str | None = None):
    """
    Context manager for a cursor with dict rows.

    Usage:
        with get_cursor() as cur:
            cur.execute("SELECT * FROM project")
            rows = cur.fetchall()  # List of dicts
    """
    with get_connection(conninfo) as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            yield cur


# =============================================================================
# Stored Procedures
# =============================================================================


def procedure(name: str, params: Mapping[str, Any]) -> sql.Composed:
    """
    Build a call to a set-returning database function using named arguments.

    ``procedure("get_all_data", {"table_name": "project"})`` renders as
    ``SELECT * FROM "get_all_data"("table_name" => %(table_name)s)``.
    """
    args = sql.SQL(", ").join(
        sql.SQL("{} => {}").format(sql.Identifier(key), sql.Placeholder(key))
        for key in params
    )
    return sql.SQL("SELECT * FROM {}({})").format(sql.Identifier(name), args)


# =============================================================================
# Query Helpers
# =============================================================================


def execute(query, params: Mapping[str, Any] | tuple = None, conninfo: str | None = None) -> int:
    """
    Execute a statement and return the number of affected rows.

    Args:
        query: SQL string or composed query
        params: Parameter values (tuple for %s, mapping for %(name)s)
        conninfo: Connection string; defaults to DATABASE_URL
    """
    with get_cursor(conninfo) as cur:
        cur.execute(query, params)
        return cur.rowcount


def fetch_one(query, params: Mapping[str, Any] | tuple = None, conninfo: str | None = None) -> dict[str, Any] | None:
    """
    Execute a query and return a single row as dict.

    Returns:
        Dict of column names to values, or None if no row found
    """
    with get_cursor(conninfo) as cur:
        cur.execute(query, params)
        return cur.fetchone()


def fetch_all(query, params: Mapping[str, Any] | tuple = None, conninfo: str | None = None) -> list[dict[str, Any]]:
    """
    Execute a query and return all rows as list of dicts.

    Returns:
        List of dicts, empty list if no rows found
    """
    with get_cursor(conninfo) as cur:
        cur.execute(query, params)
        return cur.fetchall()


def fetch_value(query, params: Mapping[str, Any] | tuple = None, conninfo: str | None = None) -> Any:
    """
    Execute a query and return the first column of the first row.

    Returns:
        The value, or None if the query produced no rows
    """
    row = fetch_one(query, params, conninfo)
    if not row:
        return None
    return next(iter(row.values()))
