"""
SQL Server connection management.

Uses mssql-python (Microsoft's native Python driver). Every helper takes an
optional connection string; without one the global settings are used.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import mssql_python
from mssql_python import connect as mssql_connect
from mssql_python.connection import Connection

from sales_etl.config import settings


@contextmanager
def get_connection(connection_string: str | None = None) -> Generator[Connection, None, None]:
    """
    Open a warehouse connection, closed on exit.

    Usage:
        with get_connection(cfg.connection_string()) as conn:
            cursor = conn.cursor()
    """
    conn = mssql_connect(connection_string or settings.connection_string())
    try:
        yield conn
    finally:
        conn.close()


def execute(sql: str, params: tuple = (), connection_string: str | None = None) -> list[Any]:
    """
    Run one statement and commit.

    Returns:
        Result rows, or an empty list for statements without a result set
    """
    with get_connection(connection_string) as conn:
        cursor = conn.cursor()
        cursor.execute(sql, *params)
        try:
            rows = cursor.fetchall()
        except mssql_python.ProgrammingError:
            # MERGE/DDL
            rows = []
        conn.commit()
        return rows


def execute_many(sql: str, params_list: list[tuple], connection_string: str | None = None) -> int:
    """
    Run a statement once per parameter set in a single transaction.

    Returns:
        Number of parameter sets sent
    """
    if not params_list:
        return 0
    with get_connection(connection_string) as conn:
        cursor = conn.cursor()
        cursor.executemany(sql, params_list)
        conn.commit()
        return len(params_list)
