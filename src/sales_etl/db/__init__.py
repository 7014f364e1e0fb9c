"""
Database utilities for the SQL Server data warehouse.

Provides connection management and dimension schema initialization.
"""

from sales_etl.db.connection import execute, execute_many, get_connection
from sales_etl.db.schema import drop_schema, init_schema

__all__ = ["get_connection", "execute", "execute_many", "init_schema", "drop_schema"]
