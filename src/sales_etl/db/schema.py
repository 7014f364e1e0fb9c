"""
Dimension table DDL.

Creates the Dim* tables the SQL loaders merge into. Every statement is
guarded, so init_schema() can be run repeatedly.
"""

from sales_etl.config import Settings, settings
from sales_etl.db.connection import execute


def schema_statements(schema: str) -> list[str]:
    """DDL batches in dependency order (orders reference customers)."""
    return [
        f"""
        IF NOT EXISTS (SELECT 1 FROM sys.schemas WHERE name = '{schema}')
            EXEC('CREATE SCHEMA {schema}');
        """,
        f"""
        IF OBJECT_ID('{schema}.DimCustomer', 'U') IS NULL
        CREATE TABLE {schema}.DimCustomer (
            customer_key INT IDENTITY(1,1) PRIMARY KEY,
            customer_id NVARCHAR(64) NOT NULL UNIQUE,
            name NVARCHAR(256) NOT NULL,
            email NVARCHAR(256) NULL,
            country NVARCHAR(128) NULL,
            loaded_at DATETIME2 NOT NULL DEFAULT SYSUTCDATETIME()
        );
        """,
        f"""
        IF OBJECT_ID('{schema}.DimProduct', 'U') IS NULL
        CREATE TABLE {schema}.DimProduct (
            product_key INT IDENTITY(1,1) PRIMARY KEY,
            product_id NVARCHAR(64) NOT NULL UNIQUE,
            name NVARCHAR(256) NOT NULL,
            category NVARCHAR(128) NULL,
            price DECIMAL(18, 2) NULL,
            loaded_at DATETIME2 NOT NULL DEFAULT SYSUTCDATETIME()
        );
        """,
        f"""
        IF OBJECT_ID('{schema}.DimOrder', 'U') IS NULL
        CREATE TABLE {schema}.DimOrder (
            order_key INT IDENTITY(1,1) PRIMARY KEY,
            order_id NVARCHAR(64) NOT NULL UNIQUE,
            customer_id NVARCHAR(64) NOT NULL,
            order_date DATE NULL,
            status NVARCHAR(64) NULL,
            loaded_at DATETIME2 NOT NULL DEFAULT SYSUTCDATETIME()
        );
        """,
    ]


def init_schema(config: Settings | None = None) -> None:
    """Create the dimension schema and tables if they do not exist."""
    config = config or settings
    for statement in schema_statements(config.db_schema):
        execute(statement, connection_string=config.connection_string())


def drop_schema(config: Settings | None = None) -> None:
    """
    Drop the Dim* tables (for testing/reset).

    WARNING: This destroys all data!
    """
    config = config or settings
    for table in ("DimOrder", "DimProduct", "DimCustomer"):
        execute(
            f"DROP TABLE IF EXISTS {config.db_schema}.{table};",
            connection_string=config.connection_string(),
        )
