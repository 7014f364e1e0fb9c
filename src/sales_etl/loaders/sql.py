"""
SQL Server dimension loaders.

Each loader MERGEs its records into `<db_schema>.Dim<Entity>` keyed on the
business key: existing rows are updated, new ones inserted.
"""

from collections.abc import Sequence

from rich.console import Console

from sales_etl.config import Settings, settings
from sales_etl.loaders.base import (
    CustomerColumns,
    DimensionLoader,
    DimensionRecord,
    OrderColumns,
    ProductColumns,
)

console = Console(stderr=True)


class SqlDimensionLoader(DimensionLoader):
    """MERGE dimension records into a SQL Server table."""

    def __init__(self, schema: str | None = None, config: Settings | None = None):
        self.config = config or settings
        self.schema = schema or self.config.db_schema

    def merge_sql(self) -> str:
        """Single-row MERGE statement with one placeholder per column."""
        source_cols = ", ".join(f"? AS {c}" for c in self.columns)
        updates = ", ".join(f"t.{c} = s.{c}" for c in self.columns if c != self.key)
        insert_cols = ", ".join(self.columns)
        insert_vals = ", ".join(f"s.{c}" for c in self.columns)
        return (
            f"MERGE {self.schema}.{self.table} AS t "
            f"USING (SELECT {source_cols}) AS s "
            f"ON t.{self.key} = s.{self.key} "
            f"WHEN MATCHED THEN UPDATE SET {updates}, t.loaded_at = SYSUTCDATETIME() "
            f"WHEN NOT MATCHED THEN INSERT ({insert_cols}) VALUES ({insert_vals});"
        )

    def load(self, records: Sequence[DimensionRecord]) -> int:
        rows = self._rows(records)
        if not rows:
            console.print(f"  [yellow]\\[skip][/] no {self.entity} to load")
            return 0

        from sales_etl.db import execute_many

        params = [tuple(row[c] for c in self.columns) for row in rows]
        count = execute_many(
            self.merge_sql(), params, connection_string=self.config.connection_string()
        )
        console.print(f"    [green]✓[/] {self.entity}: {count:,} rows → {self.schema}.{self.table}")
        return count


class SqlCustomerLoader(CustomerColumns, SqlDimensionLoader):
    pass


class SqlProductLoader(ProductColumns, SqlDimensionLoader):
    pass


class SqlOrderLoader(OrderColumns, SqlDimensionLoader):
    pass
