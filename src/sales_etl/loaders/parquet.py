"""
Parquet dimension loaders.

Each loader upserts its entity into `<warehouse_dir>/Dim<Entity>.parquet`,
keyed on the business key. Re-running a load with the same records leaves
the table unchanged.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import ClassVar

import polars as pl
from rich.console import Console

from sales_etl.config import settings
from sales_etl.loaders.base import (
    CustomerColumns,
    DimensionLoader,
    DimensionRecord,
    OrderColumns,
    ProductColumns,
)

console = Console(stderr=True)


class ParquetDimensionLoader(DimensionLoader):
    """Upsert dimension records into a Parquet table."""

    schema: ClassVar[dict[str, pl.DataType]]

    def __init__(self, warehouse_dir: Path | None = None):
        self.warehouse_dir = Path(warehouse_dir) if warehouse_dir else settings.warehouse_dir
        self.warehouse_dir.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self.warehouse_dir / f"{self.table}.parquet"

    def load(self, records: Sequence[DimensionRecord]) -> int:
        rows = self._rows(records)
        incoming = pl.DataFrame(
            {c: [row[c] for row in rows] for c in self.columns},
            schema=self.schema,
        )

        if self.path.exists():
            existing = pl.read_parquet(self.path)
            table = pl.concat([existing, incoming], how="vertical_relaxed").unique(
                subset=[self.key], keep="last", maintain_order=True
            )
        else:
            table = incoming

        table.write_parquet(self.path)
        console.print(f"    [green]✓[/] {self.entity}: {len(incoming):,} rows → {self.path.name}")
        return len(incoming)

    def read(self) -> pl.DataFrame:
        """Current contents of the table (empty if never loaded)."""
        if not self.path.exists():
            return pl.DataFrame(schema=self.schema)
        return pl.read_parquet(self.path)


class ParquetCustomerLoader(CustomerColumns, ParquetDimensionLoader):
    schema = {"customer_id": pl.Utf8, "name": pl.Utf8, "email": pl.Utf8, "country": pl.Utf8}


class ParquetProductLoader(ProductColumns, ParquetDimensionLoader):
    schema = {"product_id": pl.Utf8, "name": pl.Utf8, "category": pl.Utf8, "price": pl.Float64}


class ParquetOrderLoader(OrderColumns, ParquetDimensionLoader):
    schema = {"order_id": pl.Utf8, "customer_id": pl.Utf8, "order_date": pl.Date, "status": pl.Utf8}
