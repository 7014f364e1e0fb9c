"""
CSV sales export source.

Reads the four CSV exports of the order-management system and produces the
full bundle: customers, products, orders and one sales fact per order line.

Expected files (header row required, column names case-insensitive):
- customers.csv: customer_id, name, email, country
- products.csv: product_id, name, category, price
- orders.csv: order_id, customer_id, order_date, status
- order_details.csv: order_id, product_id, quantity, unit_price
"""

from pathlib import Path

import polars as pl

from sales_etl.models import (
    CustomerRecord,
    ExtractionBundle,
    OrderRecord,
    ProductRecord,
    SalesData,
)
from sales_etl.sources.base import EnrichedSource

DATE_FORMAT = "%Y-%m-%d"

# Columns read from each file; optional ones are filled with nulls if absent
CUSTOMER_COLUMNS = {"customer_id": pl.Utf8, "name": pl.Utf8, "email": pl.Utf8, "country": pl.Utf8}
PRODUCT_COLUMNS = {"product_id": pl.Utf8, "name": pl.Utf8, "category": pl.Utf8, "price": pl.Float64}
ORDER_COLUMNS = {"order_id": pl.Utf8, "customer_id": pl.Utf8, "order_date": pl.Utf8, "status": pl.Utf8}
DETAIL_COLUMNS = {"order_id": pl.Utf8, "product_id": pl.Utf8, "quantity": pl.Int64, "unit_price": pl.Float64}


class CsvSalesSource(EnrichedSource):
    """Enriched source backed by a directory of CSV exports."""

    source_key = "csv"

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def extract_with_dimensions(self) -> ExtractionBundle:
        customers = self._read(
            "customers.csv", CUSTOMER_COLUMNS, required=("customer_id", "name")
        ).unique(subset=["customer_id"], keep="first", maintain_order=True)

        products = self._read(
            "products.csv", PRODUCT_COLUMNS, required=("product_id", "name")
        ).unique(subset=["product_id"], keep="first", maintain_order=True)

        orders = (
            self._read("orders.csv", ORDER_COLUMNS, required=("order_id", "customer_id"))
            .with_columns(pl.col("order_date").str.to_date(DATE_FORMAT, strict=False))
            .unique(subset=["order_id"], keep="first", maintain_order=True)
        )

        details = self._read(
            "order_details.csv", DETAIL_COLUMNS, required=("order_id", "product_id", "quantity", "unit_price")
        )

        # Order lines without a known order carry no customer; drop them
        sales = details.join(
            orders.select("order_id", "customer_id", "order_date"),
            on="order_id",
            how="inner",
            maintain_order="left",
        ).select("order_id", "customer_id", "product_id", "order_date", "quantity", "unit_price")

        return ExtractionBundle(
            customers=[CustomerRecord(**row) for row in customers.iter_rows(named=True)],
            products=[ProductRecord(**row) for row in products.iter_rows(named=True)],
            orders=[OrderRecord(**row) for row in orders.iter_rows(named=True)],
            sales=[SalesData(**row) for row in sales.iter_rows(named=True)],
        )

    def _read(
        self,
        filename: str,
        columns: dict[str, pl.DataType],
        required: tuple[str, ...],
    ) -> pl.DataFrame:
        """Read one export, normalize headers and project to the known columns."""
        path = self.directory / filename
        if not path.exists():
            raise FileNotFoundError(f"CSV export not found: {path}")

        df = pl.read_csv(path, infer_schema=False)
        df = df.rename({c: c.strip().lower() for c in df.columns})

        missing = [c for c in required if c not in df.columns]
        if missing:
            raise ValueError(f"{filename} is missing required columns: {', '.join(missing)}")

        return df.select(
            [
                pl.col(c).str.strip_chars().cast(dtype) if c in df.columns else pl.lit(None, dtype=dtype).alias(c)
                for c, dtype in columns.items()
            ]
        ).filter(pl.all_horizontal([pl.col(c).is_not_null() for c in required]))
