"""
Base class for dimension loaders.

A loader persists one kind of dimension record. The orchestrator calls
`load()` once per run with the full sequence for its entity.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any, ClassVar

from sales_etl.models import CustomerRecord, OrderRecord, ProductRecord

DimensionRecord = CustomerRecord | ProductRecord | OrderRecord


class DimensionLoader(ABC):
    """Persist records of a single dimension entity."""

    entity: ClassVar[str]
    key: ClassVar[str]
    table: ClassVar[str]
    columns: ClassVar[tuple[str, ...]]

    @abstractmethod
    def load(self, records: Sequence[DimensionRecord]) -> int:
        """
        Persist dimension records.

        Args:
            records: Records of this loader's entity (possibly empty)

        Returns:
            Number of rows written
        """
        pass

    def _rows(self, records: Sequence[DimensionRecord]) -> list[dict[str, Any]]:
        """Project records to this loader's columns, last duplicate key wins."""
        rows: dict[Any, dict[str, Any]] = {}
        for record in records:
            data = asdict(record)
            rows[data[self.key]] = {c: data.get(c) for c in self.columns}
        return list(rows.values())


class CustomerColumns:
    entity = "customers"
    table = "DimCustomer"
    key = "customer_id"
    columns = ("customer_id", "name", "email", "country")


class ProductColumns:
    entity = "products"
    table = "DimProduct"
    key = "product_id"
    columns = ("product_id", "name", "category", "price")


class OrderColumns:
    entity = "orders"
    table = "DimOrder"
    key = "order_id"
    columns = ("order_id", "customer_id", "order_date", "status")
