"""
Record types moved through an extraction run.

The orchestrator treats every record as an opaque element: it counts and
forwards them but never inspects their fields. The concrete sources and
loaders are the only code that depends on the attributes below.
"""

from dataclasses import dataclass, field
from datetime import date


@dataclass
class SalesData:
    """One sale observation (fact). Aggregated per run, never persisted."""

    order_id: str
    customer_id: str
    product_id: str
    order_date: date | None
    quantity: int
    unit_price: float

    @property
    def total(self) -> float:
        return self.quantity * self.unit_price


@dataclass
class CustomerRecord:
    """Customer dimension entity."""

    customer_id: str
    name: str
    email: str | None = None
    country: str | None = None


@dataclass
class ProductRecord:
    """Product dimension entity."""

    product_id: str
    name: str
    category: str | None = None
    price: float | None = None


@dataclass
class OrderRecord:
    """Order dimension entity. References a customer by business key."""

    order_id: str
    customer_id: str
    order_date: date | None = None
    status: str | None = None


@dataclass
class ExtractionBundle:
    """
    Combined output of an enriched source.

    Produced atomically by a single call to
    `EnrichedSource.extract_with_dimensions()`.
    """

    customers: list[CustomerRecord] = field(default_factory=list)
    products: list[ProductRecord] = field(default_factory=list)
    orders: list[OrderRecord] = field(default_factory=list)
    sales: list[SalesData] = field(default_factory=list)

    def counts(self) -> dict[str, int]:
        """Row count per sequence, keyed by entity name."""
        return {
            "customers": len(self.customers),
            "products": len(self.products),
            "orders": len(self.orders),
            "sales": len(self.sales),
        }
