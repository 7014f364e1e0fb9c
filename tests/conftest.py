"""Pytest configuration and fixtures."""

from collections.abc import Sequence

import pytest

from sales_etl.events import MemoryObserver
from sales_etl.loaders.base import CustomerColumns, DimensionLoader, OrderColumns, ProductColumns
from sales_etl.models import (
    CustomerRecord,
    ExtractionBundle,
    OrderRecord,
    ProductRecord,
    SalesData,
)
from sales_etl.sources.base import EnrichedSource, PlainSource


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-db",
        action="store_true",
        default=False,
        help="Run tests that require database connection",
    )


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "db: mark test as requiring database connection")


def pytest_collection_modifyitems(config, items):
    """Skip db tests unless --run-db is provided."""
    if config.getoption("--run-db"):
        return

    skip_db = pytest.mark.skip(reason="Need --run-db option to run database tests")
    for item in items:
        if "db" in item.keywords:
            item.add_marker(skip_db)


# ---------------------------------------------------------------------------
# Record helpers
# ---------------------------------------------------------------------------


def make_sales(count: int, prefix: str = "S") -> list[SalesData]:
    return [
        SalesData(
            order_id=f"{prefix}-O{i}",
            customer_id=f"C{i}",
            product_id=f"P{i}",
            order_date=None,
            quantity=1,
            unit_price=10.0,
        )
        for i in range(count)
    ]


def make_bundle(customers: int, products: int, orders: int, sales: int) -> ExtractionBundle:
    return ExtractionBundle(
        customers=[CustomerRecord(customer_id=f"C{i}", name=f"Customer {i}") for i in range(customers)],
        products=[ProductRecord(product_id=f"P{i}", name=f"Product {i}") for i in range(products)],
        orders=[OrderRecord(order_id=f"O{i}", customer_id="C0") for i in range(orders)],
        sales=make_sales(sales, prefix="B"),
    )


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class FakePlainSource(PlainSource):
    """Plain source returning canned facts, or raising."""

    def __init__(self, name: str, facts: list[SalesData] | None = None, error: Exception | None = None):
        self.source_key = name
        self.facts = facts or []
        self.error = error
        self.calls = 0

    def extract(self) -> list[SalesData]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.facts


class FakeEnrichedSource(EnrichedSource):
    """Enriched source returning a canned bundle, or raising."""

    def __init__(self, name: str, bundle: ExtractionBundle | None = None, error: Exception | None = None):
        self.source_key = name
        self.bundle = bundle or ExtractionBundle()
        self.error = error
        self.plain_calls = 0
        self.bundle_calls = 0

    def extract(self) -> list[SalesData]:
        self.plain_calls += 1
        return super().extract()

    def extract_with_dimensions(self) -> ExtractionBundle:
        self.bundle_calls += 1
        if self.error is not None:
            raise self.error
        return self.bundle


class RecordingLoader(DimensionLoader):
    """Loader that records each call into a shared call log."""

    def __init__(self, call_log: list, error: Exception | None = None):
        self.call_log = call_log
        self.error = error
        self.received: list[Sequence] = []

    def load(self, records):
        self.call_log.append(("start", self.entity, len(records)))
        if self.error is not None:
            raise self.error
        self.received.append(list(records))
        self.call_log.append(("end", self.entity, len(records)))
        return len(records)


class RecordingCustomerLoader(CustomerColumns, RecordingLoader):
    pass


class RecordingProductLoader(ProductColumns, RecordingLoader):
    pass


class RecordingOrderLoader(OrderColumns, RecordingLoader):
    pass


@pytest.fixture
def observer() -> MemoryObserver:
    return MemoryObserver()


@pytest.fixture
def call_log() -> list:
    return []


@pytest.fixture
def loaders(call_log):
    """Customer, product and order loaders sharing one call log."""
    return (
        RecordingCustomerLoader(call_log),
        RecordingProductLoader(call_log),
        RecordingOrderLoader(call_log),
    )
