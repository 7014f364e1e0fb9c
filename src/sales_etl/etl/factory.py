"""
Build an orchestrator from settings.

Sources and loaders are passed explicitly to the orchestrator; this module is
the single place that decides which ones a configured process uses.
"""

from sales_etl.config import Settings, settings as default_settings
from sales_etl.etl.orchestrator import ExtractionOrchestrator
from sales_etl.events import ConsoleObserver, Observer
from sales_etl.loaders import (
    DimensionLoader,
    ParquetCustomerLoader,
    ParquetOrderLoader,
    ParquetProductLoader,
    SqlCustomerLoader,
    SqlOrderLoader,
    SqlProductLoader,
)
from sales_etl.sources import ApiSalesSource, BaseSource, CsvSalesSource


def build_sources(settings: Settings) -> list[BaseSource]:
    """Sources enabled by the current configuration, in run order."""
    sources: list[BaseSource] = []
    if settings.csv_dir.is_dir():
        sources.append(CsvSalesSource(settings.csv_dir))
    if settings.api_url:
        sources.append(ApiSalesSource(settings.api_url, timeout=settings.api_timeout))
    return sources


def build_loaders(settings: Settings) -> tuple[DimensionLoader, DimensionLoader, DimensionLoader]:
    """Customer, product and order loaders for the configured backend."""
    if settings.loader_backend == "sqlserver":
        return (
            SqlCustomerLoader(config=settings),
            SqlProductLoader(config=settings),
            SqlOrderLoader(config=settings),
        )
    return (
        ParquetCustomerLoader(settings.warehouse_dir),
        ParquetProductLoader(settings.warehouse_dir),
        ParquetOrderLoader(settings.warehouse_dir),
    )


def build_orchestrator(
    settings: Settings | None = None,
    observer: Observer | None = None,
) -> ExtractionOrchestrator:
    settings = settings or default_settings
    customers, products, orders = build_loaders(settings)
    return ExtractionOrchestrator(
        build_sources(settings),
        customer_loader=customers,
        product_loader=products,
        order_loader=orders,
        observer=observer or ConsoleObserver(settings.log_level),
    )
