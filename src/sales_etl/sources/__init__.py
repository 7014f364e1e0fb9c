"""
Extraction sources.

Each source is a `PlainSource` (facts only) or an `EnrichedSource` (facts
plus customer/product/order dimensions):
- csv: order-management CSV exports (enriched)
- api: REST sales endpoint (plain)
"""

from sales_etl.sources.api import ApiSalesSource
from sales_etl.sources.base import BaseSource, EnrichedSource, PlainSource, SourceKind, source_kind
from sales_etl.sources.csv import CsvSalesSource

__all__ = [
    "BaseSource",
    "PlainSource",
    "EnrichedSource",
    "SourceKind",
    "source_kind",
    "CsvSalesSource",
    "ApiSalesSource",
]
