"""
Dimension loaders.

One loader per entity (customer, product, order), in two backends:
- parquet: local warehouse directory of Parquet tables
- sql: SQL Server Dim* tables via MERGE
"""

from sales_etl.loaders.base import DimensionLoader, DimensionRecord
from sales_etl.loaders.parquet import (
    ParquetCustomerLoader,
    ParquetDimensionLoader,
    ParquetOrderLoader,
    ParquetProductLoader,
)
from sales_etl.loaders.sql import (
    SqlCustomerLoader,
    SqlDimensionLoader,
    SqlOrderLoader,
    SqlProductLoader,
)

__all__ = [
    "DimensionLoader",
    "DimensionRecord",
    "ParquetDimensionLoader",
    "ParquetCustomerLoader",
    "ParquetProductLoader",
    "ParquetOrderLoader",
    "SqlDimensionLoader",
    "SqlCustomerLoader",
    "SqlProductLoader",
    "SqlOrderLoader",
]
