"""
sales_etl: Sales data extract-and-load coordinator

Pulls sales records from a set of heterogeneous sources and loads the
dimension entities into the warehouse:

    Sources → aggregate facts → DimCustomer → DimProduct → DimOrder

Core constraints:
- Sources run one after another; a failing plain source never aborts the run
- Dimensions load in dependency order (customers, products, then orders)
- Fact records are aggregated and counted but never persisted
"""

__version__ = "0.1.0"
