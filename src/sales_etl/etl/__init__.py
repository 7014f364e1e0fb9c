"""
Extraction run orchestration.

Coordinates the flow:
1. Extract facts from every registered source (sources/*)
2. Capture the dimension bundle from the enriched source
3. Load customers, products and orders, in that order (loaders/*)

Provides:
- Per-source failure isolation
- Structured run reports with per-step status
- Settings-driven wiring of sources and loaders

Usage:
    from sales_etl.etl import build_orchestrator
    report = build_orchestrator().execute_extraction()
"""

from sales_etl.etl.factory import build_orchestrator
from sales_etl.etl.orchestrator import ExtractionOrchestrator
from sales_etl.etl.report import RunReport, RunStatus, StepResult, StepStatus, render_report

__all__ = [
    "ExtractionOrchestrator",
    "build_orchestrator",
    "RunReport",
    "RunStatus",
    "StepResult",
    "StepStatus",
    "render_report",
]
