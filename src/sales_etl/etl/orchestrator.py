"""
Extraction orchestrator.

Drives one extraction run:
1. Extract from every registered source, in registration order
2. Aggregate the sales facts
3. Load dimensions from the enriched bundle (customers → products → orders)
4. Report the outcome (facts are aggregated but never loaded)

Usage:
    from sales_etl.etl import ExtractionOrchestrator
    orchestrator = ExtractionOrchestrator(sources, customers, products, orders)
    report = orchestrator.execute_extraction()
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Sequence
from typing import Any

from sales_etl.config import settings
from sales_etl.etl.report import RunReport, StepResult, StepStatus
from sales_etl.events import ConsoleObserver, EventLevel, Observer, RunEvent
from sales_etl.loaders.base import DimensionLoader
from sales_etl.models import ExtractionBundle, SalesData
from sales_etl.sources.base import BaseSource, EnrichedSource, PlainSource, SourceKind, source_kind


class ExtractionOrchestrator:
    """Coordinate sources and dimension loaders for a single run at a time."""

    def __init__(
        self,
        sources: Iterable[BaseSource] | None,
        customer_loader: DimensionLoader,
        product_loader: DimensionLoader,
        order_loader: DimensionLoader,
        observer: Observer | None = None,
    ):
        self.observer = observer or ConsoleObserver(settings.log_level)

        # Kind is resolved here, once; the run loop never inspects types
        self.sources: list[tuple[BaseSource, SourceKind]] = [
            (source, source_kind(source)) for source in (sources or [])
        ]
        enriched = [s.name for s, kind in self.sources if kind is SourceKind.ENRICHED]
        if len(enriched) > 1:
            raise ValueError(
                f"At most one enriched source may be registered, got {len(enriched)}: {', '.join(enriched)}"
            )

        # Load order is fixed: orders reference customers and products
        self.loaders: list[tuple[str, DimensionLoader]] = [
            ("customers", customer_loader),
            ("products", product_loader),
            ("orders", order_loader),
        ]

        self._emit(EventLevel.INFO, "Extraction orchestrator initialized", sources=len(self.sources))

    def _emit(self, level: EventLevel, message: str, **context: Any) -> None:
        self.observer.emit(RunEvent(level=level, message=message, context=context))

    def execute_extraction(self) -> RunReport:
        """
        Run every source, then load the dimensions.

        Never raises: plain-source failures are recovered per source, and any
        other failure ends the run with a FATAL report.

        Returns:
            Report of the run
        """
        report = RunReport()
        start_time = time.time()
        self._emit(EventLevel.INFO, "Extraction run started")

        facts: list[SalesData] = []
        bundle: ExtractionBundle | None = None

        try:
            if not self.sources:
                self._emit(EventLevel.ERROR, "No extraction sources registered")
                report.finalize(fatal_error="no extraction sources registered")
                return report

            self._emit(EventLevel.INFO, "Sources registered", count=len(self.sources))

            source_steps = [report.add_step(source.name, "extract") for source, _ in self.sources]
            load_steps = [report.add_step(entity, "load") for entity, _ in self.loaders]

            for (source, kind), step in zip(self.sources, source_steps):
                self._emit(EventLevel.INFO, "Processing source", source=source.name, kind=kind.value)

                if kind is SourceKind.ENRICHED:
                    bundle = self._extract_bundle(source, step)
                    facts.extend(bundle.sales)
                    continue

                facts.extend(self._extract_from_source(source, step))

            if bundle is not None:
                report.bundle_captured = True
                self._emit(EventLevel.INFO, "Loading dimensions", **bundle.counts())
                for (entity, loader), step in zip(self.loaders, load_steps):
                    self._load_dimension(entity, loader, getattr(bundle, entity), step)
                self._emit(EventLevel.INFO, "Dimensions loaded")
            else:
                self._emit(EventLevel.WARNING, "No dimension bundle captured; skipping dimension load")

            report.finalize()
            self._emit(EventLevel.INFO, "Extraction run finished", status=report.status.value)
            self._emit(EventLevel.INFO, "Fact records were not loaded", facts=len(facts))

        except Exception as e:
            for step in report.steps:
                if step.status is StepStatus.RUNNING:
                    step.status = StepStatus.FAILED
                    step.error = str(e)
            self._emit(EventLevel.ERROR, "Extraction run failed", error=e)
            report.finalize(fatal_error=f"{type(e).__name__}: {e}")

        finally:
            report.fact_count = len(facts)
            report.duration = time.time() - start_time

        return report

    def _extract_bundle(self, source: EnrichedSource, step: StepResult) -> ExtractionBundle:
        """Run an enriched source. Failures propagate to the run boundary."""
        step.status = StepStatus.RUNNING
        started = time.time()

        bundle = source.extract_with_dimensions()

        step.status = StepStatus.DONE
        step.duration = time.time() - started
        step.row_count = len(bundle.sales)
        self._emit(EventLevel.INFO, "Enriched source produced bundle", source=source.name, **bundle.counts())
        return bundle

    def _extract_from_source(self, source: PlainSource, step: StepResult) -> Sequence[SalesData]:
        """Run a plain source, degrading any failure to an empty contribution."""
        step.status = StepStatus.RUNNING
        started = time.time()

        try:
            self._emit(EventLevel.DEBUG, "Running source", source=source.name)
            data = source.extract()
            step.status = StepStatus.DONE
            step.row_count = len(data)
            self._emit(EventLevel.INFO, "Source extracted records", source=source.name, count=len(data))
            return data

        except Exception as e:
            step.status = StepStatus.FAILED
            step.error = str(e)
            step.row_count = 0
            self._emit(EventLevel.ERROR, "Source extraction failed", source=source.name, error=e)
            return []

        finally:
            step.duration = time.time() - started

    def _load_dimension(
        self,
        entity: str,
        loader: DimensionLoader,
        records: Sequence[Any],
        step: StepResult,
    ) -> None:
        """Run one loader to completion. Failures propagate to the run boundary."""
        step.status = StepStatus.RUNNING
        started = time.time()

        written = loader.load(records)

        step.status = StepStatus.DONE
        step.duration = time.time() - started
        step.row_count = written if isinstance(written, int) else len(records)
        self._emit(EventLevel.INFO, "Dimension loaded", entity=entity, count=step.row_count)
