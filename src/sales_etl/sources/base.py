"""
Base classes for extraction sources.

Every source is either plain (facts only) or enriched (facts plus the
customer/product/order dimensions). The orchestrator resolves which one it
is once, at registration, from the class hierarchy below.
"""

from abc import ABC, abstractmethod
from enum import Enum

from sales_etl.models import ExtractionBundle, SalesData


class SourceKind(Enum):
    """How the orchestrator drives a registered source."""

    PLAIN = "plain"
    ENRICHED = "enriched"


class BaseSource(ABC):
    """Common surface of all sources."""

    source_key: str | None = None

    @property
    def name(self) -> str:
        """Identity used in run events and reports."""
        return self.source_key or type(self).__name__

    @abstractmethod
    def extract(self) -> list[SalesData]:
        """
        Extract fact records.

        Returns:
            Sales facts from this source (possibly empty)
        """
        pass


class PlainSource(BaseSource):
    """Source producing fact records only."""

    kind = SourceKind.PLAIN


class EnrichedSource(BaseSource):
    """Source that also yields the dimension entities behind its facts."""

    kind = SourceKind.ENRICHED

    @abstractmethod
    def extract_with_dimensions(self) -> ExtractionBundle:
        """
        Extract customers, products, orders and facts in one pass.

        Returns:
            Bundle holding all four sequences
        """
        pass

    def extract(self) -> list[SalesData]:
        return self.extract_with_dimensions().sales


def source_kind(source: object) -> SourceKind:
    """Resolve the kind of a source, rejecting anything outside the hierarchy."""
    if isinstance(source, EnrichedSource):
        return SourceKind.ENRICHED
    if isinstance(source, PlainSource):
        return SourceKind.PLAIN
    raise TypeError(
        f"{type(source).__name__} is not a PlainSource or EnrichedSource"
    )
