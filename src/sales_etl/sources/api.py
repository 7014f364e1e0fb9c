"""
HTTP sales API source.

Fetches sales as JSON from a REST endpoint. The payload is either a bare list
of sale objects or an object wrapping that list under "data" or "sales".
"""

from datetime import date
from typing import Any

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from sales_etl.models import SalesData
from sales_etl.sources.base import PlainSource


class ApiSalesSource(PlainSource):
    """Plain source reading sales from an HTTP API."""

    source_key = "api"

    def __init__(self, url: str, timeout: float = 30.0, client: httpx.Client | None = None):
        self.url = url
        self.timeout = timeout
        self._client = client

    def extract(self) -> list[SalesData]:
        payload = self._fetch_json()
        return [self._to_sale(item) for item in self._unwrap(payload)]

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=30),
        reraise=True,
    )
    def _fetch_json(self) -> Any:
        """GET the endpoint, retrying transport failures."""
        if self._client is not None:
            response = self._client.get(self.url, timeout=self.timeout)
        else:
            response = httpx.get(self.url, timeout=self.timeout, follow_redirects=True)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _unwrap(payload: Any) -> list[dict[str, Any]]:
        if isinstance(payload, dict):
            for key in ("data", "sales"):
                if isinstance(payload.get(key), list):
                    return payload[key]
            raise ValueError("API payload has no 'data' or 'sales' list")
        if isinstance(payload, list):
            return payload
        raise ValueError(f"Unexpected API payload type: {type(payload).__name__}")

    @staticmethod
    def _to_sale(item: dict[str, Any]) -> SalesData:
        raw_date = item.get("order_date")
        return SalesData(
            order_id=str(item["order_id"]),
            customer_id=str(item["customer_id"]),
            product_id=str(item["product_id"]),
            # Accept both plain dates and ISO timestamps
            order_date=date.fromisoformat(str(raw_date)[:10]) if raw_date else None,
            quantity=int(item["quantity"]),
            unit_price=float(item["unit_price"]),
        )
