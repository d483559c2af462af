"""
Remote Extractor — send a PDF statement to the parse service.

The service receives the statement as base64 text and answers with
transaction tuples already pulled out of the PDF text:

    POST {service_url}/pdf-parse
    {"pdfData": "<base64>"}
    -> {"transactions": [{"date": ..., "description": ..., "amount": ..., "type": ...}]}
"""

from __future__ import annotations

import base64
import logging
from typing import TYPE_CHECKING, Any

import httpx

from spendsight.exceptions import ExtractionError
from spendsight.extractors.base import BaseExtractor
from spendsight.extractors.normalize import normalize_records

if TYPE_CHECKING:
    from spendsight.models.transaction import Transaction

logger = logging.getLogger("spendsight.extractors.remote")


class RemoteExtractor(BaseExtractor):
    """Extract transactions from PDF statements via the parse service.

    Usage::

        async with RemoteExtractor("http://localhost:3000") as extractor:
            transactions = await extractor.extract(pdf_bytes)

    Any failure (network, HTTP status, malformed payload) is raised as
    :class:`ExtractionError`; deciding whether to fall back is the
    caller's business.
    """

    name = "remote"
    description = "Parse PDF statements with the remote parse service"

    def __init__(
        self,
        service_url: str = "http://localhost:3000",
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        **options: Any,
    ) -> None:
        super().__init__(**options)
        self.service_url = service_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RemoteExtractor:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create a reusable httpx client."""
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._http

    async def close(self) -> None:
        """Clean up HTTP client."""
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    async def extract(self, content: bytes) -> list[Transaction]:
        """Upload the statement and normalize the returned tuples."""
        payload = {"pdfData": base64.b64encode(content).decode("ascii")}
        data = await self._api_post("pdf-parse", payload)

        records = data.get("transactions")
        if not isinstance(records, list):
            raise ExtractionError("Invalid response format from parse service")

        transactions = normalize_records(records)
        logger.info(
            "Parse service returned %d records, %d valid transactions",
            len(records),
            len(transactions),
        )
        return transactions

    async def health_check(self) -> dict[str, Any]:
        """Check that the parse service is reachable."""
        client = await self._get_client()
        try:
            resp = await client.get(f"{self.service_url}/")
            return {"service": self.service_url, "healthy": resp.status_code < 400, "error": None}
        except httpx.HTTPError as e:
            return {"service": self.service_url, "healthy": False, "error": str(e)}

    async def _api_post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST to the parse service and decode the JSON body."""
        client = await self._get_client()
        url = f"{self.service_url}/{endpoint}"

        try:
            resp = await client.post(url, json=payload)
        except httpx.HTTPError as e:
            raise ExtractionError(f"Parse service unreachable at {url}: {e}") from e

        if resp.status_code >= 400:
            logger.error("Parse service error %d: %s", resp.status_code, resp.text[:200])
            raise ExtractionError(f"Parse service returned HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            raise ExtractionError("Parse service returned invalid JSON") from e

        if not isinstance(data, dict):
            raise ExtractionError("Invalid response format from parse service")
        return data
