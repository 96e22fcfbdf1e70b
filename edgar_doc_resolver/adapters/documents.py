"""
Document Adapters

- SecDocumentFetcher: implements DocumentFetcher against sec.gov
- PdfLayerRenderer: implements PdfRenderer with a pdflayer-style API
  (GET {endpoint}?access_key=...&document_url=...)
"""
import logging
from typing import Optional

import httpx

from ..core.errors import NetworkFailure, RenderFailure
from ..core.ports import DocumentFetcher, PdfRenderer
from .sec_index import build_http_client, sec_headers

logger = logging.getLogger(__name__)


class SecDocumentFetcher(DocumentFetcher):
    """Download documents with SEC-compliant headers"""

    def __init__(self, user_agent: str, client: Optional[httpx.Client] = None, timeout: Optional[float] = None):
        self.headers = sec_headers(user_agent)
        self.client = client or build_http_client(timeout)

    def close(self) -> None:
        self.client.close()

    def fetch_text(self, url: str) -> str:
        try:
            response = self.client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            raise NetworkFailure(f"Fetch failed for {url}: {e}") from e
        if not response.is_success:
            raise NetworkFailure(f"Fetch failed {response.status_code}: {url}")
        return response.text


class PdfLayerRenderer(PdfRenderer):
    """HTML-to-PDF rendering through an external API"""

    def __init__(self, endpoint: str, access_key: str, client: Optional[httpx.Client] = None, timeout: Optional[float] = None):
        self.endpoint = endpoint
        self.access_key = access_key
        self.client = client or build_http_client(timeout)

    def close(self) -> None:
        self.client.close()

    def render(self, document_url: str) -> bytes:
        params = {"access_key": self.access_key, "document_url": document_url}
        try:
            response = self.client.get(self.endpoint, params=params)
        except httpx.HTTPError as e:
            raise RenderFailure(f"PDF API request failed: {e}") from e

        if not response.is_success:
            logger.error(f"pdf: API error {response.status_code}: {response.text[:500]}")
            raise RenderFailure(f"Error from PDF API ({response.status_code})")
        return response.content
