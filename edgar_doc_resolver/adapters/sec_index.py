"""
SEC Index Adapter

Implements IndexSource by fetching a filing's index page from EDGAR
and parsing its document table.
"""
import logging
import re
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from ..core.domain import FilingReference, IndexEntry
from ..core.errors import NetworkFailure, ParseFailure
from ..core.ports import IndexSource

logger = logging.getLogger(__name__)

DOCUMENT_TABLE_CLASS = "tableFile"
ACCEPT_HTML = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

HEADER_ROLES = ("document", "type", "description", "size")
DEFAULT_POSITIONS = {"document": 0, "type": 1, "description": 2, "size": 3}

_NOT_NUMERIC = re.compile(r"[^0-9.]")


def sec_headers(user_agent: str) -> dict[str, str]:
    """Headers SEC requires: a descriptive User-Agent, plus HTML/XML accept"""
    return {
        "User-Agent": user_agent,
        "Accept": ACCEPT_HTML,
    }


def build_http_client(timeout: Optional[float] = None) -> httpx.Client:
    return httpx.Client(timeout=timeout, follow_redirects=True)


def index_urls(folder_url: str, accession_number: str) -> list[str]:
    """Candidate index pages, in the order they are tried"""
    return [
        f"{folder_url}{accession_number}-index-headers.html",
        f"{folder_url}{accession_number}-index.html",
    ]


def parse_size(text: str) -> float:
    """Parse a size cell like "1,234,567" or "48 KB"; unparsable -> 0"""
    cleaned = _NOT_NUMERIC.sub("", text or "")
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def _cell_filename(cell) -> str:
    link = cell.find("a")
    text = link.get_text(" ", strip=True) if link is not None else cell.get_text(" ", strip=True)
    # Inline XBRL documents render as "d123.htm iXBRL"
    parts = text.split()
    return parts[0] if parts else ""


def column_positions(table) -> dict[str, int]:
    """
    Map column roles to cell positions.

    EDGAR's tableFile header is Seq | Description | Document | Type | Size;
    roles are read from the <th> labels when a header row exists. Without
    a header the order is document, type, description, size.
    """
    for row in table.find_all("tr"):
        labels = [th.get_text(" ", strip=True).lower() for th in row.find_all("th")]
        if not labels:
            continue
        positions = {label: i for i, label in enumerate(labels) if label in HEADER_ROLES}
        if "document" in positions and "type" in positions:
            return positions
    return dict(DEFAULT_POSITIONS)


def _cell_text(cells, positions: dict[str, int], role: str) -> Optional[str]:
    position = positions.get(role)
    if position is None or position >= len(cells):
        return None
    return cells[position].get_text(" ", strip=True)


def parse_index_page(html: str) -> list[IndexEntry]:
    """
    Parse the document table of an EDGAR index page.

    Columns are located by header label (see column_positions). Rows with
    fewer than two data cells (headers) or no filename are skipped.

    Raises:
        ParseFailure: no table on the page, or no usable rows
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table", class_=DOCUMENT_TABLE_CLASS) or soup.find("table")
    if table is None:
        raise ParseFailure("No document table in index page")

    positions = column_positions(table)

    entries = []
    for row in table.find_all("tr"):
        cells = row.find_all("td")
        if len(cells) < 2 or positions["document"] >= len(cells):
            continue

        filename = _cell_filename(cells[positions["document"]])
        if not filename:
            continue

        declared_type = _cell_text(cells, positions, "type") or ""
        size = _cell_text(cells, positions, "size")
        entries.append(IndexEntry(
            filename=filename,
            declared_type=declared_type.upper(),
            description=_cell_text(cells, positions, "description") or "",
            size_bytes=parse_size(size) if size is not None else 0.0,
        ))

    if not entries:
        raise ParseFailure("Index table has no document rows")
    return entries


class SecIndexAdapter(IndexSource):
    """EDGAR filing index reader using httpx + BeautifulSoup"""

    def __init__(self, user_agent: str, client: Optional[httpx.Client] = None, timeout: Optional[float] = None):
        self.headers = sec_headers(user_agent)
        self.client = client or build_http_client(timeout)

    def close(self) -> None:
        self.client.close()

    def _fetch_first(self, urls: list[str]) -> str:
        failures = []
        for url in urls:
            try:
                response = self.client.get(url, headers=self.headers)
            except httpx.HTTPError as e:
                failures.append(f"{url}: {e}")
                continue
            if response.is_success:
                return response.text
            failures.append(f"{url}: HTTP {response.status_code}")
            logger.debug(f"index: {url} returned {response.status_code}")

        raise NetworkFailure("Index pages unavailable (" + "; ".join(failures) + ")")

    def fetch_entries(self, ref: FilingReference, folder_url: str) -> list[IndexEntry]:
        html = self._fetch_first(index_urls(folder_url, ref.accession_number))
        entries = parse_index_page(html)
        logger.debug(f"index: {ref.accession_number} has {len(entries)} documents")
        return entries
