"""
Listing Adapters

Implement ListingSource: a flat list of the files in a filing, used when
the index page cannot be read.

- HttpListingService: a JSON listing endpoint returning
  [{"filename": ..., "type": ..., "url": ...}, ...]
- EdgartoolsListing: filing attachments via the edgartools library
"""
from pathlib import PurePosixPath
from typing import Any, Optional

import httpx
from edgar import find, set_identity

from ..core.domain import FilingReference, ListingFile
from ..core.errors import ListingUnavailable
from ..core.ports import ListingSource
from .sec_index import build_http_client


def dashed_accession(accession_number: str) -> str:
    """000168316825008885 -> 0001683168-25-008885"""
    digits = accession_number.replace("-", "")
    if len(digits) != 18:
        return accession_number
    return f"{digits[:10]}-{digits[10:12]}-{digits[12:]}"


def parse_listing(payload: Any) -> list[ListingFile]:
    """Turn a listing response body into ListingFile descriptors"""
    if not isinstance(payload, list):
        raise ListingUnavailable("Listing service response is not an array")

    files = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        filename = str(item.get("filename") or "").strip()
        if not filename:
            continue
        files.append(ListingFile(
            filename=filename,
            url=item.get("url") or None,
            type=str(item.get("type") or ""),
        ))
    return files


class HttpListingService(ListingSource):
    """Listing service reached over HTTP"""

    def __init__(self, base_url: str, user_agent: str, client: Optional[httpx.Client] = None, timeout: Optional[float] = None):
        self.base_url = base_url
        self.headers = {"User-Agent": user_agent, "Accept": "application/json"}
        self.client = client or build_http_client(timeout)

    def close(self) -> None:
        self.client.close()

    def list_files(self, ref: FilingReference) -> list[ListingFile]:
        params = {"cik": ref.filer_id, "accession": ref.accession_number}
        try:
            response = self.client.get(self.base_url, params=params, headers=self.headers)
        except httpx.HTTPError as e:
            raise ListingUnavailable(f"Listing service request failed for {ref.accession_number}: {e}") from e

        if not response.is_success:
            raise ListingUnavailable(
                f"Listing service returned HTTP {response.status_code} for {ref.accession_number}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ListingUnavailable(f"Listing service returned invalid JSON for {ref.accession_number}") from e

        files = parse_listing(payload)
        if not files:
            raise ListingUnavailable(f"Listing service has no files for {ref.accession_number}")
        return files


class EdgartoolsListing(ListingSource):
    """Filing attachments from edgartools, used when no listing service is configured"""

    def __init__(self, user_agent: str = "edgar-doc-resolver admin@example.com"):
        set_identity(user_agent)

    def list_files(self, ref: FilingReference) -> list[ListingFile]:
        accession = dashed_accession(ref.accession_number)
        try:
            filing = find(accession)
            attachments = list(filing.attachments) if filing is not None else []
        except Exception as e:
            raise ListingUnavailable(f"edgartools lookup failed for {accession}: {str(e)}") from e

        files = []
        for attachment in attachments:
            filename = getattr(attachment, "document", None)
            if not filename:
                continue
            files.append(ListingFile(
                filename=filename,
                url=getattr(attachment, "url", None),
                type=PurePosixPath(filename).suffix.lstrip(".").lower(),
            ))

        if not files:
            raise ListingUnavailable(f"No attachments found for {accession}")
        return files
