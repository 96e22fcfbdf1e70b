"""
Adapters - External implementations of ports

This package contains implementations of the core ports:
- sec_index.py: EDGAR index page reader (httpx + BeautifulSoup)
- listing.py: Listing service and edgartools attachment listings
- documents.py: Document downloader and PDF rendering API client
"""
from .sec_index import SecIndexAdapter
from .listing import HttpListingService, EdgartoolsListing
from .documents import SecDocumentFetcher, PdfLayerRenderer

__all__ = [
    "SecIndexAdapter",
    "HttpListingService",
    "EdgartoolsListing",
    "SecDocumentFetcher",
    "PdfLayerRenderer",
]
