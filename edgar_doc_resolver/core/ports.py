"""
Ports - Interfaces for external dependencies

These define HOW the core interacts with the outside world,
but NOT the implementation details.
"""
from abc import ABC, abstractmethod
from typing import Optional

from .domain import FilingReference, IndexEntry, ListingFile


class IndexSource(ABC):
    """Port for reading a filing's index page"""

    @abstractmethod
    def fetch_entries(self, ref: FilingReference, folder_url: str) -> list[IndexEntry]:
        """Return the document rows of the filing index.

        Raises NetworkFailure if no index page could be fetched and
        ParseFailure if no document rows could be parsed.
        """
        pass


class ListingSource(ABC):
    """Port for the fallback file listing service"""

    @abstractmethod
    def list_files(self, ref: FilingReference) -> list[ListingFile]:
        """Return file descriptors for the filing (raises ListingUnavailable)"""
        pass


class DocumentFetcher(ABC):
    """Port for downloading a resolved document"""

    @abstractmethod
    def fetch_text(self, url: str) -> str:
        """Return the document body (raises NetworkFailure)"""
        pass


class PdfRenderer(ABC):
    """Port for the external HTML-to-PDF API"""

    @abstractmethod
    def render(self, document_url: str) -> bytes:
        """Render the document at URL to PDF bytes"""
        pass


class ResolutionStrategy(ABC):
    """One step of the resolution chain.

    resolve() returns a URL, returns None when the strategy does not
    apply, or raises ResolutionError when it applies but fails.
    """

    name: str = "strategy"

    @abstractmethod
    def resolve(self, ref: FilingReference) -> Optional[str]:
        pass
