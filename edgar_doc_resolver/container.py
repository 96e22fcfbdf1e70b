"""
Dependency Injection Container

Wires together the hexagonal architecture by creating and injecting dependencies.
"""
from typing import Mapping, Optional

from .adapters import (
    SecIndexAdapter,
    HttpListingService,
    EdgartoolsListing,
    SecDocumentFetcher,
    PdfLayerRenderer,
)
from .config import Settings
from .core import (
    IndexSource,
    ListingSource,
    DocumentFetcher,
    PdfRenderer,
    PrimaryDocumentResolver,
    DeterministicPathStrategy,
    IndexPageStrategy,
    ListingServiceStrategy,
    ResolveDocumentService,
    PdfExportService,
    SpreadsheetExportService,
    DocxExportService,
)
from .core.rules import (
    DEFAULT_FORM_PATHS,
    FilenamePatterns,
    default_filename_patterns,
    load_filename_patterns,
)


class Container:
    """Dependency injection container for the application

    Any adapter can be passed in to replace the default built from settings.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        index_source: Optional[IndexSource] = None,
        listing_source: Optional[ListingSource] = None,
        document_fetcher: Optional[DocumentFetcher] = None,
        pdf_renderer: Optional[PdfRenderer] = None,
        form_paths: Optional[Mapping[str, str]] = None,
        filename_patterns: Optional[FilenamePatterns] = None,
    ):
        self.settings = settings or Settings()
        s = self.settings

        # Adapters (infrastructure)
        self.index_source = index_source or SecIndexAdapter(s.user_agent, timeout=s.http_timeout)
        self.listing_source = listing_source or self._default_listing()
        self.document_fetcher = document_fetcher or SecDocumentFetcher(s.user_agent, timeout=s.http_timeout)
        self.pdf_renderer = pdf_renderer or self._default_renderer()

        # Resolution rules (data)
        self.form_paths = form_paths if form_paths is not None else DEFAULT_FORM_PATHS
        if filename_patterns is not None:
            self.filename_patterns = filename_patterns
        elif s.filename_patterns_file:
            self.filename_patterns = load_filename_patterns(s.filename_patterns_file)
        else:
            self.filename_patterns = default_filename_patterns()

        # Strategy chain, in order of decreasing confidence
        self.resolver = PrimaryDocumentResolver([
            DeterministicPathStrategy(s.archive_root, self.form_paths),
            IndexPageStrategy(s.archive_root, self.index_source, self.filename_patterns),
            ListingServiceStrategy(s.archive_root, self.listing_source, self.filename_patterns),
        ])

        # Services (use cases)
        self.resolve_document = ResolveDocumentService(self.resolver)

        self.export_pdf = PdfExportService(
            resolve_service=self.resolve_document,
            renderer=self.pdf_renderer
        )

        self.export_spreadsheet = SpreadsheetExportService(
            resolve_service=self.resolve_document,
            fetcher=self.document_fetcher
        )

        self.export_docx = DocxExportService(
            resolve_service=self.resolve_document,
            fetcher=self.document_fetcher
        )

    def _default_listing(self) -> ListingSource:
        s = self.settings
        if s.listing_url:
            return HttpListingService(s.listing_url, s.user_agent, timeout=s.http_timeout)
        return EdgartoolsListing(s.user_agent)

    def _default_renderer(self) -> Optional[PdfRenderer]:
        s = self.settings
        if not s.pdf_configured:
            return None
        return PdfLayerRenderer(s.pdf_api_endpoint, s.pdf_api_key, timeout=s.http_timeout)

    def close(self) -> None:
        """Close HTTP clients held by the adapters"""
        for adapter in (self.index_source, self.listing_source, self.document_fetcher, self.pdf_renderer):
            close = getattr(adapter, "close", None)
            if close is not None:
                close()
