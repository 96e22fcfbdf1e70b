"""
Core - Domain logic and ports

This package contains:
- domain.py: Pure domain models and identifier normalization
- errors.py: Resolution and export errors
- ports.py: Port interfaces (abstractions for external dependencies)
- rules.py: Form path and filename pattern tables
- selection.py: Primary document selection heuristics
- resolver.py: Strategy chain
- services.py: Application services (use cases)
- tables.py, word.py: HTML table and DOCX conversion
"""
from .domain import FilingReference, IndexEntry, ListingFile, ResolvedDocument, TableData
from .errors import (
    ResolutionError,
    NetworkFailure,
    ParseFailure,
    NoCandidateFound,
    ListingUnavailable,
    ExportError,
    RendererNotConfigured,
    RenderFailure,
    NoTableFound,
    ConversionFailure,
)
from .ports import IndexSource, ListingSource, DocumentFetcher, PdfRenderer, ResolutionStrategy
from .resolver import (
    PrimaryDocumentResolver,
    DeterministicPathStrategy,
    IndexPageStrategy,
    ListingServiceStrategy,
)
from .services import ResolveDocumentService, PdfExportService, SpreadsheetExportService, DocxExportService

__all__ = [
    # Domain models
    "FilingReference",
    "IndexEntry",
    "ListingFile",
    "ResolvedDocument",
    "TableData",
    # Errors
    "ResolutionError",
    "NetworkFailure",
    "ParseFailure",
    "NoCandidateFound",
    "ListingUnavailable",
    "ExportError",
    "RendererNotConfigured",
    "RenderFailure",
    "NoTableFound",
    "ConversionFailure",
    # Ports
    "IndexSource",
    "ListingSource",
    "DocumentFetcher",
    "PdfRenderer",
    "ResolutionStrategy",
    # Resolver
    "PrimaryDocumentResolver",
    "DeterministicPathStrategy",
    "IndexPageStrategy",
    "ListingServiceStrategy",
    # Services
    "ResolveDocumentService",
    "PdfExportService",
    "SpreadsheetExportService",
    "DocxExportService",
]
