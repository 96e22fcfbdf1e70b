"""
Application Services - Use cases that orchestrate domain logic

These are the entry points to the core. They coordinate between
domain models and ports, but contain no infrastructure concerns.
"""
import logging
from typing import Optional

from .domain import FilingReference, ResolvedDocument, TableData
from .errors import ConversionFailure, NoTableFound, RendererNotConfigured
from .ports import DocumentFetcher, PdfRenderer
from .resolver import PrimaryDocumentResolver
from .tables import extract_first_table, rows_to_xlsx
from .word import html_to_docx

logger = logging.getLogger(__name__)


class ResolveDocumentService:
    """Use case: Resolve the primary document URL of a filing"""

    def __init__(self, resolver: PrimaryDocumentResolver):
        self.resolver = resolver

    def execute(self, cik: str, accession: str, form_type: str) -> ResolvedDocument:
        ref = FilingReference.from_raw(cik, accession, form_type)
        return self.resolver.resolve(ref)


class PdfExportService:
    """Use case: Render a filing's primary document to PDF"""

    def __init__(self, resolve_service: ResolveDocumentService, renderer: Optional[PdfRenderer]):
        self.resolve_service = resolve_service
        self.renderer = renderer

    def execute(self, cik: str, accession: str, form_type: str) -> bytes:
        if self.renderer is None:
            raise RendererNotConfigured("PDF API not configured")

        document = self.resolve_service.execute(cik, accession, form_type)
        pdf = self.renderer.render(document.url)
        logger.info(f"pdf: rendered {document.url} ({len(pdf)} bytes)")
        return pdf


class SpreadsheetExportService:
    """Use case: Extract the first table of a filing's primary document"""

    def __init__(self, resolve_service: ResolveDocumentService, fetcher: DocumentFetcher):
        self.resolve_service = resolve_service
        self.fetcher = fetcher

    def extract(self, cik: str, accession: str, form_type: str) -> TableData:
        """
        Resolve the document, download it and pull out its first table.

        Raises NoTableFound when the document has no table.
        """
        document = self.resolve_service.execute(cik, accession, form_type)
        html = self.fetcher.fetch_text(document.url)
        rows = extract_first_table(html)
        if rows is None:
            raise NoTableFound("No table found in filing")
        return TableData(source_url=document.url, rows=rows)

    def execute(self, cik: str, accession: str, form_type: str) -> bytes:
        """Return the first table as XLSX bytes"""
        table = self.extract(cik, accession, form_type)
        return rows_to_xlsx(table.rows)


class DocxExportService:
    """Use case: Convert a filing's primary document to Word"""

    def __init__(self, resolve_service: ResolveDocumentService, fetcher: DocumentFetcher):
        self.resolve_service = resolve_service
        self.fetcher = fetcher

    def execute(self, cik: str, accession: str, form_type: str) -> bytes:
        document = self.resolve_service.execute(cik, accession, form_type)
        html = self.fetcher.fetch_text(document.url)
        try:
            docx = html_to_docx(html)
        except Exception as e:
            raise ConversionFailure(f"DOCX conversion failed for {document.url}: {str(e)}") from e
        logger.info(f"docx: converted {document.url} ({len(docx)} bytes)")
        return docx
