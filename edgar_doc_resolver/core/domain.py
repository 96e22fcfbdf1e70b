"""
Domain Models - Pure business entities

No external dependencies. These represent the core business concepts.
"""
from dataclasses import dataclass
from typing import Optional


def normalize_filer_id(filer_id: str) -> str:
    """Strip leading zeros from a CIK ("0001683168" -> "1683168")"""
    stripped = str(filer_id).strip().lstrip("0")
    return stripped or "0"


def normalize_accession(accession_number: str) -> str:
    """Remove dashes from an accession number"""
    return str(accession_number).strip().replace("-", "")


def normalize_form_type(form_type: str) -> str:
    return str(form_type).strip().upper()


@dataclass(frozen=True)
class FilingReference:
    """A filing addressed by CIK, accession number and form type.

    Always build through from_raw() so the identifiers used in URLs
    are normalized.
    """
    filer_id: str
    accession_number: str  # no dashes
    form_type: str  # upper-cased

    @classmethod
    def from_raw(cls, filer_id: str, accession_number: str, form_type: str) -> "FilingReference":
        return cls(
            filer_id=normalize_filer_id(filer_id),
            accession_number=normalize_accession(accession_number),
            form_type=normalize_form_type(form_type),
        )

    def folder_url(self, archive_root: str) -> str:
        """Canonical filing folder: {archive_root}/{cik}/{accession}/"""
        return f"{archive_root.rstrip('/')}/{self.filer_id}/{self.accession_number}/"


@dataclass
class IndexEntry:
    """A document row parsed from a filing index page"""
    filename: str
    declared_type: str
    description: str = ""
    size_bytes: float = 0.0

    @property
    def is_html(self) -> bool:
        return is_html_filename(self.filename)


@dataclass
class ListingFile:
    """A file descriptor returned by a listing service"""
    filename: str
    url: Optional[str] = None
    type: str = ""


@dataclass
class ResolvedDocument:
    """Result of a resolution: the primary document URL"""
    url: str
    strategy: str


@dataclass
class TableData:
    """Rows of cell text extracted from an HTML table"""
    source_url: str
    rows: list[list[str]]

    @property
    def row_count(self) -> int:
        return len(self.rows)


def is_html_filename(filename: str) -> bool:
    return filename.lower().endswith((".htm", ".html"))
