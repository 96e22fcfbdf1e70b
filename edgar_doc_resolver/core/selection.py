"""
Primary document selection

Pure functions that pick one document out of an index table or a
listing-service response. Rules are applied in strict priority order;
the first rule producing a result wins.
"""
import re
from typing import Optional, Sequence

from .domain import IndexEntry, ListingFile, is_html_filename

# EDGAR's generated index pages: {accession}-index.htm, {accession}-index-headers.html
_INDEX_LIKE = re.compile(r"-index(-headers)?\.html?$", re.IGNORECASE)


def match_filename_pattern(filenames: Sequence[str], patterns: Sequence[re.Pattern]) -> Optional[int]:
    """Return the position of the first filename matching any pattern.

    Patterns are tried in declared order; for each pattern the filenames
    are scanned in table order.
    """
    for pattern in patterns:
        for position, filename in enumerate(filenames):
            if pattern.search(filename):
                return position
    return None


def _largest(entries: list[IndexEntry]) -> IndexEntry:
    # max() keeps the first of equal sizes
    return max(entries, key=lambda e: e.size_bytes)


def select_index_entry(
    entries: list[IndexEntry],
    form_type: str,
    patterns: Sequence[re.Pattern] = (),
) -> Optional[IndexEntry]:
    """Choose the primary document row from a filing index.

    1. first row matching a curated filename pattern for the form
    2. rows whose declared type equals the form (narrowed to rows whose
       description mentions the form, when any do): largest HTML row,
       else the first type-matching row
    3. largest HTML row in the whole table
    4. first row
    """
    if not entries:
        return None

    form = form_type.strip().upper()

    if patterns:
        hit = match_filename_pattern([e.filename for e in entries], patterns)
        if hit is not None:
            return entries[hit]

    type_matches = [e for e in entries if e.declared_type.strip().upper() == form]
    if type_matches:
        described = [e for e in type_matches if form in e.description.upper()]
        candidates = described or type_matches
        html = [e for e in candidates if e.is_html]
        if html:
            return _largest(html)
        return type_matches[0]

    html = [e for e in entries if e.is_html]
    if html:
        return _largest(html)

    return entries[0]


def _is_listing_html(item: ListingFile) -> bool:
    return item.type.strip().lower() in ("html", "htm") or is_html_filename(item.filename)


def _is_listing_pdf(item: ListingFile) -> bool:
    return item.type.strip().lower() == "pdf" or item.filename.lower().endswith(".pdf")


def select_listing_file(
    files: list[ListingFile],
    patterns: Sequence[re.Pattern] = (),
) -> Optional[ListingFile]:
    """Choose the primary document from a listing-service response.

    Filename patterns first, then HTML that is not an index/header page,
    then a native PDF, then whatever came first.
    """
    if not files:
        return None

    if patterns:
        hit = match_filename_pattern([f.filename for f in files], patterns)
        if hit is not None:
            return files[hit]

    for item in files:
        if _is_listing_html(item) and not _INDEX_LIKE.search(item.filename):
            return item

    for item in files:
        if _is_listing_pdf(item):
            return item

    return files[0]
