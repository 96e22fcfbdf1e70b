"""
Primary Document Resolver

Resolution runs an ordered chain of strategies:

    deterministic form path -> index page -> listing service

Each strategy returns a URL, returns None when it does not apply, or
raises ResolutionError. Failures before the last strategy are logged and
the chain moves on; the last strategy's failure is terminal.
"""
import logging
from typing import Mapping, Optional, Sequence

from .domain import FilingReference, ResolvedDocument
from .errors import ListingUnavailable, NoCandidateFound, ResolutionError
from .ports import IndexSource, ListingSource, ResolutionStrategy
from .rules import FilenamePatterns, normalize_form_paths
from .selection import select_index_entry, select_listing_file

logger = logging.getLogger(__name__)


class DeterministicPathStrategy(ResolutionStrategy):
    """Forms with a fixed path inside every filing folder (no network)"""

    name = "deterministic"

    def __init__(self, archive_root: str, form_paths: Mapping[str, str]):
        self.archive_root = archive_root
        self.form_paths = normalize_form_paths(form_paths)

    def resolve(self, ref: FilingReference) -> Optional[str]:
        path = self.form_paths.get(ref.form_type)
        if path is None:
            return None
        return ref.folder_url(self.archive_root) + path


class IndexPageStrategy(ResolutionStrategy):
    """Pick the primary document from the filing's index table"""

    name = "index"

    def __init__(self, archive_root: str, index_source: IndexSource, patterns: FilenamePatterns):
        self.archive_root = archive_root
        self.index_source = index_source
        self.patterns = patterns

    def resolve(self, ref: FilingReference) -> Optional[str]:
        folder = ref.folder_url(self.archive_root)
        entries = self.index_source.fetch_entries(ref, folder)
        entry = select_index_entry(entries, ref.form_type, self.patterns.get(ref.form_type, ()))
        if entry is None:
            raise NoCandidateFound(f"No document selectable from index of {ref.accession_number}")
        return folder + entry.filename


class ListingServiceStrategy(ResolutionStrategy):
    """Fall back to the independently maintained listing service"""

    name = "listing"

    def __init__(self, archive_root: str, listing_source: ListingSource, patterns: FilenamePatterns):
        self.archive_root = archive_root
        self.listing_source = listing_source
        self.patterns = patterns

    def resolve(self, ref: FilingReference) -> Optional[str]:
        files = self.listing_source.list_files(ref)
        chosen = select_listing_file(files, self.patterns.get(ref.form_type, ()))
        if chosen is None:
            raise ListingUnavailable(f"Listing service returned no files for {ref.accession_number}")
        if chosen.url:
            return chosen.url
        return ref.folder_url(self.archive_root) + chosen.filename


class PrimaryDocumentResolver:
    """Resolve a filing reference to its primary document URL"""

    def __init__(self, strategies: Sequence[ResolutionStrategy]):
        if not strategies:
            raise ValueError("At least one resolution strategy is required")
        self.strategies = list(strategies)

    def resolve(self, ref: FilingReference) -> ResolvedDocument:
        last = len(self.strategies) - 1
        for position, strategy in enumerate(self.strategies):
            try:
                url = strategy.resolve(ref)
            except ResolutionError as e:
                if position == last:
                    logger.error(f"resolve: {ref.filer_id}/{ref.accession_number} {ref.form_type} failed: {e}")
                    raise
                logger.warning(
                    f"resolve: {strategy.name} strategy failed for "
                    f"{ref.filer_id}/{ref.accession_number} ({ref.form_type}): {e}"
                )
                continue

            if url:
                logger.info(f"resolve: {ref.filer_id}/{ref.accession_number} {ref.form_type} -> {url} [{strategy.name}]")
                return ResolvedDocument(url=url, strategy=strategy.name)

        raise NoCandidateFound(
            f"No strategy resolved {ref.filer_id}/{ref.accession_number} ({ref.form_type})"
        )
