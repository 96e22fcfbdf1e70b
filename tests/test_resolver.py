"""
Unit tests for core.resolver

The deterministic -> index -> listing strategy chain, with port fakes.
"""
import logging
from unittest.mock import Mock

import pytest

from edgar_doc_resolver.core.domain import FilingReference, IndexEntry, ListingFile
from edgar_doc_resolver.core.errors import (
    ListingUnavailable,
    NetworkFailure,
    NoCandidateFound,
    ParseFailure,
)
from edgar_doc_resolver.core.ports import IndexSource, ListingSource
from edgar_doc_resolver.core.resolver import (
    DeterministicPathStrategy,
    IndexPageStrategy,
    ListingServiceStrategy,
    PrimaryDocumentResolver,
)
from edgar_doc_resolver.core.rules import DEFAULT_FORM_PATHS, compile_patterns

ARCHIVE_ROOT = "https://www.sec.gov/Archives/edgar/data"
FOLDER = ARCHIVE_ROOT + "/1683168/000168316825008885/"


def ref(form_type: str) -> FilingReference:
    return FilingReference.from_raw("0001683168", "0001683168-25-008885", form_type)


def build_resolver(index_source, listing_source, patterns=None) -> PrimaryDocumentResolver:
    patterns = compile_patterns(patterns or {})
    return PrimaryDocumentResolver([
        DeterministicPathStrategy(ARCHIVE_ROOT, DEFAULT_FORM_PATHS),
        IndexPageStrategy(ARCHIVE_ROOT, index_source, patterns),
        ListingServiceStrategy(ARCHIVE_ROOT, listing_source, patterns),
    ])


class TestDeterministicStrategy:
    """Test fixed-path forms."""

    def setup_method(self):
        self.index = Mock(spec=IndexSource)
        self.listing = Mock(spec=ListingSource)
        self.resolver = build_resolver(self.index, self.listing)

    def test_form_4_no_network(self):
        """Mapped forms resolve to folder + path without touching any port."""
        result = self.resolver.resolve(ref("4"))

        assert result.url == FOLDER + "xslF345X05/ownership.xml"
        assert result.strategy == "deterministic"
        self.index.fetch_entries.assert_not_called()
        self.listing.list_files.assert_not_called()

    def test_every_mapped_form(self):
        for form_type, path in DEFAULT_FORM_PATHS.items():
            assert self.resolver.resolve(ref(form_type)).url == FOLDER + path
        self.index.fetch_entries.assert_not_called()

    def test_lower_case_form(self):
        assert self.resolver.resolve(ref("d")).url == FOLDER + "xslFormDX01/primary_doc.xml"

    def test_unmapped_form_not_applicable(self):
        strategy = DeterministicPathStrategy(ARCHIVE_ROOT, DEFAULT_FORM_PATHS)
        assert strategy.resolve(ref("10-K")) is None

    def test_injected_mapping(self):
        strategy = DeterministicPathStrategy(ARCHIVE_ROOT, {"n-px": "/primary_doc.xml"})
        assert strategy.resolve(ref("N-PX")) == FOLDER + "primary_doc.xml"


class TestIndexStrategy:
    """Test resolution through the index page."""

    def setup_method(self):
        self.index = Mock(spec=IndexSource)
        self.listing = Mock(spec=ListingSource)

    def test_largest_html_of_form_type(self):
        self.index.fetch_entries.return_value = [
            IndexEntry("small.htm", "10-K", "", 500),
            IndexEntry("large.htm", "10-K", "", 50000),
        ]
        result = build_resolver(self.index, self.listing).resolve(ref("10-K"))

        assert result.url == FOLDER + "large.htm"
        assert result.strategy == "index"
        self.index.fetch_entries.assert_called_once_with(ref("10-K"), FOLDER)
        self.listing.list_files.assert_not_called()

    def test_uses_patterns_for_form(self):
        self.index.fetch_entries.return_value = [
            IndexEntry("big.htm", "10-K", "", 90000),
            IndexEntry("acme-10k.htm", "10-K", "", 100),
        ]
        resolver = build_resolver(self.index, self.listing, {"10-K": [r"10-?k"]})
        assert resolver.resolve(ref("10-K")).url == FOLDER + "acme-10k.htm"

    def test_idempotent(self):
        self.index.fetch_entries.return_value = [
            IndexEntry("a.htm", "8-K", "", 10),
            IndexEntry("b.htm", "8-K", "", 20),
        ]
        resolver = build_resolver(self.index, self.listing)
        assert resolver.resolve(ref("8-K")) == resolver.resolve(ref("8-K"))


class TestListingFallback:
    """Test the fallback to the listing service."""

    def setup_method(self):
        self.index = Mock(spec=IndexSource)
        self.listing = Mock(spec=ListingSource)

    def test_index_network_failure_falls_back(self, caplog):
        """Both index pages 404 -> listing service, failure logged as a warning."""
        self.index.fetch_entries.side_effect = NetworkFailure("HTTP 404")
        self.listing.list_files.return_value = [
            ListingFile("main.htm", url="https://files.example.com/main.htm", type="html"),
        ]

        with caplog.at_level(logging.WARNING, logger="edgar_doc_resolver.core.resolver"):
            result = build_resolver(self.index, self.listing).resolve(ref("10-K"))

        assert result.url == "https://files.example.com/main.htm"
        assert result.strategy == "listing"
        assert any("index strategy failed" in r.message for r in caplog.records)

    def test_parse_failure_falls_back(self):
        self.index.fetch_entries.side_effect = ParseFailure("No document table")
        self.listing.list_files.return_value = [ListingFile("scan.pdf", type="pdf")]

        result = build_resolver(self.index, self.listing).resolve(ref("10-K"))

        # Descriptor without url is joined onto the filing folder
        assert result.url == FOLDER + "scan.pdf"

    def test_listing_failure_is_terminal(self):
        """Both strategies failing raises one error and retries nothing."""
        self.index.fetch_entries.side_effect = NetworkFailure("HTTP 404")
        self.listing.list_files.side_effect = ListingUnavailable("Listing service returned HTTP 503")

        with pytest.raises(ListingUnavailable) as exc:
            build_resolver(self.index, self.listing).resolve(ref("10-K"))

        assert "503" in str(exc.value)
        assert self.index.fetch_entries.call_count == 1
        assert self.listing.list_files.call_count == 1

    def test_empty_listing_is_terminal(self):
        self.index.fetch_entries.side_effect = NetworkFailure("HTTP 404")
        self.listing.list_files.return_value = []

        with pytest.raises(ListingUnavailable):
            build_resolver(self.index, self.listing).resolve(ref("10-K"))


class TestPrimaryDocumentResolver:
    """Test chain mechanics."""

    def test_requires_strategies(self):
        with pytest.raises(ValueError):
            PrimaryDocumentResolver([])

    def test_no_strategy_applies(self):
        resolver = PrimaryDocumentResolver([DeterministicPathStrategy(ARCHIVE_ROOT, {})])
        with pytest.raises(NoCandidateFound):
            resolver.resolve(ref("10-K"))

    def test_appended_strategy_runs_last(self):
        extra = Mock()
        extra.name = "extra"
        extra.resolve.return_value = "https://example.com/doc.htm"
        resolver = PrimaryDocumentResolver([DeterministicPathStrategy(ARCHIVE_ROOT, {}), extra])

        result = resolver.resolve(ref("10-K"))

        assert result.url == "https://example.com/doc.htm"
        assert result.strategy == "extra"
