"""
Unit tests for server_http

Routes exercised through Starlette's TestClient with fake ports.
"""
from unittest.mock import Mock, patch

import httpx
from starlette.testclient import TestClient

from edgar_doc_resolver.adapters import SecIndexAdapter
from edgar_doc_resolver.config import Settings
from edgar_doc_resolver.container import Container
from edgar_doc_resolver.core.domain import IndexEntry, ListingFile
from edgar_doc_resolver.core.errors import ListingUnavailable, NetworkFailure, RenderFailure
from edgar_doc_resolver.core.ports import DocumentFetcher, IndexSource, ListingSource, PdfRenderer
from edgar_doc_resolver.server_http import create_app

FOLDER = "https://www.sec.gov/Archives/edgar/data/1683168/000168316825008885/"
PARAMS = {"cik": "0001683168", "accession": "0001683168-25-008885", "form": "10-K"}


def make_client(pdf_renderer=None, table_html="<table><tr><td>A</td><td>B</td></tr></table>"):
    index = Mock(spec=IndexSource)
    index.fetch_entries.return_value = [IndexEntry("main.htm", "10-K", "", 1000)]
    listing = Mock(spec=ListingSource)
    fetcher = Mock(spec=DocumentFetcher)
    fetcher.fetch_text.return_value = table_html

    container = Container(
        settings=Settings(),
        index_source=index,
        listing_source=listing,
        document_fetcher=fetcher,
        pdf_renderer=pdf_renderer,
    )
    return TestClient(create_app(container)), container


class TestHealth:
    """Test health endpoints."""

    def test_root(self):
        client, _ = make_client()
        response = client.get("/")
        assert response.status_code == 200
        assert response.text == "SEC Backend running"

    def test_ping(self):
        client, _ = make_client()
        assert client.get("/ping").json() == {"status": "ok"}


class TestResolveRoute:
    """Test /resolve."""

    def test_success(self):
        client, _ = make_client()
        response = client.get("/resolve", params=PARAMS)

        assert response.status_code == 200
        assert response.json() == {"url": FOLDER + "main.htm", "strategy": "index"}

    def test_deterministic_form(self):
        client, container = make_client()
        response = client.get("/resolve", params={**PARAMS, "form": "4"})

        assert response.json()["url"] == FOLDER + "xslF345X05/ownership.xml"
        container.index_source.fetch_entries.assert_not_called()

    def test_missing_params(self):
        client, _ = make_client()
        response = client.get("/resolve", params={"cik": "1683168"})

        assert response.status_code == 400
        assert response.text == "Missing required query params"

    def test_resolution_failure(self):
        client, container = make_client()
        container.index_source.fetch_entries.side_effect = NetworkFailure("HTTP 404")
        container.listing_source.list_files.side_effect = ListingUnavailable("listing down")

        response = client.get("/resolve", params=PARAMS)

        assert response.status_code == 502
        assert "listing down" in response.json()["error"]


class TestPdfRoute:
    """Test /filing-pdf."""

    def test_not_configured(self):
        client, _ = make_client()
        response = client.get("/filing-pdf", params=PARAMS)

        assert response.status_code == 500
        assert response.text == "PDF API not configured"

    def test_success(self):
        renderer = Mock(spec=PdfRenderer)
        renderer.render.return_value = b"%PDF-1.4 test"
        client, _ = make_client(pdf_renderer=renderer)

        response = client.get("/filing-pdf", params=PARAMS)

        assert response.status_code == 200
        assert response.content == b"%PDF-1.4 test"
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="filing-0001683168-10-K.pdf"' in response.headers["content-disposition"]
        renderer.render.assert_called_once_with(FOLDER + "main.htm")

    def test_missing_params(self):
        client, _ = make_client()
        assert client.get("/filing-pdf").status_code == 400

    def test_render_failure(self):
        renderer = Mock(spec=PdfRenderer)
        renderer.render.side_effect = RenderFailure("Error from PDF API (401)")
        client, _ = make_client(pdf_renderer=renderer)

        response = client.get("/filing-pdf", params=PARAMS)

        assert response.status_code == 500
        assert response.text == "Error from PDF API"

    def test_resolution_failure(self):
        renderer = Mock(spec=PdfRenderer)
        client, container = make_client(pdf_renderer=renderer)
        container.index_source.fetch_entries.side_effect = NetworkFailure("HTTP 404")
        container.listing_source.list_files.side_effect = ListingUnavailable("listing down")

        response = client.get("/filing-pdf", params=PARAMS)

        assert response.status_code == 502
        assert "listing down" in response.text
        renderer.render.assert_not_called()


class TestXlsxRoute:
    """Test /filing-xlsx."""

    def test_success(self):
        client, _ = make_client()
        response = client.get("/filing-xlsx", params=PARAMS)

        assert response.status_code == 200
        assert response.content[:2] == b"PK"
        assert "spreadsheetml" in response.headers["content-type"]
        assert 'filename="filing-0001683168-10-K.xlsx"' in response.headers["content-disposition"]

    def test_no_table(self):
        client, _ = make_client(table_html="<p>no table here</p>")
        response = client.get("/filing-xlsx", params=PARAMS)

        assert response.status_code == 400
        assert response.text == "No table found in filing"

    def test_resolution_failure(self):
        client, container = make_client()
        container.index_source.fetch_entries.side_effect = NetworkFailure("HTTP 404")
        container.listing_source.list_files.side_effect = ListingUnavailable("listing down")

        response = client.get("/filing-xlsx", params=PARAMS)

        assert response.status_code == 502
        assert "listing down" in response.text

    def test_document_fetch_failure(self):
        client, container = make_client()
        container.document_fetcher.fetch_text.side_effect = NetworkFailure("Fetch failed 503")

        response = client.get("/filing-xlsx", params=PARAMS)

        assert response.status_code == 502
        assert "Fetch failed 503" in response.text


class TestDocxRoute:
    """Test /filing-docx."""

    def test_success(self):
        client, container = make_client(table_html="<html><body><h1>Annual Report</h1><p>Fiscal 2024</p></body></html>")
        response = client.get("/filing-docx", params=PARAMS)

        assert response.status_code == 200
        assert response.content[:2] == b"PK"
        assert "wordprocessingml" in response.headers["content-type"]
        assert 'filename="filing-0001683168-10-K.docx"' in response.headers["content-disposition"]
        container.document_fetcher.fetch_text.assert_called_once_with(FOLDER + "main.htm")

    def test_missing_params(self):
        client, _ = make_client()
        response = client.get("/filing-docx", params={"cik": "1683168", "form": "10-K"})

        assert response.status_code == 400
        assert response.text == "Missing required query params"

    def test_conversion_failure(self):
        client, _ = make_client()
        with patch("edgar_doc_resolver.core.services.html_to_docx", side_effect=ValueError("bad markup")):
            response = client.get("/filing-docx", params=PARAMS)

        assert response.status_code == 500
        assert response.text == "Error generating DOCX"

    def test_resolution_failure(self):
        client, container = make_client()
        container.index_source.fetch_entries.side_effect = NetworkFailure("HTTP 404")
        container.listing_source.list_files.side_effect = ListingUnavailable("listing down")

        response = client.get("/filing-docx", params=PARAMS)

        assert response.status_code == 502


class TestIndexFallbackEndToEnd:
    """Real index adapter over a mock transport, both index pages missing."""

    def test_listing_strategy_used_when_index_pages_404(self):
        requested = []

        def handler(request):
            requested.append(request.url.path)
            return httpx.Response(404)

        index = SecIndexAdapter("test-agent test@example.com", client=httpx.Client(transport=httpx.MockTransport(handler)))
        listing = Mock(spec=ListingSource)
        listing.list_files.return_value = [
            ListingFile("000168316825008885-index.htm", type="html"),
            ListingFile("primary_doc.htm", type="html"),
        ]
        container = Container(
            settings=Settings(),
            index_source=index,
            listing_source=listing,
            document_fetcher=Mock(spec=DocumentFetcher),
        )
        client = TestClient(create_app(container))

        response = client.get("/resolve", params={**PARAMS, "form": "N-PX"})

        assert response.status_code == 200
        assert response.json() == {"url": FOLDER + "primary_doc.htm", "strategy": "listing"}
        assert [path.rsplit("/", 1)[-1] for path in requested] == [
            "000168316825008885-index-headers.html",
            "000168316825008885-index.html",
        ]


class TestLifespan:
    """Test shutdown hook."""

    def test_shutdown_closes_container(self):
        _, container = make_client()
        container.close = Mock()

        with TestClient(create_app(container)) as client:
            assert client.get("/ping").status_code == 200
            container.close.assert_not_called()

        container.close.assert_called_once_with()
