#!/usr/bin/env python3
"""
HTTP Server - Hexagonal Architecture

Resolves a filing's primary document and serves it as PDF, XLSX or DOCX.

Run with: uvicorn edgar_doc_resolver.server_http:app --host 127.0.0.1 --port 3000
(or: edgar-doc-server)

Routes:
- GET /                 health text
- GET /ping             health JSON
- GET /resolve          ?cik=&accession=&form= -> {"url", "strategy"}
- GET /filing-pdf       ?cik=&accession=&form= -> PDF attachment
- GET /filing-xlsx      ?cik=&accession=&form= -> XLSX of the first table
- GET /filing-docx      ?cik=&accession=&form= -> DOCX conversion

Configuration: see edgar_doc_resolver.config
"""

import asyncio
import logging
import signal
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from .config import load_settings
from .container import Container
from .core import ExportError, NoTableFound, RenderFailure, RendererNotConfigured, ResolutionError

# Configure logging with millisecond precision
logging.basicConfig(
    level=logging.INFO,
    format="[%(asctime)s] [%(levelname)s] %(message)s",
    datefmt="%Y/%m/%d %H:%M:%S"
)


class MillisecondFormatter(logging.Formatter):
    """Custom formatter with milliseconds as :XXXX format"""
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Override formatTime to include milliseconds with : separator"""
        ct = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            s = ct.strftime("%Y/%m/%d %H:%M:%S")
            ms = int((record.created % 1) * 10000)
            return f"{s}:{ms:04d}"
        return super().formatTime(record, datefmt)


# Apply custom formatter to root logger
for handler in logging.root.handlers:
    handler.setFormatter(MillisecondFormatter(
        "[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%Y/%m/%d %H:%M:%S"
    ))

logger = logging.getLogger(__name__)

REQUIRED_PARAMS = ("cik", "accession", "form")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _filing_params(request: Request) -> Optional[tuple[str, str, str]]:
    """Return (cik, accession, form) or None if any is missing"""
    values = tuple(request.query_params.get(name, "").strip() for name in REQUIRED_PARAMS)
    if not all(values):
        return None
    return values


def _missing_params() -> Response:
    return PlainTextResponse("Missing required query params", status_code=400)


def _attachment(content: bytes, media_type: str, filename: str) -> Response:
    return Response(
        content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


def create_app(container: Optional[Container] = None) -> Starlette:
    """Build the Starlette app around a container (built from env if omitted)"""
    container = container or Container(load_settings())

    async def handle_root(request: Request) -> Response:
        return PlainTextResponse("SEC Backend running")

    async def handle_ping(request: Request) -> Response:
        """Health check endpoint"""
        return JSONResponse({"status": "ok"})

    async def handle_resolve(request: Request) -> Response:
        params = _filing_params(request)
        if params is None:
            return _missing_params()

        try:
            document = await asyncio.to_thread(container.resolve_document.execute, *params)
        except ResolutionError as e:
            logger.error(f"resolve: {params} FAILED: {e}")
            return JSONResponse({"error": f"Could not resolve primary document: {e}"}, status_code=502)

        return JSONResponse({"url": document.url, "strategy": document.strategy})

    async def handle_pdf(request: Request) -> Response:
        params = _filing_params(request)
        if params is None:
            return _missing_params()
        cik, _, form = params

        try:
            pdf = await asyncio.to_thread(container.export_pdf.execute, *params)
        except RendererNotConfigured:
            return PlainTextResponse("PDF API not configured", status_code=500)
        except RenderFailure as e:
            logger.error(f"filing-pdf: {params} render FAILED: {e}")
            return PlainTextResponse("Error from PDF API", status_code=500)
        except ResolutionError as e:
            logger.error(f"filing-pdf: {params} resolution FAILED: {e}")
            return PlainTextResponse(f"Could not resolve primary document: {e}", status_code=502)
        except ExportError as e:
            logger.error(f"filing-pdf: {params} FAILED: {e}")
            return PlainTextResponse("Error generating PDF", status_code=500)

        return _attachment(pdf, "application/pdf", f"filing-{cik}-{form}.pdf")

    async def handle_xlsx(request: Request) -> Response:
        params = _filing_params(request)
        if params is None:
            return _missing_params()
        cik, _, form = params

        try:
            workbook = await asyncio.to_thread(container.export_spreadsheet.execute, *params)
        except NoTableFound:
            return PlainTextResponse("No table found in filing", status_code=400)
        except ResolutionError as e:
            logger.error(f"filing-xlsx: {params} FAILED: {e}")
            return PlainTextResponse(f"Error generating XLSX: {e}", status_code=502)

        return _attachment(workbook, XLSX_MEDIA_TYPE, f"filing-{cik}-{form}.xlsx")

    async def handle_docx(request: Request) -> Response:
        params = _filing_params(request)
        if params is None:
            return _missing_params()
        cik, _, form = params

        try:
            docx = await asyncio.to_thread(container.export_docx.execute, *params)
        except ResolutionError as e:
            logger.error(f"filing-docx: {params} resolution FAILED: {e}")
            return PlainTextResponse(f"Could not resolve primary document: {e}", status_code=502)
        except ExportError as e:
            logger.error(f"filing-docx: {params} FAILED: {e}")
            return PlainTextResponse("Error generating DOCX", status_code=500)

        return _attachment(docx, DOCX_MEDIA_TYPE, f"filing-{cik}-{form}.docx")

    @asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        logger.info("Shutting down, closing HTTP clients")
        container.close()

    routes = [
        Route("/", handle_root),
        Route("/ping", handle_ping),
        Route("/resolve", handle_resolve),
        Route("/filing-pdf", handle_pdf),
        Route("/filing-xlsx", handle_xlsx),
        Route("/filing-docx", handle_docx),
    ]

    return Starlette(routes=routes, lifespan=lifespan)


app = create_app()


# Graceful shutdown on SIGTERM
def handle_sigterm(signum, frame):
    logger.info("Received SIGTERM, shutting down gracefully...")
    import sys
    sys.exit(0)


def main():
    """Run the HTTP server with uvicorn"""
    import uvicorn
    signal.signal(signal.SIGTERM, handle_sigterm)
    settings = load_settings()
    logger.info(f"Starting HTTP server on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
