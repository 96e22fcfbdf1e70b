"""
edgar-doc-resolver MCP Server

MCP delivery layer - wraps the handlers as MCP tools.
Separation of concerns: this file only handles MCP protocol.
"""
import argparse
import logging
import os

from mcp.server.fastmcp import FastMCP

from .adapters.mcp import MCPHandlers
from .config import load_settings
from .container import Container

# Suppress INFO logs
logging.getLogger("edgar").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

# Get port from env or default
HTTP_PORT = int(os.getenv("EDGAR_DOC_MCP_PORT", "6661"))
HTTP_HOST = os.getenv("EDGAR_DOC_MCP_HOST", "0.0.0.0")

# Initialize MCP server with HTTP config
mcp = FastMCP("edgar-doc-resolver", host=HTTP_HOST, port=HTTP_PORT)

_handlers = None


def get_handlers() -> MCPHandlers:
    """Build handlers on first use so importing this module stays cheap"""
    global _handlers
    if _handlers is None:
        _handlers = MCPHandlers(Container(load_settings()))
    return _handlers


@mcp.tool()
async def resolve_filing_document(cik: str, accession: str, form_type: str) -> dict:
    """
    Find the primary document URL inside an SEC EDGAR filing.

    Args:
        cik: Filer CIK, zero padding allowed (e.g., "0001683168")
        accession: Accession number, dashes allowed (e.g., "0001683168-25-008885")
        form_type: Form type ("4", "10-K", "8-K", "S-1", etc.)

    Returns:
        Dictionary with the document URL and the strategy that found it.

    Example:
        resolve_filing_document("0001683168", "0001683168-25-008885", "4")
        → {url: ".../1683168/000168316825008885/xslF345X05/ownership.xml", strategy: "deterministic"}
    """
    return await get_handlers().resolve_document(cik, accession, form_type)


@mcp.tool()
async def extract_filing_table(cik: str, accession: str, form_type: str, max_rows: int = 50) -> dict:
    """
    Extract the first HTML table from a filing's primary document.

    Args:
        cik: Filer CIK
        accession: Accession number
        form_type: Form type
        max_rows: Maximum rows to return (default: 50)

    Returns:
        Dictionary with rows of cell text, total row count and source URL.
    """
    return await get_handlers().extract_table(cik, accession, form_type, max_rows=max_rows)


def main():
    """Main entry point for the MCP server."""
    parser = argparse.ArgumentParser(
        description="edgar-doc-resolver: primary documents of SEC filings over MCP."
    )
    parser.add_argument(
        "--transport",
        default="stdio",
        choices=["stdio", "streamable-http"],
        help="Transport method (default: stdio)"
    )
    args = parser.parse_args()

    if args.transport == "streamable-http":
        print(f"Starting edgar-doc-resolver MCP on http://{HTTP_HOST}:{HTTP_PORT}")
        mcp.run(transport="streamable-http")
    else:
        mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
