#!/usr/bin/env python3
"""
CLI for edgar-doc-resolver - exercise the resolver without a server

Usage:
  edgar-doc-cli resolve 0001683168 0001683168-25-008885 4     # Resolve primary document URL
  edgar-doc-cli table 320193 0000320193-24-000123 10-K        # Print first table of the document
  edgar-doc-cli table 320193 0000320193-24-000123 10-K --output out.xlsx
  edgar-doc-cli pdf 320193 0000320193-24-000123 10-K --output out.pdf
  edgar-doc-cli docx 320193 0000320193-24-000123 10-K --output out.docx

Configuration comes from the same environment variables as the server.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from .adapters.mcp import MCPHandlers
from .config import load_settings
from .container import Container
from .formatters import format_resolve_result, format_table_result


def build_container() -> Container:
    return Container(load_settings())


async def resolve_command(cik: str, accession: str, form_type: str) -> int:
    """Resolve and print the primary document URL"""
    handlers = MCPHandlers(build_container())
    result = await handlers.resolve_document(cik, accession, form_type)
    print(format_resolve_result(result))
    return 0 if result["success"] else 1


async def table_command(cik: str, accession: str, form_type: str, max_rows: int, output: str | None) -> int:
    """Print the first table, or write it as XLSX"""
    container = build_container()

    if output:
        try:
            workbook = await asyncio.to_thread(container.export_spreadsheet.execute, cik, accession, form_type)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        Path(output).write_bytes(workbook)
        print(f"Wrote {len(workbook):,} bytes to {output}")
        return 0

    handlers = MCPHandlers(container)
    result = await handlers.extract_table(cik, accession, form_type, max_rows=max_rows)
    print(format_table_result(result))
    return 0 if result["success"] else 1


async def export_command(kind: str, cik: str, accession: str, form_type: str, output: str) -> int:
    """Write the primary document as PDF or DOCX"""
    container = build_container()
    service = container.export_pdf if kind == "pdf" else container.export_docx
    try:
        content = await asyncio.to_thread(service.execute, cik, accession, form_type)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    Path(output).write_bytes(content)
    print(f"Wrote {len(content):,} bytes to {output}")
    return 0


def _add_filing_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("cik", help="Filer CIK (e.g., 0001683168)")
    parser.add_argument("accession", help="Accession number (e.g., 0001683168-25-008885)")
    parser.add_argument("form_type", help="Form type (e.g., 4, 10-K)")


def main():
    parser = argparse.ArgumentParser(
        description="edgar-doc-resolver CLI - resolve and export SEC filing documents"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Resolve primary document URL")
    _add_filing_args(resolve_parser)

    # table command
    table_parser = subparsers.add_parser("table", help="Extract first table of the document")
    _add_filing_args(table_parser)
    table_parser.add_argument("--max", type=int, default=50, help="Max rows to print (default: 50)")
    table_parser.add_argument("--output", help="Write XLSX to this path instead of printing")

    # pdf command
    pdf_parser = subparsers.add_parser("pdf", help="Render document to PDF")
    _add_filing_args(pdf_parser)
    pdf_parser.add_argument("--output", required=True, help="PDF output path")

    # docx command
    docx_parser = subparsers.add_parser("docx", help="Convert document to DOCX")
    _add_filing_args(docx_parser)
    docx_parser.add_argument("--output", required=True, help="DOCX output path")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    # Run command
    if args.command == "resolve":
        return asyncio.run(resolve_command(args.cik, args.accession, args.form_type))
    elif args.command == "table":
        return asyncio.run(table_command(
            cik=args.cik,
            accession=args.accession,
            form_type=args.form_type,
            max_rows=args.max,
            output=args.output
        ))
    elif args.command in ("pdf", "docx"):
        return asyncio.run(export_command(args.command, args.cik, args.accession, args.form_type, args.output))

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
