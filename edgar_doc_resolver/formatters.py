"""
Text formatters for handler results

Used by both CLI and MCP adapters for consistent presentation.
"""

from typing import Any

MAX_CELL_WIDTH = 24


def format_resolve_result(result: dict[str, Any]) -> str:
    """Format resolve_document result as text.

    Example output:
        1683168 4 | 0001683168-25-008885 | RESOLVED [deterministic]

        URL: https://www.sec.gov/Archives/edgar/data/1683168/000168316825008885/xslF345X05/ownership.xml
    """
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    meta = result["metadata"]
    lines = [
        f"{meta['cik']} {meta['form_type'].upper()} | {meta['accession']} | RESOLVED [{result['strategy']}]",
        "",
        f"URL: {result['url']}",
    ]
    return "\n".join(lines)


def _cell(text: str) -> str:
    if len(text) > MAX_CELL_WIDTH:
        return text[:MAX_CELL_WIDTH - 1] + "…"
    return text


def format_table_result(result: dict[str, Any]) -> str:
    """Format extract_table result as pipe-separated rows"""
    if not result.get("success"):
        return f"ERROR: {result.get('error', 'Unknown error')}"

    meta = result["metadata"]
    lines = [
        f"{meta['cik']} {meta['form_type'].upper()} | {meta['accession']} | TABLE ({result['row_count']} rows)",
        "",
        f"SOURCE: {result['url']}",
        "─" * 70,
    ]

    for row in result["rows"]:
        lines.append(" | ".join(_cell(c) for c in row))

    if result.get("truncated"):
        lines.append(f"... {result['row_count'] - len(result['rows'])} more rows")

    return "\n".join(lines)
