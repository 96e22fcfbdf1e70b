"""
MCP Tool Handlers

Shared handlers for MCP tools and the CLI that use the hexagonal core.
"""
import asyncio
from typing import Any

from ...container import Container


class MCPHandlers:
    """Handlers for MCP tools using dependency injection"""

    def __init__(self, container: Container):
        self.container = container

    async def resolve_document(self, cik: str, accession: str, form_type: str) -> dict[str, Any]:
        """Resolve the primary document URL of a filing"""
        try:
            document = await asyncio.to_thread(
                self.container.resolve_document.execute,
                cik,
                accession,
                form_type
            )

            return {
                "success": True,
                "url": document.url,
                "strategy": document.strategy,
                "metadata": {
                    "cik": cik,
                    "accession": accession,
                    "form_type": form_type,
                }
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to resolve document: {str(e)}"
            }

    async def extract_table(
        self,
        cik: str,
        accession: str,
        form_type: str,
        max_rows: int = 50
    ) -> dict[str, Any]:
        """Extract the first table of the primary document"""
        try:
            table = await asyncio.to_thread(
                self.container.export_spreadsheet.extract,
                cik,
                accession,
                form_type
            )

            return {
                "success": True,
                "url": table.source_url,
                "rows": table.rows[:max_rows],
                "row_count": table.row_count,
                "truncated": table.row_count > max_rows,
                "metadata": {
                    "cik": cik,
                    "accession": accession,
                    "form_type": form_type,
                }
            }

        except Exception as e:
            return {
                "success": False,
                "error": f"Failed to extract table: {str(e)}"
            }
