"""
MCP Adapter

Handlers shared by the MCP server and the CLI.
"""
from .handlers import MCPHandlers

__all__ = ["MCPHandlers"]
