"""Workspace Bridge MCP Server.

Expose Google Docs, Sheets and Drive operations as MCP tools over SSE.
"""

from workspace_bridge.__version__ import __version__

__all__ = ["__version__"]
