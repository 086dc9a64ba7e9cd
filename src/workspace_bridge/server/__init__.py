"""MCP server for the workspace bridge.

Provides 5 tools across Docs, Sheets and Drive:

Docs Tools (2):
- Read a document as plain text
- Create a document with body text

Sheets Tools (1):
- Read a cell range

Drive Tools (2):
- Search files with a query
- List files

Transport: SSE (remote agents) or stdio
Authentication: Google application-default credentials
"""

from workspace_bridge.server.bridge_server import (
    WorkspaceBridgeServer,
    configure_logging,
    main,
)


__all__ = ["configure_logging", "WorkspaceBridgeServer", "main"]
