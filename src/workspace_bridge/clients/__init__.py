"""Google API clients for Docs, Sheets and Drive.

Each client is constructed once at startup around a shared httpx client and
handed to the tool handlers, so tests can substitute fakes.
"""

from workspace_bridge.clients.base import GoogleApiClient, create_http_client
from workspace_bridge.clients.docs import DocsClient
from workspace_bridge.clients.drive import DriveClient
from workspace_bridge.clients.sheets import SheetsClient

__all__ = [
    "GoogleApiClient",
    "DocsClient",
    "SheetsClient",
    "DriveClient",
    "create_http_client",
]
