"""Google Docs API v1 client."""

from typing import Any
from urllib.parse import quote

from workspace_bridge.clients.base import GoogleApiClient

DOCS_API_BASE = "https://docs.googleapis.com/v1"


class DocsClient(GoogleApiClient):
    """Fetch, create and update Google Docs."""

    service_name = "Docs"
    base_url = DOCS_API_BASE

    async def get_document(self, document_id: str) -> dict[str, Any]:
        """Fetch a document including its body structure."""
        return await self._make_request("GET", f"/documents/{quote(document_id, safe='')}")

    async def create_document(self, title: str) -> dict[str, Any]:
        """Create an empty document and return its metadata."""
        return await self._make_request("POST", "/documents", json_data={"title": title})

    async def batch_update(
        self, document_id: str, requests: list[dict[str, Any]]
    ) -> dict[str, Any]:
        """Apply a list of update requests to a document in one call."""
        return await self._make_request(
            "POST",
            f"/documents/{quote(document_id, safe='')}:batchUpdate",
            json_data={"requests": requests},
        )

    async def insert_text(self, document_id: str, text: str, index: int = 1) -> dict[str, Any]:
        """Insert text at a body index (1 is the start of an empty document)."""
        return await self.batch_update(
            document_id,
            [{"insertText": {"location": {"index": index}, "text": text}}],
        )
