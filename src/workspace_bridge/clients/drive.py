"""Google Drive API v3 client."""

from typing import Any

from workspace_bridge.clients.base import GoogleApiClient

DRIVE_API_BASE = "https://www.googleapis.com/drive/v3"

DEFAULT_FILE_FIELDS = "files(id,name,mimeType)"


class DriveClient(GoogleApiClient):
    """List and search files in Google Drive."""

    service_name = "Drive"
    base_url = DRIVE_API_BASE

    async def list_files(
        self,
        query: str | None = None,
        page_size: int = 10,
        fields: str = DEFAULT_FILE_FIELDS,
    ) -> list[dict[str, Any]]:
        """List files visible to the service identity.

        Args:
            query: Optional Drive query, e.g. 'name contains "Budget"'.
            page_size: Maximum number of files to return.
            fields: Partial response selector.

        Returns:
            File resources in the order returned by Drive.
        """
        params: dict[str, Any] = {"pageSize": page_size, "fields": fields}
        if query:
            params["q"] = query

        response = await self._make_request("GET", "/files", params=params)
        files: list[dict[str, Any]] = response.get("files", [])
        return files
