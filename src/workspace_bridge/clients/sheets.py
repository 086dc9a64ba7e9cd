"""Google Sheets API v4 client."""

from typing import Any
from urllib.parse import quote

from workspace_bridge.clients.base import GoogleApiClient

SHEETS_API_BASE = "https://sheets.googleapis.com/v4"


class SheetsClient(GoogleApiClient):
    """Read cell ranges from Google Spreadsheets."""

    service_name = "Sheets"
    base_url = SHEETS_API_BASE

    async def get_values(self, spreadsheet_id: str, range_a1: str) -> dict[str, Any]:
        """Fetch the values of an A1 range.

        Args:
            spreadsheet_id: Spreadsheet ID (from the URL).
            range_a1: Range in A1 notation, e.g. 'Sheet1!A1:B10'.

        Returns:
            ValueRange response; ``values`` is absent when the range is empty.
        """
        path = f"/spreadsheets/{quote(spreadsheet_id, safe='')}/values/{quote(range_a1, safe='!:')}"
        return await self._make_request("GET", path)
