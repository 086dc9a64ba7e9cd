"""Unit tests for the Google API clients.

All Google API calls are served by an httpx.MockTransport stub; retry waits
go to the fake clock.
"""

import json

import httpx
import pytest

from workspace_bridge.clients import DocsClient, DriveClient, SheetsClient
from workspace_bridge.errors import UpstreamError


@pytest.mark.unit
class TestGoogleApiClient:
    """Tests for shared request handling."""

    @pytest.mark.asyncio
    async def test_should_send_bearer_token(self, api_stub, make_client) -> None:
        """Verify requests carry the access token."""
        api_stub.add("GET", "/documents/doc1", httpx.Response(200, json={"documentId": "doc1"}))
        docs = make_client(DocsClient)

        await docs.get_document("doc1")

        request = api_stub.requests[0]
        assert request.headers["Authorization"] == "Bearer test_access_token_abc123"
        assert str(request.url) == "https://docs.googleapis.com/v1/documents/doc1"

    @pytest.mark.asyncio
    async def test_should_raise_upstream_error_with_google_message(
        self, api_stub, make_client, fake_clock, error_response
    ) -> None:
        """Verify error bodies are parsed into UpstreamError."""
        api_stub.add(
            "GET", "/documents/missing", error_response(404, "Requested entity was not found.")
        )
        docs = make_client(DocsClient)

        with pytest.raises(UpstreamError) as exc_info:
            await docs.get_document("missing")

        assert exc_info.value.service == "Docs"
        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Requested entity was not found."
        assert fake_clock.sleeps == []

    @pytest.mark.asyncio
    async def test_should_fall_back_to_reason_phrase(self, api_stub, make_client) -> None:
        """Verify non-JSON error bodies use the HTTP reason phrase."""
        api_stub.add("GET", "/files", httpx.Response(502, text="<html>Bad Gateway</html>"))
        drive = make_client(DriveClient)

        with pytest.raises(UpstreamError, match="Bad Gateway"):
            await drive.list_files()

    @pytest.mark.asyncio
    async def test_should_retry_transient_failures(
        self, api_stub, make_client, fake_clock, fake_credentials, error_response
    ) -> None:
        """Verify 503 responses are retried with linear backoff."""
        api_stub.add(
            "GET",
            "/documents/doc1",
            error_response(503, "The service is currently unavailable."),
            error_response(503, "The service is currently unavailable."),
            httpx.Response(200, json={"documentId": "doc1"}),
        )
        docs = make_client(DocsClient)

        document = await docs.get_document("doc1")

        assert document == {"documentId": "doc1"}
        assert len(api_stub.requests) == 3
        assert fake_clock.sleeps == [2.0, 4.0]
        assert fake_credentials.calls == 3

    @pytest.mark.asyncio
    async def test_should_give_up_after_three_attempts(
        self, api_stub, make_client, fake_clock, error_response
    ) -> None:
        """Verify 429 is retried at most twice and then propagated."""
        api_stub.add("GET", "/files", error_response(429, "Quota exceeded"))
        drive = make_client(DriveClient)

        with pytest.raises(UpstreamError) as exc_info:
            await drive.list_files()

        assert exc_info.value.status_code == 429
        assert exc_info.value.message == "Quota exceeded"
        assert len(api_stub.requests) == 3
        assert fake_clock.sleeps == [2.0, 4.0]

    @pytest.mark.asyncio
    async def test_should_wrap_transport_errors(self, fake_credentials, fake_clock) -> None:
        """Verify connection failures become UpstreamError without status."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
            drive = DriveClient(client, fake_credentials, sleep=fake_clock.sleep)
            with pytest.raises(UpstreamError) as exc_info:
                await drive.list_files()

        assert exc_info.value.status_code is None
        assert "Connection refused" in str(exc_info.value)
        assert fake_clock.sleeps == []


@pytest.mark.unit
class TestDocsClient:
    """Tests for DocsClient requests."""

    @pytest.mark.asyncio
    async def test_should_create_document_with_title(self, api_stub, make_client) -> None:
        """Verify create posts the title."""
        api_stub.add("POST", "/documents", httpx.Response(200, json={"documentId": "new_doc"}))
        docs = make_client(DocsClient)

        created = await docs.create_document("Weekly Notes")

        assert created["documentId"] == "new_doc"
        assert json.loads(api_stub.requests[0].content) == {"title": "Weekly Notes"}

    @pytest.mark.asyncio
    async def test_should_insert_text_at_start(self, api_stub, make_client) -> None:
        """Verify insert_text sends one insertText request at index 1."""
        api_stub.add(
            "POST",
            "/documents/new_doc:batchUpdate",
            httpx.Response(200, json={"documentId": "new_doc", "replies": [{}]}),
        )
        docs = make_client(DocsClient)

        await docs.insert_text("new_doc", "Hello")

        body = json.loads(api_stub.requests[0].content)
        assert body == {
            "requests": [{"insertText": {"location": {"index": 1}, "text": "Hello"}}]
        }


@pytest.mark.unit
class TestSheetsClient:
    """Tests for SheetsClient requests."""

    @pytest.mark.asyncio
    async def test_should_request_range_values(self, api_stub, make_client) -> None:
        """Verify the A1 range is placed in the request path."""
        api_stub.add(
            "GET",
            "/values/Sheet1!A1:B2",
            httpx.Response(200, json={"range": "Sheet1!A1:B2", "values": [["a", "b"]]}),
        )
        sheets = make_client(SheetsClient)

        response = await sheets.get_values("sheet1", "Sheet1!A1:B2")

        assert response["values"] == [["a", "b"]]
        assert api_stub.requests[0].url.path == "/v4/spreadsheets/sheet1/values/Sheet1!A1:B2"


@pytest.mark.unit
class TestDriveClient:
    """Tests for DriveClient requests."""

    @pytest.mark.asyncio
    async def test_should_pass_query_and_page_size(self, api_stub, make_client) -> None:
        """Verify query parameters are forwarded."""
        api_stub.add("GET", "/files", httpx.Response(200, json={"files": [{"id": "f1"}]}))
        drive = make_client(DriveClient)

        files = await drive.list_files(query="name contains 'x'", page_size=5)

        params = api_stub.requests[0].url.params
        assert files == [{"id": "f1"}]
        assert params["q"] == "name contains 'x'"
        assert params["pageSize"] == "5"
        assert params["fields"] == "files(id,name,mimeType)"

    @pytest.mark.asyncio
    async def test_should_omit_query_when_listing(self, api_stub, make_client) -> None:
        """Verify plain listings send no q parameter."""
        api_stub.add("GET", "/files", httpx.Response(200, json={}))
        drive = make_client(DriveClient)

        files = await drive.list_files()

        assert files == []
        assert "q" not in api_stub.requests[0].url.params
