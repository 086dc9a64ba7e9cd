"""Shared pytest fixtures for workspace-bridge-mcp tests.

This module provides reusable fixtures for fake credentials, a fake clock
for retry waits, mocked Google API transports and tool registries.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from workspace_bridge.clients import DocsClient, DriveClient, SheetsClient
from workspace_bridge.retry import RetryPolicy
from workspace_bridge.tools import ToolRegistry, WorkspaceTools

# =============================================================================
# Credentials & Clock
# =============================================================================


class FakeCredentials:
    """Credential provider returning a fixed access token."""

    def __init__(self, token: str = "test_access_token_abc123") -> None:
        self.token = token
        self.calls = 0

    async def get_access_token(self) -> str:
        self.calls += 1
        return self.token


class FakeClock:
    """Records retry waits instead of sleeping."""

    def __init__(self) -> None:
        self.sleeps: list[float] = []

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)


@pytest.fixture
def fake_credentials() -> FakeCredentials:
    """Create credentials that never touch the environment."""
    return FakeCredentials()


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a fake clock for retry waits."""
    return FakeClock()


@pytest.fixture
def retry_policy() -> RetryPolicy:
    """Default retry policy: 3 attempts, 2s linear backoff."""
    return RetryPolicy()


# =============================================================================
# Mock Google API Transport
# =============================================================================


class GoogleApiStub:
    """Routes httpx requests to canned responses and records them.

    Responses are registered per (method, path suffix). A list of responses
    is consumed one per request, the last one repeating.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[httpx.Response]] = {}

    def add(self, method: str, path_suffix: str, *responses: httpx.Response) -> None:
        self._routes[(method, path_suffix)] = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for (method, suffix), responses in self._routes.items():
            if request.method == method and request.url.path.endswith(suffix):
                if len(responses) > 1:
                    return responses.pop(0)
                return responses[0]
        return httpx.Response(404, json={"error": {"code": 404, "message": "Not routed"}})


def _error_response(status_code: int, message: str) -> httpx.Response:
    return httpx.Response(
        status_code, json={"error": {"code": status_code, "message": message}}
    )


@pytest.fixture
def error_response() -> Callable[[int, str], httpx.Response]:
    """Factory for Google-style JSON error responses."""
    return _error_response


@pytest.fixture
def api_stub() -> GoogleApiStub:
    """Create an empty Google API stub."""
    return GoogleApiStub()


@pytest_asyncio.fixture
async def http_client(api_stub: GoogleApiStub) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Create an httpx client backed by the API stub."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(api_stub)) as client:
        yield client


@pytest.fixture
def make_client(
    http_client: httpx.AsyncClient,
    fake_credentials: FakeCredentials,
    fake_clock: FakeClock,
    retry_policy: RetryPolicy,
) -> Callable[[type], Any]:
    """Factory building an API client over the stubbed transport."""

    def _make(client_class: type) -> Any:
        return client_class(http_client, fake_credentials, retry_policy, sleep=fake_clock.sleep)

    return _make


@pytest.fixture
def live_registry(make_client: Callable[[type], Any]) -> ToolRegistry:
    """Create a registry whose tools call the stubbed Google APIs."""
    registry = ToolRegistry()
    WorkspaceTools(
        docs=make_client(DocsClient),
        sheets=make_client(SheetsClient),
        drive=make_client(DriveClient),
    ).register(registry)
    return registry


# =============================================================================
# Mock API Clients
# =============================================================================


@pytest.fixture
def mock_docs_client() -> AsyncMock:
    """Create a mock Docs client.

    Provides mocks for:
    - get_document()
    - create_document()
    - insert_text()
    """
    mock = AsyncMock(spec=DocsClient)
    mock.get_document.return_value = {
        "documentId": "doc1",
        "title": "Test Document",
        "body": {
            "content": [
                {"sectionBreak": {}},
                {"paragraph": {"elements": [{"textRun": {"content": "Test content\n"}}]}},
            ]
        },
    }
    mock.create_document.return_value = {"documentId": "new_doc_id", "title": "New Document"}
    mock.insert_text.return_value = {"documentId": "new_doc_id", "replies": [{}]}
    return mock


@pytest.fixture
def mock_sheets_client() -> AsyncMock:
    """Create a mock Sheets client returning a small grid."""
    mock = AsyncMock(spec=SheetsClient)
    mock.get_values.return_value = {
        "range": "Sheet1!A1:B2",
        "majorDimension": "ROWS",
        "values": [["Name", "Amount"], ["Rent", "1200"]],
    }
    return mock


@pytest.fixture
def mock_drive_client() -> AsyncMock:
    """Create a mock Drive client returning two files."""
    mock = AsyncMock(spec=DriveClient)
    mock.list_files.return_value = [
        {
            "id": "file1",
            "name": "Budget 2025",
            "mimeType": "application/vnd.google-apps.spreadsheet",
        },
        {
            "id": "file2",
            "name": "Meeting Notes",
            "mimeType": "application/vnd.google-apps.document",
        },
    ]
    return mock


@pytest.fixture
def workspace_tools(
    mock_docs_client: AsyncMock,
    mock_sheets_client: AsyncMock,
    mock_drive_client: AsyncMock,
) -> WorkspaceTools:
    """Create Workspace tool handlers over mock clients."""
    return WorkspaceTools(docs=mock_docs_client, sheets=mock_sheets_client, drive=mock_drive_client)


@pytest.fixture
def registry(workspace_tools: WorkspaceTools) -> ToolRegistry:
    """Create a registry with the Workspace tools over mock clients."""
    registry = ToolRegistry()
    workspace_tools.register(registry)
    return registry


# =============================================================================
# CLI Test Fixtures
# =============================================================================


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
