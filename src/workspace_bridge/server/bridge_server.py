"""Workspace bridge MCP server.

Serves the Google Workspace tools to remote agents over Server-Sent Events:
clients open a stream with ``GET /sse`` and submit JSON-RPC messages to
``POST /messages/?session_id=...``. Each stream is its own session, tracked
by the SDK's SseServerTransport, so a new connection never takes over the
responses of an existing one. The same tools can also be served over stdio.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
import uvicorn
from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Mount, Route

from workspace_bridge.__version__ import __version__
from workspace_bridge.auth import ApplicationDefaultCredentials
from workspace_bridge.clients import DocsClient, DriveClient, SheetsClient, create_http_client
from workspace_bridge.config import ServerConfig
from workspace_bridge.errors import BridgeError
from workspace_bridge.tools import ToolRegistry, WorkspaceTools

logger = logging.getLogger(__name__)

SERVER_NAME = "workspace-bridge"


class ToolCallError(BridgeError):
    """Raised to report an error ToolResult through the MCP SDK."""


def configure_logging(level: str = "INFO") -> None:
    """Configure process-wide logging to stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


class WorkspaceBridgeServer:
    """MCP server exposing Google Workspace tools.

    Attributes:
        config: Runtime configuration.
        server: MCP Server instance.
        registry: Tool registry used to dispatch calls.
    """

    def __init__(
        self,
        config: ServerConfig | None = None,
        registry: ToolRegistry | None = None,
        credentials: ApplicationDefaultCredentials | None = None,
    ) -> None:
        """Initialize the bridge server.

        Args:
            config: Runtime configuration. Read from the environment if omitted.
            registry: Pre-built tool registry. Workspace tools are registered
                against live Google clients if omitted.
            credentials: Credential provider for the Google clients.
        """
        self.config = config or ServerConfig.from_env()
        self.server = Server(SERVER_NAME, version=__version__)
        self._http_client: httpx.AsyncClient | None = None
        if registry is None:
            registry = self._build_registry(credentials or ApplicationDefaultCredentials())
        self.registry = registry
        self._setup_handlers()

    def _build_registry(self, credentials: ApplicationDefaultCredentials) -> ToolRegistry:
        """Create the Google clients once and register the Workspace tools."""
        self._http_client = create_http_client()
        policy = self.config.retry_policy()
        tools = WorkspaceTools(
            docs=DocsClient(self._http_client, credentials, policy),
            sheets=SheetsClient(self._http_client, credentials, policy),
            drive=DriveClient(self._http_client, credentials, policy),
        )
        registry = ToolRegistry()
        tools.register(registry)
        return registry

    async def close(self) -> None:
        """Close the shared HTTP client and release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    def _setup_handlers(self) -> None:
        """Register MCP tool handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            """Return list of available tools."""
            return self.list_tools()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
            """Handle tool calls."""
            return await self.call_tool(name, arguments)

    def list_tools(self) -> list[Tool]:
        """Describe every registered tool in MCP form."""
        return [
            Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema,
            )
            for definition in self.registry.list_definitions()
        ]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """Invoke a tool and convert its result to MCP content.

        Raises:
            ToolCallError: If the result is an error. The MCP SDK turns this
                into a CallToolResult with isError set.
        """
        result = await self.registry.invoke(name, arguments)
        if result.is_error:
            raise ToolCallError(result.text)
        return [TextContent(type="text", text=block.text) for block in result.content]

    @asynccontextmanager
    async def _lifespan(self, app: Starlette) -> AsyncIterator[None]:
        logger.info(
            "Workspace bridge online at http://%s:%d%s",
            self.config.host,
            self.config.port,
            self.config.sse_path,
        )
        try:
            yield
        finally:
            await self.close()

    def create_app(self) -> Starlette:
        """Build the Starlette application serving the SSE transport."""
        sse = SseServerTransport(self.config.message_path)

        async def handle_sse(request: Request) -> Response:
            client = request.client.host if request.client else "unknown"
            logger.info("New SSE connection from %s", client)
            async with sse.connect_sse(
                request.scope, request.receive, request._send
            ) as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
            logger.info("SSE connection from %s closed", client)
            return Response()

        return Starlette(
            routes=[
                Route(self.config.sse_path, endpoint=handle_sse, methods=["GET"]),
                Mount(self.config.message_path, app=sse.handle_post_message),
            ],
            lifespan=self._lifespan,
        )

    async def run_sse(self) -> None:
        """Run the MCP server over SSE with uvicorn."""
        uvicorn_config = uvicorn.Config(
            self.create_app(),
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower(),
        )
        await uvicorn.Server(uvicorn_config).serve()

    async def run_stdio(self) -> None:
        """Run the MCP server using stdio transport."""
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )
        finally:
            await self.close()


def main() -> None:
    """Entry point for the workspace bridge SSE server."""
    config = ServerConfig.from_env()
    configure_logging(config.log_level)
    server = WorkspaceBridgeServer(config)
    asyncio.run(server.run_sse())


if __name__ == "__main__":
    main()
