"""Command-line interface for workspace-bridge-mcp."""

import asyncio
import sys

import click
from pydantic import ValidationError

from workspace_bridge.__version__ import __version__
from workspace_bridge.config import ServerConfig


def _load_config(**overrides: object) -> ServerConfig:
    """Read configuration from the environment and apply CLI overrides."""
    try:
        config = ServerConfig.from_env()
        values = {key: value for key, value in overrides.items() if value is not None}
        if values:
            config = ServerConfig.model_validate({**config.model_dump(), **values})
    except ValidationError as e:
        click.echo(f"❌ Invalid configuration: {e}", err=True)
        sys.exit(1)
    return config


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Workspace Bridge - Google Workspace tools for remote MCP agents.

    This tool provides 5 tools across:
    - Docs (read, create)
    - Sheets (read ranges)
    - Drive (search, list)
    """
    pass


@main.command()
@click.option("--host", default=None, help="Interface to bind (default: $HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Port to listen on (default: $PORT or 8080)")
@click.option("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO)")
def serve(host: str | None, port: int | None, log_level: str | None) -> None:
    """Start the MCP server over Server-Sent Events.

    Remote agents connect with GET /sse and post messages to
    /messages/?session_id=<id>.

    Credentials come from the environment's service identity
    (GOOGLE_APPLICATION_CREDENTIALS or the attached service account).
    """
    from workspace_bridge.server import WorkspaceBridgeServer, configure_logging

    config = _load_config(host=host, port=port, log_level=log_level)
    configure_logging(config.log_level)

    try:
        click.echo(f"Starting workspace bridge on {config.host}:{config.port}...", err=True)
        server = WorkspaceBridgeServer(config)
        asyncio.run(server.run_sse())
    except KeyboardInterrupt:
        click.echo("\nServer stopped.", err=True)
    except Exception as e:
        click.echo(f"❌ Server error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option("--log-level", default=None, help="Logging level (default: $LOG_LEVEL or INFO)")
def stdio(log_level: str | None) -> None:
    """Start the MCP server over stdio for local desktop clients."""
    from workspace_bridge.server import WorkspaceBridgeServer, configure_logging

    config = _load_config(log_level=log_level)
    configure_logging(config.log_level)

    try:
        server = WorkspaceBridgeServer(config)
        asyncio.run(server.run_stdio())
    except KeyboardInterrupt:
        click.echo("\nServer stopped.", err=True)
    except Exception as e:
        click.echo(f"❌ Server error: {e}", err=True)
        sys.exit(1)


@main.command()
def tools() -> None:
    """List the tools this server provides."""
    from workspace_bridge.server import WorkspaceBridgeServer

    server = WorkspaceBridgeServer(_load_config())
    try:
        for tool in server.list_tools():
            click.echo(f"{tool.name}: {tool.description}")
    finally:
        asyncio.run(server.close())


@main.command()
def doctor() -> None:
    """Check installation and credential status.

    Verifies:
    1. Python dependencies installed
    2. Configuration valid
    3. Google credentials resolvable
    """
    from workspace_bridge.auth import ApplicationDefaultCredentials
    from workspace_bridge.errors import CredentialsError

    click.echo("Workspace Bridge Status:")
    click.echo("")

    # Check dependencies
    click.echo("Dependencies:")
    try:
        import google.auth  # noqa: F401
        import httpx  # noqa: F401
        import mcp  # noqa: F401
        import uvicorn  # noqa: F401

        click.echo("  ✓ google-auth installed")
        click.echo("  ✓ httpx installed")
        click.echo("  ✓ mcp installed")
        click.echo("  ✓ uvicorn installed")
    except ImportError as e:
        click.echo(f"  ❌ Missing dependency: {e}")
        sys.exit(1)

    click.echo("")

    config = _load_config()
    click.echo("Configuration:")
    click.echo(f"  Listen: {config.host}:{config.port}")
    click.echo(f"  Retry: {config.max_attempts} attempts, {config.backoff_seconds}s backoff step")
    click.echo("")

    # Check credentials
    click.echo("Credentials:")
    credentials = ApplicationDefaultCredentials()
    try:
        credentials.resolve()
    except CredentialsError as e:
        click.echo(f"  ❌ {e}")
        sys.exit(1)

    click.echo(f"  ✓ Application-default credentials found (project: {credentials.project_id})")
    click.echo(f"  Scopes: {len(credentials.scopes)} configured")
    click.echo("")
    click.echo("✓ Ready to use!")


if __name__ == "__main__":
    main()
