"""Process configuration for the workspace bridge.

Environment Variables:
    HOST: Interface to bind (default: 0.0.0.0)
    PORT: Port to listen on (default: 8080)
    LOG_LEVEL: Logging level name (default: INFO)
    RETRY_MAX_ATTEMPTS: Attempts per upstream request (default: 3)
    RETRY_BACKOFF_SECONDS: Linear backoff step in seconds (default: 2.0)
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field, field_validator

from workspace_bridge.retry import RetryPolicy

DEFAULT_HOST = "0.0.0.0"  # nosec B104 - container deployments bind all interfaces
DEFAULT_PORT = 8080

_ENV_FIELDS = {
    "HOST": "host",
    "PORT": "port",
    "LOG_LEVEL": "log_level",
    "RETRY_MAX_ATTEMPTS": "max_attempts",
    "RETRY_BACKOFF_SECONDS": "backoff_seconds",
}


class ServerConfig(BaseModel):
    """Runtime settings for the SSE server.

    Attributes:
        host: Interface to bind.
        port: TCP port to listen on.
        log_level: Logging level name.
        sse_path: Path of the streaming endpoint.
        message_path: Path of the message submission endpoint.
        max_attempts: Attempts per upstream request, including the first.
        backoff_seconds: Delay multiplier; attempt n waits n * backoff_seconds.
    """

    host: str = Field(default=DEFAULT_HOST, description="Interface to bind")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Port to listen on")
    log_level: str = Field(default="INFO", description="Logging level name")
    sse_path: str = Field(default="/sse", description="Streaming endpoint path")
    message_path: str = Field(default="/messages/", description="Message endpoint path")
    max_attempts: int = Field(default=3, ge=1, description="Attempts per upstream request")
    backoff_seconds: float = Field(default=2.0, ge=0, description="Linear backoff step")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ.

        Returns:
            ServerConfig with unset variables left at their defaults.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value.
        """
        environ = os.environ if environ is None else environ
        values = {field: environ[var] for var, field in _ENV_FIELDS.items() if environ.get(var)}
        return cls.model_validate(values)

    def retry_policy(self) -> RetryPolicy:
        """Build the upstream retry policy described by this configuration."""
        return RetryPolicy(max_attempts=self.max_attempts, backoff_seconds=self.backoff_seconds)
