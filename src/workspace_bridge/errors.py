"""Exception hierarchy for the workspace bridge.

Dispatcher errors (unknown tool, invalid arguments) are raised before any
Google API call is made. Upstream errors carry the HTTP status so the retry
policy can decide whether a failure is transient.
"""

from typing import Any


class BridgeError(Exception):
    """Base class for all workspace bridge errors."""


class DuplicateToolError(BridgeError):
    """Raised when a tool name is registered twice."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Tool already registered: {tool_name}")


class UnknownToolError(BridgeError):
    """Raised when a tool call names a tool that is not registered."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")


class ToolValidationError(BridgeError):
    """Raised when tool arguments do not satisfy the tool's input schema.

    Attributes:
        tool_name: Name of the tool being invoked.
        errors: Per-field error details as reported by pydantic.
    """

    def __init__(self, tool_name: str, errors: list[dict[str, Any]]) -> None:
        self.tool_name = tool_name
        self.errors = errors
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ())) or 'arguments'}: {err.get('msg')}"
            for err in errors
        )
        super().__init__(f"Invalid arguments for {tool_name}: {details}")


class UpstreamError(BridgeError):
    """Raised when a Google API request fails.

    Attributes:
        service: Human-readable API name (Docs, Sheets, Drive).
        status_code: HTTP status, or None when no response was received.
        message: Error message reported by the API or the transport.
    """

    def __init__(self, service: str, status_code: int | None, message: str) -> None:
        self.service = service
        self.status_code = status_code
        self.message = message
        if status_code is None:
            super().__init__(f"{service} Error: {message}")
        else:
            super().__init__(f"{service} Error ({status_code}): {message}")


class PartialFailureError(BridgeError):
    """Raised when a multi-step tool fails after an earlier step succeeded.

    The document created by the first step is left in place.
    """

    def __init__(self, document_id: str, cause: Exception) -> None:
        self.document_id = document_id
        self.cause = cause
        super().__init__(
            f"Document {document_id} was created but its content could not be written: {cause}"
        )


class CredentialsError(BridgeError):
    """Raised when Google credentials cannot be resolved or refreshed."""
