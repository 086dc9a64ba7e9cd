"""Tool definitions, dispatch and the Google Workspace tool handlers."""

from workspace_bridge.tools.models import (
    InvocationRequest,
    TextBlock,
    ToolDefinition,
    ToolResult,
)
from workspace_bridge.tools.registry import ToolRegistry
from workspace_bridge.tools.workspace import WorkspaceTools

__all__ = [
    "InvocationRequest",
    "TextBlock",
    "ToolDefinition",
    "ToolRegistry",
    "ToolResult",
    "WorkspaceTools",
]
