"""Tool registration and dispatch.

The registry owns the name -> definition mapping built at startup. Invoking
a tool validates the raw arguments against the tool's pydantic model before
the handler (and therefore any Google API call) runs. Every invocation
produces a ToolResult; handler exceptions become error results.
"""

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from workspace_bridge.errors import DuplicateToolError, ToolValidationError, UnknownToolError
from workspace_bridge.tools.models import (
    InvocationRequest,
    ToolDefinition,
    ToolHandler,
    ToolResult,
)

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry of named tools with typed input schemas.

    Example:
        ```python
        registry = ToolRegistry()
        registry.register_tool("echo", "Echo text", EchoArgs, echo_handler)
        result = await registry.invoke("echo", {"text": "hi"})
        ```
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDefinition] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def register(self, definition: ToolDefinition) -> None:
        """Register a tool definition.

        Raises:
            DuplicateToolError: If a tool with the same name exists.
        """
        if definition.name in self._tools:
            raise DuplicateToolError(definition.name)
        self._tools[definition.name] = definition

    def register_tool(
        self,
        name: str,
        description: str,
        input_model: type[BaseModel],
        handler: ToolHandler,
    ) -> ToolDefinition:
        """Build and register a tool definition."""
        definition = ToolDefinition(
            name=name,
            description=description,
            input_model=input_model,
            handler=handler,
        )
        self.register(definition)
        return definition

    def get(self, name: str) -> ToolDefinition:
        """Look up a tool by name.

        Raises:
            UnknownToolError: If the tool is not registered.
        """
        definition = self._tools.get(name)
        if definition is None:
            raise UnknownToolError(name)
        return definition

    def list_definitions(self) -> list[ToolDefinition]:
        """Return all definitions in registration order."""
        return list(self._tools.values())

    def resolve(
        self, name: str, arguments: dict[str, Any] | None
    ) -> tuple[ToolDefinition, BaseModel]:
        """Find a tool and validate its arguments, applying defaults.

        Raises:
            UnknownToolError: If the tool is not registered.
            ToolValidationError: If the arguments do not match the schema.
        """
        definition = self.get(name)
        try:
            args = definition.input_model.model_validate(arguments or {}, strict=True)
        except ValidationError as e:
            raise ToolValidationError(name, e.errors(include_url=False)) from e
        return definition, args

    async def invoke(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Invoke a tool and always return a result.

        Args:
            name: Tool name.
            arguments: Raw arguments from the client.

        Returns:
            ToolResult; is_error is set for dispatch, validation and
            handler failures.
        """
        try:
            definition, args = self.resolve(name, arguments)
        except (UnknownToolError, ToolValidationError) as e:
            logger.warning("Rejected call to tool %s: %s", name, e)
            return ToolResult.from_error(str(e))

        logger.info("Calling tool %s", name)
        try:
            outcome = await definition.handler(args)
        except Exception as e:
            logger.exception(f"Error calling tool {name}")
            return ToolResult.from_error(str(e))

        if isinstance(outcome, ToolResult):
            return outcome
        return ToolResult.from_text(outcome)

    async def handle(self, request: InvocationRequest) -> ToolResult:
        """Invoke the tool named by an InvocationRequest."""
        return await self.invoke(request.tool_name, request.arguments)
