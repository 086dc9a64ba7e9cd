"""Data models for tool definitions and results."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Literal, Union

from pydantic import BaseModel, Field


class TextBlock(BaseModel):
    """A single text content block in a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Uniform response envelope for a tool invocation.

    Attributes:
        content: Ordered content blocks.
        is_error: True if the invocation ultimately failed.
    """

    content: list[TextBlock] = Field(default_factory=list)
    is_error: bool = False

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        """Create a successful result holding one text block."""
        return cls(content=[TextBlock(text=text)])

    @classmethod
    def from_error(cls, message: str) -> "ToolResult":
        """Create an error result holding the error message."""
        return cls(content=[TextBlock(text=message)], is_error=True)

    @property
    def text(self) -> str:
        """All text blocks joined with newlines."""
        return "\n".join(block.text for block in self.content)


class InvocationRequest(BaseModel):
    """A named tool call with its raw arguments."""

    tool_name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


ToolHandler = Callable[[Any], Awaitable[Union[str, ToolResult]]]


@dataclass(frozen=True)
class ToolDefinition:
    """A registered tool.

    Attributes:
        name: Unique tool name.
        description: Description shown to the client.
        input_model: Pydantic model describing and validating the arguments.
        handler: Coroutine called with the validated arguments.
    """

    name: str
    description: str
    input_model: type[BaseModel]
    handler: ToolHandler

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the tool arguments."""
        return self.input_model.model_json_schema(by_alias=True)
