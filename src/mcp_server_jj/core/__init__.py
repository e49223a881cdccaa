"""MCP jj Server core components"""

from .tools import JjTools, ToolDefinition, ToolRegistry, build_default_registry
from .handlers import CallToolHandler, ToolResponse

__all__ = [
    "JjTools",
    "ToolDefinition",
    "ToolRegistry",
    "build_default_registry",
    "CallToolHandler",
    "ToolResponse",
]
