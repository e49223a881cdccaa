"""Tool registry for MCP jj Server"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Type

from mcp.types import Tool

from ..jj.models import (
    JjCommit,
    JjDiff,
    JjGitClone,
    JjLog,
    JjNew,
    JjParams,
    JjRebase,
    JjStatus,
)

logger = logging.getLogger(__name__)


class JjTools(str, Enum):
    """Enumeration of all available jj tools"""

    STATUS = "status"
    REBASE = "rebase"
    COMMIT = "commit"
    NEW = "new"
    LOG = "log"
    DIFF = "diff"
    GIT_CLONE = "git-clone"


@dataclass(frozen=True)
class ToolDefinition:
    """Tool definition with metadata"""

    name: str
    description: str
    schema: Type[JjParams]

    def to_mcp_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.schema.model_json_schema(by_alias=True),
        )


class ToolRegistry:
    """Catalog of tools exposed by the server"""

    def __init__(self):
        self.tools: Dict[str, ToolDefinition] = {}

    def register(self, tool_def: ToolDefinition):
        """Register a tool in the registry"""
        self.tools[tool_def.name] = tool_def
        logger.debug(f"Registered tool: {tool_def.name}")

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name"""
        return self.tools.get(name)

    def list_tools(self) -> List[Tool]:
        """Get all tools as MCP Tool objects"""
        return [tool_def.to_mcp_tool() for tool_def in self.tools.values()]

    def __contains__(self, name: str) -> bool:
        return name in self.tools

    def __len__(self) -> int:
        return len(self.tools)


DEFAULT_TOOLS = (
    ToolDefinition(
        name=JjTools.STATUS.value,
        description="Show the status of the working directory",
        schema=JjStatus,
    ),
    ToolDefinition(
        name=JjTools.REBASE.value,
        description="Rebase a revision onto another",
        schema=JjRebase,
    ),
    ToolDefinition(
        name=JjTools.COMMIT.value,
        description="Create a new commit",
        schema=JjCommit,
    ),
    ToolDefinition(
        name=JjTools.NEW.value,
        description="Create a new empty commit",
        schema=JjNew,
    ),
    ToolDefinition(
        name=JjTools.LOG.value,
        description="Show commit history",
        schema=JjLog,
    ),
    ToolDefinition(
        name=JjTools.DIFF.value,
        description="Show differences between revisions",
        schema=JjDiff,
    ),
    ToolDefinition(
        name=JjTools.GIT_CLONE.value,
        description="Clone a Git repository using jj",
        schema=JjGitClone,
    ),
)


def build_default_registry() -> ToolRegistry:
    """Build the registry holding the seven jj tools"""
    registry = ToolRegistry()
    for tool_def in DEFAULT_TOOLS:
        registry.register(tool_def)
    logger.info(f"Initialized tool registry with {len(registry)} tools")
    return registry
