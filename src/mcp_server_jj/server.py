import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .config import ServerConfig, is_jj_workspace
from .core.handlers import CallToolHandler
from .core.tools import ToolRegistry, build_default_registry

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-jj"


class ToolCallError(Exception):
    """Raised out of call_tool so the SDK returns a result with isError set."""


def create_server(config: ServerConfig, registry: ToolRegistry | None = None) -> Server:
    """Create the MCP server with the jj tool catalog.

    Only list_tools/call_tool are registered, so the advertised capabilities
    are limited to tools.
    """
    registry = registry if registry is not None else build_default_registry()
    tool_handler = CallToolHandler(config=config, registry=registry)
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """Return available jj tools"""
        return registry.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        response = await tool_handler.call_tool(name, arguments)
        if response.is_error:
            raise ToolCallError(response.text)
        return [TextContent(type="text", text=response.text)]

    return server


async def serve(config: ServerConfig) -> None:
    logger.info(f"Starting MCP jj Server (jj binary: {config.jj_binary})")

    if config.repository is not None:
        if not is_jj_workspace(config.repository):
            logger.error(f"{config.repository} is not a valid jj workspace")
            return
        logger.info(f"Using repository at {config.repository}")

    server = create_server(config)
    options = server.create_initialization_options()

    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("STDIO server connected, waiting for requests...")
            await server.run(read_stream, write_stream, options, raise_exceptions=False)
    except KeyboardInterrupt:
        logger.info("Server interrupted by user")
        raise
    finally:
        logger.info("MCP jj Server shutting down.")
