"""Protocol-level tests: tool calls made through an in-memory MCP client session."""

import json
from pathlib import Path

import pytest
from mcp import types
from mcp.shared.memory import create_connected_server_and_client_session

from mcp_server_jj.config import ServerConfig
from mcp_server_jj.core.tools import ToolRegistry
from mcp_server_jj.server import SERVER_NAME, create_server, serve


async def list_tools(server) -> list[types.Tool]:
    async with create_connected_server_and_client_session(server) as client:
        result = await client.list_tools()
    return result.tools


async def call_tool(server, name: str, arguments: dict) -> types.CallToolResult:
    async with create_connected_server_and_client_session(server) as client:
        return await client.call_tool(name, arguments)


@pytest.mark.asyncio
async def test_list_tools_catalog(fake_config: ServerConfig):
    server = create_server(fake_config)
    tools = await list_tools(server)
    assert sorted(tool.name for tool in tools) == sorted(
        ["status", "rebase", "commit", "new", "log", "diff", "git-clone"]
    )


@pytest.mark.asyncio
async def test_empty_registry_lists_no_tools(fake_config: ServerConfig):
    server = create_server(fake_config, ToolRegistry())
    assert await list_tools(server) == []


def test_capabilities_advertise_tools_only(fake_config: ServerConfig):
    server = create_server(fake_config)
    options = server.create_initialization_options()

    assert options.server_name == SERVER_NAME
    assert options.capabilities.tools is not None
    assert options.capabilities.resources is None
    assert options.capabilities.prompts is None
    assert options.capabilities.logging is None


@pytest.mark.asyncio
async def test_call_tool_success(fake_config: ServerConfig, workdir: Path):
    server = create_server(fake_config)
    result = await call_tool(server, "status", {"repoPath": str(workdir)})

    assert not result.isError
    assert result.content[0].type == "text"
    assert json.loads(result.content[0].text)["args"] == ["status"]


@pytest.mark.asyncio
async def test_call_tool_error_sets_is_error(fake_config: ServerConfig, monkeypatch):
    monkeypatch.setenv("FAKE_JJ_FAIL", "Error: fatal: repository 'nowhere' does not exist")
    server = create_server(fake_config)
    result = await call_tool(server, "git-clone", {"source": "https://invalid.example/nowhere"})

    assert result.isError
    assert "repository 'nowhere' does not exist" in result.content[0].text


@pytest.mark.asyncio
async def test_call_unknown_tool(fake_config: ServerConfig):
    server = create_server(fake_config)
    result = await call_tool(server, "push", {})

    assert result.isError
    assert "Unknown tool: push" in result.content[0].text


@pytest.mark.asyncio
async def test_call_tool_missing_required_parameter(fake_config: ServerConfig):
    server = create_server(fake_config)
    result = await call_tool(server, "commit", {})

    assert result.isError
    assert "message" in result.content[0].text


@pytest.mark.asyncio
async def test_serve_refuses_non_jj_repository(tmp_path: Path, caplog):
    config = ServerConfig(repository=tmp_path)
    with caplog.at_level("ERROR"):
        await serve(config)
    assert "is not a valid jj workspace" in caplog.text
