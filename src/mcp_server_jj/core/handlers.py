"""Tool call handlers for MCP jj Server"""

import asyncio
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config import ServerConfig
from ..error_handling import JjServerError, UnknownTool, classify_error
from ..jj.commands import CommandInvocation, build_invocation
from ..jj.executor import ExecutionResult, run_jj
from ..jj.models import validate_params
from .tools import ToolRegistry, build_default_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResponse:
    """Text payload plus error flag returned for every tool call"""

    text: str
    is_error: bool = False
    error_code: Optional[str] = None

    @classmethod
    def success(cls, text: str) -> "ToolResponse":
        return cls(text=text)

    @classmethod
    def failure(cls, error: Exception) -> "ToolResponse":
        code = getattr(error, "code", "InternalError")
        return cls(text=f"Error: {error}", is_error=True, error_code=code)


def format_output(invocation: CommandInvocation, result: ExecutionResult) -> str:
    """Prefer stdout; jj reports working-copy changes on stderr."""
    if result.stdout:
        return result.stdout
    if result.stderr:
        return result.stderr
    return f"jj {' '.join(invocation.args)} completed successfully"


class CallToolHandler:
    """Validates, builds, executes and formats one tool call at a time"""

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        registry: Optional[ToolRegistry] = None,
    ):
        self.config = config or ServerConfig()
        self.registry = registry if registry is not None else build_default_registry()

    async def execute(self, name: str, arguments: Optional[Dict[str, Any]]) -> str:
        """Run a tool and return its output, raising JjServerError on failure."""
        tool_def = self.registry.get_tool(name)
        if tool_def is None:
            available = ", ".join(self.registry.tools)
            raise UnknownTool(f"Unknown tool: {name}. Available tools: {available}")

        params = validate_params(tool_def.schema, arguments, name)
        invocation = build_invocation(name, params, self.config.repository)

        result = await asyncio.to_thread(
            run_jj,
            invocation.args,
            cwd=invocation.cwd,
            binary=self.config.jj_binary,
            timeout=self.config.timeout_seconds,
        )
        return format_output(invocation, result)

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> ToolResponse:
        """Main tool call entry point; never raises"""
        request_id = os.urandom(4).hex()
        extra = {"request_id": request_id, "tool": name}
        logger.info(f"[{request_id}] Tool call: {name}", extra=extra)
        logger.debug(f"[{request_id}] Arguments: {arguments}", extra=extra)

        start_time = time.time()
        try:
            output = await self.execute(name, arguments)
        except JjServerError as e:
            context = classify_error(e, operation=name)
            extra.update(context.log_extra())
            extra["duration_ms"] = round((time.time() - start_time) * 1000, 1)
            logger.log(
                context.log_level,
                f"[{request_id}] Tool '{name}' failed with {context.code}: {e}",
                extra=extra,
            )
            return ToolResponse.failure(e)
        except Exception as e:
            extra["duration_ms"] = round((time.time() - start_time) * 1000, 1)
            logger.error(
                f"[{request_id}] Tool '{name}' unexpected error: {e}",
                exc_info=True,
                extra=extra,
            )
            return ToolResponse.failure(e)

        extra["duration_ms"] = round((time.time() - start_time) * 1000, 1)
        logger.info(f"[{request_id}] Tool '{name}' completed", extra=extra)
        return ToolResponse.success(output)
