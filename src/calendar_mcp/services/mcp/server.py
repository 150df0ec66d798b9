from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent

from ...api import dispatch_tool_call, get_api_functions
from ...config import get_settings

logger = logging.getLogger(__name__)

INSTRUCTIONS = (
    "Read and manage events in the macOS Calendar app. "
    "Use calendar_get_calendars to discover calendar names, calendar_get_events or calendar_search "
    "to find events (ids are unique only within their calendar), and calendar_find_free_time before scheduling."
)


class DispatchedTool(Tool):
    """MCP tool whose arguments are validated and executed by the tool dispatcher."""

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        response = await asyncio.to_thread(dispatch_tool_call, self.name, arguments)
        if response.is_error:
            raise ToolError(response.text)
        return ToolResult(content=[TextContent(type="text", text=response.text)])


def build_tools() -> List[DispatchedTool]:
    tools = []
    for api_function in get_api_functions():
        logger.debug("Registering MCP tool: %s", api_function.name)
        tools.append(
            DispatchedTool(
                name=api_function.name,
                description=api_function.description,
                parameters=api_function.parameter_schema,
                tags=set(api_function.tags),
            )
        )
    return tools


def build_mcp_server(name: Optional[str] = None) -> FastMCP:
    return FastMCP(
        name=name or get_settings().server_name,
        instructions=INSTRUCTIONS,
        tools=build_tools(),
    )


def run_mcp_server(transport: str = "stdio", host: str = "127.0.0.1", port: int = 8765) -> None:
    server = build_mcp_server()
    if transport == "stdio":
        logger.info("Calendar MCP server running on stdio")
        server.run(transport="stdio")
    else:
        logger.info("Calendar MCP server listening on http://%s:%s", host, port)
        server.run(transport="streamable-http", host=host, port=port)
