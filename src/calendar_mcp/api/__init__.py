"""Public tool surface shared by the MCP server and the CLI."""

from __future__ import annotations

from .dispatcher import dispatch_tool_call
from .models import ToolResponse
from .registry import ApiFunction, ToolSchema, call_api, get_api_function, get_api_functions, register_api
from .state import api_state

# Import endpoints so decorators run at module import time.
from . import endpoints  # noqa: F401

__all__ = [
    "ApiFunction",
    "ToolResponse",
    "ToolSchema",
    "api_state",
    "call_api",
    "dispatch_tool_call",
    "get_api_function",
    "get_api_functions",
    "register_api",
]
