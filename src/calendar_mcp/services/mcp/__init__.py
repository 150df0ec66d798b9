from __future__ import annotations

from .server import DispatchedTool, build_mcp_server, run_mcp_server

__all__ = ["DispatchedTool", "build_mcp_server", "run_mcp_server"]
