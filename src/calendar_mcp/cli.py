from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import orjson

from .api import dispatch_tool_call, get_api_functions
from .bootstrap import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="calendar-mcp", description="Apple Calendar tools over MCP.")
    parser.add_argument("--log-level", default=None, help="Override CALENDAR_MCP_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run the MCP server.")
    serve_parser.add_argument("--transport", choices=("stdio", "http"), default="stdio")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8765)

    subparsers.add_parser("tools", help="Print the tool list with argument schemas as JSON.")

    call_parser = subparsers.add_parser("call", help="Invoke a single tool and print its response text.")
    call_parser.add_argument("name", help="Tool name, e.g. calendar_get_today")
    call_parser.add_argument("--args", default="{}", help="JSON object with the tool arguments.")

    return parser


def _print_tools() -> int:
    tools = [api_function.as_tool() for api_function in sorted(get_api_functions(), key=lambda item: item.name)]
    print(orjson.dumps({"tools": tools}, option=orjson.OPT_INDENT_2).decode("utf-8"))
    return 0


def _call_tool(name: str, raw_args: str) -> int:
    try:
        arguments = orjson.loads(raw_args)
    except orjson.JSONDecodeError as exc:
        print(f"Error: --args is not valid JSON: {exc}", file=sys.stderr)
        return 2
    response = dispatch_tool_call(name, arguments)
    print(response.text)
    return 1 if response.is_error else 0


def _serve(transport: str, host: str, port: int) -> int:
    from .services.mcp import run_mcp_server

    try:
        run_mcp_server(transport=transport, host=host, port=port)
    except KeyboardInterrupt:
        return 0
    except Exception:  # noqa: BLE001
        logger.exception("Calendar MCP server failed")
        return 1
    return 0


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level)

    if args.command == "serve":
        code = _serve(args.transport, args.host, args.port)
    elif args.command == "tools":
        code = _print_tools()
    elif args.command == "call":
        code = _call_tool(args.name, args.args)
    else:  # pragma: no cover - argparse enforces choices
        parser.print_help()
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    main()
