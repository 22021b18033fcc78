import asyncio
import json
import sys
from typing import Any, Dict, List, Optional

import mcp.server.stdio
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.fastmcp.utilities.logging import configure_logging, get_logger
from mcp.shared.exceptions import McpError

from mcp_solana_tracker import __version__
from mcp_solana_tracker.catalog import list_tool_descriptors
from mcp_solana_tracker.config import ConfigurationError, Settings, load_settings
from mcp_solana_tracker.dispatcher import Dispatcher, ErrorKind, Failure, create_http_client

logger = get_logger(__name__)

SERVER_NAME = "solana-tracker-server"

ERROR_CODES = {
    ErrorKind.UNKNOWN_TOOL: types.METHOD_NOT_FOUND,
    ErrorKind.INVALID_ARGUMENTS: types.INVALID_PARAMS,
    ErrorKind.UPSTREAM_ERROR: types.INTERNAL_ERROR,
    ErrorKind.INTERNAL: types.INTERNAL_ERROR,
}

# --- Server Setup ---
server = Server(SERVER_NAME, version=__version__)

# Created on first use (or injected by tests) so importing this module never needs the API key
dispatcher: Optional[Dispatcher] = None


def get_dispatcher() -> Dispatcher:
    global dispatcher
    if dispatcher is None:
        dispatcher = Dispatcher(create_http_client(load_settings()))
    return dispatcher


def to_mcp_error(failure: Failure) -> McpError:
    """Flattens a dispatch failure into the protocol-level error the caller sees."""
    data: Dict[str, Any] = {"kind": failure.kind.value}
    if failure.status_code is not None:
        data["status"] = failure.status_code
    return McpError(types.ErrorData(code=ERROR_CODES[failure.kind], message=failure.message, data=data))

# --- MCP Handlers ---

@server.list_tools()
async def list_tools() -> List[types.Tool]:
    """Returns the tool catalog verbatim."""
    return [descriptor.to_mcp_tool() for descriptor in list_tool_descriptors()]


async def call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> List[types.TextContent]:
    """Forwards a tool call to the Solana Tracker API and returns the JSON body."""
    result = await get_dispatcher().invoke(name, arguments)
    if isinstance(result, Failure):
        raise to_mcp_error(result)
    return [types.TextContent(type="text", text=json.dumps(result.payload))]


async def handle_call_tool_request(request: types.CallToolRequest) -> types.ServerResult:
    """
    Raw tools/call handler. Registered without the SDK's call_tool() decorator,
    which would re-validate argument types against the input schema and turn
    every McpError into an isError text result. Raised McpErrors here reach the
    session and go out as JSON-RPC errors with their code and data intact.
    """
    content = await call_tool(request.params.name, request.params.arguments)
    return types.ServerResult(types.CallToolResult(content=content, isError=False))


server.request_handlers[types.CallToolRequest] = handle_call_tool_request

# --- Entry Point ---

async def serve(settings: Settings) -> None:
    global dispatcher
    if dispatcher is None:
        dispatcher = Dispatcher(create_http_client(settings))
    try:
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            logger.info(f"{SERVER_NAME} {__version__} running on stdio against {settings.base_url}")
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await dispatcher.aclose()
        dispatcher = None


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down.")


if __name__ == "__main__":
    # Example: SOLANA_TRACKER_API_KEY=... python -m mcp_solana_tracker.server
    main()
