from __future__ import annotations

import asyncio
import logging
import sys
from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .config import Settings, ensure_root, load_root, settings
from .logging_config import configure_logging
from .services.dispatcher import Dispatcher, catalogue
from .services.formatter import render

logger = logging.getLogger(__name__)


def tool_definitions() -> list[types.Tool]:
    return [
        types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema)
        for tool in catalogue()
    ]


async def handle_call(dispatcher: Dispatcher, name: Any, arguments: Any) -> list[types.TextContent]:
    outcome = await asyncio.to_thread(dispatcher.dispatch, name, arguments)
    response = render(outcome)
    return [types.TextContent(type='text', text=item.text) for item in response.content]


def build_server(dispatcher: Dispatcher, config: Settings = settings) -> Server:
    server = Server(config.server_name, version=config.server_version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return tool_definitions()

    # argument checking is the dispatcher's job so callers get its messages
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        return await handle_call(dispatcher, name, arguments)

    return server


async def serve(config: Settings = settings) -> None:
    root = ensure_root(load_root(config))
    server = build_server(Dispatcher(root), config)
    async with stdio_server() as (read_stream, write_stream):
        logger.info('File Manager MCP server running on stdio, root %s', root)
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> int:
    configure_logging(settings.log_level)
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info('Interrupted, shutting down server')
    except Exception:
        logger.exception('Failed to start the File Manager server')
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
