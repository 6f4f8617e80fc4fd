#!/usr/bin/env python3
"""
Meeting Bot MCP Server
Connects Claude Desktop (or any MCP client) to a meeting-bot API so bots can
be sent into Zoom, Google Meet and Teams calls, controlled, and inspected.

Setup:
  1. pip install meeting-bot-mcp
  2. Set MEETING_BOT_API_URL (default http://localhost:8000)
  3. Set MEETING_BOT_API_KEY if your API requires a token
  4. Add "meeting-bot-mcp" as a stdio server in claude_desktop_config.json
"""

import logging
import sys
from typing import Any, Dict, List, Optional

import anyio
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from meeting_bot_mcp import __version__
from meeting_bot_mcp.catalog import list_tools
from meeting_bot_mcp.client import MeetingBotClient
from meeting_bot_mcp.config import Settings
from meeting_bot_mcp.dispatcher import Dispatcher

SERVER_NAME = "meeting-bot-mcp"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    # stdout carries the MCP protocol; logs must go to stderr.
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def create_server(dispatcher: Dispatcher) -> Server:
    """Wire the tool catalog and dispatcher into an MCP server."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return [
            types.Tool(
                name=tool["name"],
                title=tool["title"],
                description=tool["description"],
                inputSchema=tool["inputSchema"],
                annotations=types.ToolAnnotations(**tool["annotations"]),
            )
            for tool in list_tools()
        ]

    # Arguments are validated by the dispatcher so failures come back in its envelope.
    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: Optional[Dict[str, Any]]
    ) -> List[types.TextContent]:
        result = await dispatcher.dispatch(name, arguments)
        return [types.TextContent(type="text", text=block.text) for block in result.content]

    return server


async def serve(settings: Settings) -> None:
    dispatcher = Dispatcher(MeetingBotClient(settings))
    server = create_server(dispatcher)
    logger.info(
        "Meeting Bot MCP Server running on stdio (API %s, %s)",
        settings.base_url,
        "authenticated" if settings.api_key else "unauthenticated",
    )
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    anyio.run(serve, settings)


# ─── Entry Point ─────────────────────────────────────────────────────────────

if __name__ == "__main__":
    main()
