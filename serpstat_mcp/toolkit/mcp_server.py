"""MCP Server for Serpstat SEO tools.

This module provides an MCP (Model Context Protocol) server that exposes
the Serpstat tools to MCP clients over stdio.

Usage:
    # Run the MCP server directly
    python -m serpstat_mcp.toolkit.mcp_server

    # Or register it with an MCP client:
    {
        "mcpServers": {
            "serpstat": {
                "command": "serpstat-mcp",
                "env": {"SERPSTAT_API_TOKEN": "<token>"}
            }
        }
    }
"""

import asyncio
import json
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from ..config import get_settings
from ..utils.logger import get_logger, setup_logger
from .executor import execute_tool
from .tools import TOOLS

SERVER_NAME = "serpstat-mcp"

logger = get_logger(__name__)


def create_mcp_server() -> Server:
    """Create and configure the MCP server."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """List all available tools."""
        tools = []
        for tool_def in TOOLS:
            tools.append(Tool(
                name=tool_def["name"],
                description=tool_def["description"],
                inputSchema=tool_def["input_schema"]
            ))
        return tools

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        """Execute a tool call."""
        # Run the synchronous executor in a thread pool
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, execute_tool, name, arguments)

        return [TextContent(
            type="text",
            text=json.dumps(result, indent=2, default=str, ensure_ascii=False)
        )]

    return server


async def main():
    """Run the MCP server."""
    settings = get_settings()
    setup_logger(level=settings.log_level, log_file=settings.log_file)
    if not settings.serpstat_api_token:
        logger.warning("SERPSTAT_API_TOKEN is not set; tool calls will fail")

    server = create_mcp_server()
    logger.info("Starting %s with %d tools", SERVER_NAME, len(TOOLS))

    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options()
        )


def run():
    """Console-script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
