"""
MCP server wiring for the Dev Assistant.

Registers the tool listing and tool call handlers on a low-level MCP
``Server`` and runs it over stdio.
"""

import logging
from typing import Any, Dict, List

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from .config import WorkflowConfig
from .core.handlers import CallToolHandler
from .error_handling import ConfigurationError
from .workflows import WorkflowOrchestrator

logger = logging.getLogger(__name__)

SERVER_NAME = "dev-assistant"


def create_server(config: WorkflowConfig) -> Server:
    """Build the MCP server with its handlers bound to ``config``."""
    tool_handler = CallToolHandler(WorkflowOrchestrator(config))
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> List[Tool]:
        """Return available tools"""
        return tool_handler.registry.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        """Handle tool calls; failures come back as isError text results"""
        return await tool_handler.call_tool(name, arguments)

    return server


async def serve(config: WorkflowConfig, test_mode: bool = False) -> None:
    """Run the Dev Assistant MCP server on stdio."""
    logger.info("🚀 Starting Dev Assistant MCP server")
    logger.info(f"Project path: {config.working_directory}")

    try:
        config.validate()
        logger.info(f"✅ Using repository at {config.working_directory}")
    except ConfigurationError as e:
        # Tools report this again on first use
        logger.warning(f"Project check failed at startup: {e}")

    server = create_server(config)

    if test_mode:
        logger.info("🧪 Running in test mode - server built, stdio not attached")
        return

    options = server.create_initialization_options()
    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Dev Assistant MCP server running on stdio")
            await server.run(read_stream, write_stream, options)
    finally:
        logger.info("Dev Assistant MCP server shutting down.")
