"""Dev Assistant MCP server core components"""

from .handlers import CallToolHandler
from .tools import DevAssistantTools, ToolCategory, ToolDefinition, ToolRegistry, ToolRouter

__all__ = [
    "CallToolHandler",
    "DevAssistantTools",
    "ToolCategory",
    "ToolDefinition",
    "ToolRegistry",
    "ToolRouter",
]
