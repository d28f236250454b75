"""Tool registry and routing system for the Dev Assistant MCP server"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp.types import Tool
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..error_handling import ConfigurationError, UnknownOperationError, ValidationError
from ..results import OperationResult

logger = logging.getLogger(__name__)

ToolHandler = Callable[..., Awaitable[OperationResult]]


class DevAssistantTools(str, Enum):
    """Enumeration of all available tools"""
    COMMIT_AND_PUSH = "commit_and_push"
    SEND_DISCORD_NOTIFICATION = "send_discord_notification"
    FULL_WORKFLOW = "full_workflow"
    ANALYZE_CHANGES = "analyze_changes"
    VALIDATE_PROJECT = "validate_project"


class ToolCategory(str, Enum):
    """Tool categories for organization"""
    GIT = "git"
    NOTIFICATION = "notification"
    WORKFLOW = "workflow"


@dataclass
class ToolDefinition:
    """Complete tool definition with metadata"""
    name: str
    category: ToolCategory
    description: str
    schema: Type[BaseModel]
    handler: Optional[ToolHandler] = None

    def validate_arguments(self, arguments: Optional[Dict[str, Any]]) -> BaseModel:
        """Validate raw arguments against the schema, filling in defaults.

        Raises:
            ValidationError: If a required argument is missing or mistyped.
        """
        try:
            return self.schema.model_validate(arguments or {})
        except PydanticValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc']) or 'arguments'}: {err['msg']}"
                for err in e.errors()
            )
            raise ValidationError(
                f"Invalid arguments for {self.name}: {problems}",
                detail={"tool": self.name, "errors": e.errors(include_url=False)},
            ) from e


class ToolRegistry:
    """Central registry of the server's tools"""

    def __init__(self):
        self.tools: Dict[str, ToolDefinition] = {}
        self._initialized = False

    def register(self, tool_def: ToolDefinition):
        """Register a tool in the registry"""
        self.tools[tool_def.name] = tool_def
        logger.debug(f"Registered tool: {tool_def.name} ({tool_def.category.value})")

    def get_tool(self, name: str) -> Optional[ToolDefinition]:
        """Get tool definition by name"""
        return self.tools.get(name)

    def list_tools(self) -> List[Tool]:
        """Get all tools as MCP Tool objects"""
        return [
            Tool(
                name=tool_def.name,
                description=tool_def.description,
                inputSchema=tool_def.schema.model_json_schema(),
            )
            for tool_def in self.tools.values()
        ]

    def get_tools_by_category(self, category: ToolCategory) -> List[ToolDefinition]:
        """Get all tools in a specific category"""
        return [
            tool_def for tool_def in self.tools.values()
            if tool_def.category == category
        ]

    def initialize_default_tools(self):
        """Register the default tool definitions, without handlers"""
        if self._initialized:
            return

        from ..git.models import AnalyzeChanges, CommitAndPush, FullWorkflow, ValidateProject
        from ..notifications.models import SendDiscordNotification

        default_tools = [
            ToolDefinition(
                name=DevAssistantTools.COMMIT_AND_PUSH.value,
                category=ToolCategory.GIT,
                description="Add, commit, and push changes with a generated commit message",
                schema=CommitAndPush,
            ),
            ToolDefinition(
                name=DevAssistantTools.SEND_DISCORD_NOTIFICATION.value,
                category=ToolCategory.NOTIFICATION,
                description="Send a notification to Discord channel",
                schema=SendDiscordNotification,
            ),
            ToolDefinition(
                name=DevAssistantTools.FULL_WORKFLOW.value,
                category=ToolCategory.WORKFLOW,
                description="Complete workflow: commit & push, and notify Discord",
                schema=FullWorkflow,
            ),
            ToolDefinition(
                name=DevAssistantTools.ANALYZE_CHANGES.value,
                category=ToolCategory.GIT,
                description="Summarize pending changes in the project with a diff preview",
                schema=AnalyzeChanges,
            ),
            ToolDefinition(
                name=DevAssistantTools.VALIDATE_PROJECT.value,
                category=ToolCategory.WORKFLOW,
                description="Verify the configured project path is an existing git repository",
                schema=ValidateProject,
            ),
        ]

        for tool in default_tools:
            self.register(tool)

        self._initialized = True
        logger.info(f"Initialized tool registry with {len(self.tools)} tools")


class ToolRouter:
    """Dispatches tool calls to their handlers.

    ``route_tool_call`` never raises: every failure, whatever its type, is
    turned into a failed :class:`OperationResult`.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry
        self._handlers_initialized = False

    def set_handlers(self, handlers: Dict[str, ToolHandler]):
        """Bind handlers to registered tools"""
        for tool_name, handler in handlers.items():
            if tool_name in self.registry.tools:
                self.registry.tools[tool_name].handler = handler
            else:
                logger.warning(f"Ignoring handler for unregistered tool: {tool_name}")

        self._handlers_initialized = True
        logger.info("Tool handlers initialized")

    async def _dispatch(self, name: str, arguments: Optional[Dict[str, Any]]) -> OperationResult:
        tool_def = self.registry.get_tool(name)
        if tool_def is None:
            raise UnknownOperationError(f"Unknown tool: {name}", detail={"tool": name})

        if not self._handlers_initialized or tool_def.handler is None:
            raise ConfigurationError(
                f"No handler bound for tool: {name}", detail={"tool": name}
            )

        params = tool_def.validate_arguments(arguments)
        return await tool_def.handler(**params.model_dump())

    async def route_tool_call(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> OperationResult:
        """Route a tool call to the appropriate handler"""
        try:
            return await self._dispatch(name, arguments)
        except Exception as e:
            logger.error(f"Tool call failed for {name}: {e}", exc_info=True)
            return OperationResult.failure(f"Error executing tool {name}: {e}")
