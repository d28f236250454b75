"""Tool call handlers for the Dev Assistant MCP server"""

import logging
import os
import time
from typing import Any, Dict, List, Optional

from mcp.types import TextContent

from ..error_handling import ToolCallFailed
from ..results import OperationResult
from ..workflows import WorkflowOrchestrator
from .tools import DevAssistantTools, ToolHandler, ToolRegistry, ToolRouter

logger = logging.getLogger(__name__)


class CallToolHandler:
    """Binds the workflow operations to the registry and serves tool calls"""

    def __init__(self, orchestrator: WorkflowOrchestrator, registry: Optional[ToolRegistry] = None):
        self.orchestrator = orchestrator
        self.registry = registry or ToolRegistry()
        self.router = ToolRouter(self.registry)
        self._setup_handlers()

    def _setup_handlers(self):
        """Set up all tool handlers"""
        self.registry.initialize_default_tools()
        self.router.set_handlers(self._get_workflow_handlers())

    def _get_workflow_handlers(self) -> Dict[str, ToolHandler]:
        orchestrator = self.orchestrator
        return {
            DevAssistantTools.COMMIT_AND_PUSH.value: orchestrator.commit_and_push,
            DevAssistantTools.SEND_DISCORD_NOTIFICATION.value: orchestrator.send_notification,
            DevAssistantTools.FULL_WORKFLOW.value: orchestrator.full_workflow,
            DevAssistantTools.ANALYZE_CHANGES.value: orchestrator.analyze_changes,
            DevAssistantTools.VALIDATE_PROJECT.value: orchestrator.validate_project,
        }

    async def execute(self, name: str, arguments: Optional[Dict[str, Any]]) -> OperationResult:
        """Run a tool call and return its result, with timing and logging"""
        request_id = os.urandom(4).hex()
        context = {"request_id": request_id, "tool": name}
        logger.info(f"🔧 Tool call: {name}", extra=context)
        logger.debug(f"🔧 Arguments: {arguments}", extra=context)

        start_time = time.time()
        result = await self.router.route_tool_call(name, arguments)
        duration_ms = round((time.time() - start_time) * 1000, 1)

        if result.succeeded:
            logger.info(f"✅ Tool '{name}' completed", extra={**context, "duration_ms": duration_ms})
        else:
            logger.warning(f"❌ Tool '{name}' failed: {result.text}", extra={**context, "duration_ms": duration_ms})
        return result

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        """MCP entry point: render the operation result as text content.

        Raises:
            ToolCallFailed: If the operation failed, so the client receives
                the same text flagged with ``isError``.
        """
        result = await self.execute(name, arguments)
        if not result.succeeded:
            raise ToolCallFailed(result.text)
        return result.to_text_content()
