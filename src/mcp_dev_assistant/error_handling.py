"""Error taxonomy for the Dev Assistant MCP server.

Every failure raised inside the server is one of the variants below. Each
carries a human-readable message and a structured ``detail`` payload; the
conversion to text happens once, at the tool dispatch boundary
(:class:`mcp_dev_assistant.core.tools.ToolRouter`).
"""

from typing import Any, Dict, Optional


class DevAssistantError(Exception):
    """Base class for all errors raised by the server."""

    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(DevAssistantError):
    """Missing or invalid workflow configuration.

    Fatal at startup (missing webhook) or at first validated use (bad
    working directory).
    """


class UnknownOperationError(DevAssistantError):
    """The requested tool name is not registered."""


class ValidationError(DevAssistantError):
    """Tool arguments do not satisfy the tool's input schema."""


class BackendExecutionError(DevAssistantError):
    """A git command returned a failure status."""


class NotificationDeliveryError(DevAssistantError):
    """The Discord webhook rejected the message or could not be reached."""


class ToolCallFailed(DevAssistantError):
    """Carries a failed tool result's text to the MCP transport.

    The low-level server answers a handler that raises with an ``isError``
    result whose only content is ``str(error)``.
    """
