"""Pydantic models for Discord notifications"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

# Discord embed colours
SUCCESS_COLOR = 5763719  # green
WORKFLOW_COLOR = 3447003  # blue
DANGER_COLOR = 15158332  # red

EMBED_TITLE = "🚀 Development Update"
EMBED_FOOTER = "Dev Assistant MCP"


def utc_timestamp() -> str:
    """Current UTC time as ISO 8601 with millisecond precision"""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


class EmbedFooter(BaseModel):
    text: str = EMBED_FOOTER


class DiscordEmbed(BaseModel):
    """A single Discord embed as accepted by the webhook API"""

    title: str = EMBED_TITLE
    description: str
    color: int = SUCCESS_COLOR
    timestamp: str = Field(default_factory=utc_timestamp)
    footer: EmbedFooter = Field(default_factory=EmbedFooter)


class SendDiscordNotification(BaseModel):
    message: str = Field(description="Message to send to Discord")
    color: int = Field(
        default=SUCCESS_COLOR,
        description="Embed color (optional, defaults to green for success)",
    )
