"""Discord notifications for the Dev Assistant server"""

from .discord import DiscordNotifier
from .models import (
    DANGER_COLOR,
    SUCCESS_COLOR,
    WORKFLOW_COLOR,
    DiscordEmbed,
    EmbedFooter,
    SendDiscordNotification,
)

__all__ = [
    "DiscordNotifier",
    "DiscordEmbed",
    "EmbedFooter",
    "SendDiscordNotification",
    "SUCCESS_COLOR",
    "WORKFLOW_COLOR",
    "DANGER_COLOR",
]
