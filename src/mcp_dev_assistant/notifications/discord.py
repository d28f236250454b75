"""Discord webhook delivery"""

import asyncio
import logging
from dataclasses import dataclass

import aiohttp

from ..error_handling import NotificationDeliveryError
from .models import DiscordEmbed

logger = logging.getLogger(__name__)


@dataclass
class DiscordNotifier:
    """Posts embeds to a single pre-configured Discord webhook.

    Each call opens its own session and makes exactly one request; there is
    no retry.
    """

    webhook_url: str
    timeout: float = 30.0

    async def send(self, embed: DiscordEmbed) -> None:
        """Deliver one embed.

        Raises:
            NotificationDeliveryError: On a non-2xx response, a connection
                failure or a timeout.
        """
        payload = {"embeds": [embed.model_dump()]}
        client_timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.post(self.webhook_url, json=payload) as response:
                    if not 200 <= response.status < 300:
                        raise NotificationDeliveryError(
                            f"Discord API error: {response.status} {response.reason}",
                            detail={"status": response.status, "reason": response.reason},
                        )
                    logger.debug(f"Discord webhook accepted embed ({response.status})")
        except aiohttp.ClientError as e:
            raise NotificationDeliveryError(
                f"Discord webhook unreachable: {e}",
                detail={"error": type(e).__name__},
            ) from e
        except asyncio.TimeoutError as e:
            raise NotificationDeliveryError(
                f"Discord webhook timed out after {self.timeout}s",
                detail={"error": "timeout", "timeout": self.timeout},
            ) from e
