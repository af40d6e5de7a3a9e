"""Discord notification provider (DM channel messages)."""

import asyncio
import logging

from discord import Client

from core.notifications.providers import NotificationPayload

logger = logging.getLogger(__name__)

# Delay between two sends to avoid Discord throttling
SEND_DELAY_SECONDS = 1.0


class DiscordProvider:
    """
    Delivers reminders to a Discord channel, normally the user's DM channel.

    Rate-limited to ~1 message per second.
    """

    name = "discord"

    def __init__(self, bot: Client, send_delay: float = SEND_DELAY_SECONDS):
        self.bot = bot
        self.send_delay = send_delay
        self._semaphore = asyncio.Semaphore(1)

    async def send(self, payload: NotificationPayload) -> bool:
        """
        Send the payload message to its destination channel.

        Returns:
            True if sent successfully, False otherwise
        """
        try:
            async with self._semaphore:
                channel_id = int(payload.destination_id)
                channel = self.bot.get_channel(channel_id)
                if channel is None:
                    channel = await self.bot.fetch_channel(channel_id)
                await channel.send(payload.message)
                if self.send_delay:
                    await asyncio.sleep(self.send_delay)
            return True

        except Exception as e:
            logger.warning(
                f"Failed to send Discord message to {payload.destination_id} "
                f"for user {payload.user_id}: {e}"
            )
            return False
