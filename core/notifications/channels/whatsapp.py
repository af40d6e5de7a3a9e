"""WhatsApp notification provider (placeholder for the premium tier)."""

import logging

from core.notifications.providers import NotificationPayload, ProviderNotImplemented

logger = logging.getLogger(__name__)


class WhatsAppProvider:
    """
    Placeholder until a WhatsApp Business API integration exists.

    Every send raises ProviderNotImplemented so callers can tell a missing
    integration apart from a failed delivery.
    """

    name = "whatsapp"

    async def send(self, payload: NotificationPayload) -> bool:
        logger.info(
            f"WhatsApp placeholder asked to send to {payload.destination_id}"
        )
        raise ProviderNotImplemented("WhatsApp provider is not implemented yet")
