"""Delivery channels that implement the NotificationProvider protocol."""

from .discord import DiscordProvider
from .whatsapp import WhatsAppProvider

__all__ = ["DiscordProvider", "WhatsAppProvider"]
