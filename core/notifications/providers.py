"""
Notification providers and the registry that routes payloads to them.

A provider delivers an already-rendered message to a destination and
reports success as a bool. Transport failures (user blocked the bot, network
error) are ordinary failures and return False. Configuration problems
(no provider, unknown provider, provider not built yet) raise.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)


class NotificationConfigError(Exception):
    """Notifications cannot be sent because of how the process is set up."""


class NoProviderRegistered(NotificationConfigError):
    """No provider has been registered, so there is no default."""


class ProviderNotFound(NotificationConfigError):
    """The requested provider name is not registered."""


class ProviderNotImplemented(NotificationConfigError):
    """The provider is a placeholder and cannot deliver yet."""


@dataclass(frozen=True)
class NotificationPayload:
    """A rendered message for one destination. Not persisted."""

    user_id: str
    destination_id: str
    message: str


@runtime_checkable
class NotificationProvider(Protocol):
    name: str

    async def send(self, payload: NotificationPayload) -> bool: ...


class NotificationService:
    """
    Registry of notification providers with one default.

    Built once at startup and handed to whatever needs to send.
    """

    def __init__(self):
        self._providers: dict[str, NotificationProvider] = {}
        self._default: str | None = None

    def register_provider(
        self, provider: NotificationProvider, is_default: bool = False
    ) -> None:
        """
        Register a provider. The first provider registered becomes the
        default unless another one is registered with is_default=True.
        """
        self._providers[provider.name] = provider
        if is_default or self._default is None:
            self._default = provider.name
        logger.info(f"Registered notification provider: {provider.name}")

    @property
    def default_provider(self) -> str | None:
        return self._default

    def get_provider(self, name: str) -> NotificationProvider | None:
        return self._providers.get(name)

    def list_providers(self) -> list[str]:
        return list(self._providers)

    async def send(
        self, payload: NotificationPayload, provider_name: str | None = None
    ) -> bool:
        """
        Send a payload through the named provider, or the default one.

        Returns:
            True if delivered, False on an ordinary delivery failure

        Raises:
            NoProviderRegistered: No provider name given and no default exists
            ProviderNotFound: The named provider is not registered
            ProviderNotImplemented: The provider is a placeholder
        """
        name = provider_name or self._default
        if not name:
            raise NoProviderRegistered("No notification provider registered")

        provider = self._providers.get(name)
        if provider is None:
            raise ProviderNotFound(f'Provider "{name}" not found')

        return await provider.send(payload)
