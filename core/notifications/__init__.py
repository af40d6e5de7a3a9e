"""
Notification system: provider registry, delivery sweep and sweep timer.

Public API:
    NotificationService - registry of providers, send(payload, provider_name)
    run_sweep(notifications, catalog) - deliver to every due user once
    init_scheduler(...) / shutdown_scheduler() - run sweeps on an interval
    render_reminder(item) - render a sweet idea into a message body
"""

from .providers import (
    NoProviderRegistered,
    NotificationConfigError,
    NotificationPayload,
    NotificationProvider,
    NotificationService,
    ProviderNotFound,
    ProviderNotImplemented,
)
from .scheduler import (
    get_next_sweep_time,
    init_scheduler,
    shutdown_scheduler,
)
from .sweep import deliver_to_user, run_sweep
from .templates import render_reminder

__all__ = [
    # Providers
    "NotificationService",
    "NotificationProvider",
    "NotificationPayload",
    "NotificationConfigError",
    "NoProviderRegistered",
    "ProviderNotFound",
    "ProviderNotImplemented",
    # Sweep
    "run_sweep",
    "deliver_to_user",
    "render_reminder",
    # Scheduler
    "init_scheduler",
    "shutdown_scheduler",
    "get_next_sweep_time",
]
