"""
Delivery sweep: send a sweet idea to every user who is due.

A sweep snapshots the due users at its start time and handles each one in
isolation. A user's schedule only moves forward after a successful delivery,
so anyone whose delivery failed is picked up again by the next sweep.
"""

import logging
import random
from datetime import datetime, timezone

import sentry_sdk

from core.catalog import Catalog
from core.notifications.providers import (
    NotificationConfigError,
    NotificationPayload,
    NotificationService,
)
from core.notifications.templates import render_reminder
from core.users import User, find_due_users, record_successful_delivery

logger = logging.getLogger(__name__)


async def deliver_to_user(
    user: User,
    notifications: NotificationService,
    catalog: Catalog,
    rng: random.Random | None = None,
) -> bool:
    """
    Send one reminder to one user and advance their schedule on success.

    Returns:
        True if the reminder was delivered and the schedule updated
    """
    idea = catalog.sample()
    payload = NotificationPayload(
        user_id=user.external_id,
        destination_id=user.destination_id,
        message=render_reminder(idea),
    )

    if not await notifications.send(payload):
        logger.warning(f"Failed to send notification to user {user.external_id}")
        return False

    await record_successful_delivery(
        user.external_id, datetime.now(timezone.utc), rng=rng
    )
    logger.info(f"Sent idea {idea.id} to user {user.external_id}")
    return True


async def run_sweep(
    notifications: NotificationService,
    catalog: Catalog,
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> int:
    """
    Deliver to every user due at `now`.

    Users that become due while the sweep runs wait for the next one.

    Returns:
        Number of successful deliveries
    """
    now = now or datetime.now(timezone.utc)
    users = await find_due_users(now)
    logger.info(f"Found {len(users)} users due for notification")

    sent_count = 0
    for user in users:
        try:
            if await deliver_to_user(user, notifications, catalog, rng=rng):
                sent_count += 1
        except NotificationConfigError as e:
            # Not transient: retrying next sweep won't help until config changes
            logger.error(
                f"Notification configuration problem for user {user.external_id}: {e}"
            )
            sentry_sdk.capture_exception(e)
        except Exception as e:
            logger.exception(f"Error processing user {user.external_id}: {e}")
            sentry_sdk.capture_exception(e)

    logger.info(f"Sweep complete. Sent {sent_count}/{len(users)} notifications")
    return sent_count
