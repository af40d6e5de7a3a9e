"""
User directory: registration and reminder settings.

All functions are async and use the database. Every mutation runs in its
own transaction and is committed before the function returns. Functions
keyed by external ID return None when the user is not registered.
"""

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from .config import get_reminder_timezone
from .database import get_connection, get_transaction
from .enums import DEFAULT_CADENCE, Cadence
from .queries import users as user_queries
from .schedule import next_due

logger = logging.getLogger(__name__)

# Attempts at recomputing a schedule while the cadence keeps changing under us
MAX_RESCHEDULE_ATTEMPTS = 3


@dataclass(frozen=True)
class User:
    id: int
    external_id: str
    destination_id: str
    cadence: Cadence
    next_due_at: datetime | None
    is_paused: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            id=row["id"],
            external_id=row["external_id"],
            destination_id=row["destination_id"],
            cadence=Cadence(row["cadence"]),
            next_due_at=row["next_due_at"],
            is_paused=bool(row["is_paused"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def is_due(self, as_of: datetime) -> bool:
        return (
            not self.is_paused
            and self.next_due_at is not None
            and self.next_due_at <= as_of
        )


def _local(moment: datetime | None) -> datetime:
    """Express `moment` (default: now) in the reminder timezone."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    return moment.astimezone(get_reminder_timezone())


def _to_user(row: dict[str, Any] | None) -> User | None:
    return User.from_row(row) if row else None


async def find_by_external_id(external_id: str) -> User | None:
    """Look up a user by chat platform ID. No side effects."""
    async with get_connection() as conn:
        return _to_user(await user_queries.get_user_by_external_id(conn, external_id))


async def create_user(
    external_id: str,
    destination_id: str,
    cadence: Cadence = DEFAULT_CADENCE,
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> User:
    """
    Register a new user with a freshly calculated first reminder.

    Callers check find_by_external_id() first; registering the same
    external ID twice violates the unique constraint.
    """
    now = _local(now)
    cadence = Cadence(cadence)

    async with get_transaction() as conn:
        row = await user_queries.insert_user(
            conn,
            external_id=external_id,
            destination_id=destination_id,
            cadence=cadence,
            next_due_at=next_due(cadence, now, rng),
            now=now,
        )

    logger.info(f"Registered user {external_id} with cadence {cadence.value}")
    return User.from_row(row)


async def update_cadence(
    external_id: str,
    cadence: Cadence,
    *,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> User | None:
    """Change a user's cadence and reschedule their next reminder from now."""
    now = _local(now)
    cadence = Cadence(cadence)

    async with get_transaction() as conn:
        row = await user_queries.update_user(
            conn,
            external_id,
            now,
            cadence=cadence,
            next_due_at=next_due(cadence, now, rng),
        )
    return _to_user(row)


async def pause_user(external_id: str, *, now: datetime | None = None) -> User | None:
    """Stop reminders. The pending due time is kept."""
    async with get_transaction() as conn:
        row = await user_queries.update_user(conn, external_id, _local(now), is_paused=True)
    return _to_user(row)


async def resume_user(external_id: str, *, now: datetime | None = None) -> User | None:
    """Restart reminders. The user becomes due immediately."""
    now = _local(now)
    async with get_transaction() as conn:
        row = await user_queries.update_user(
            conn, external_id, now, is_paused=False, next_due_at=now
        )
    return _to_user(row)


async def find_due_users(as_of: datetime) -> list[User]:
    """Every non-paused user whose next reminder is at or before `as_of`."""
    async with get_connection() as conn:
        rows = await user_queries.get_due_users(conn, as_of)
    return [User.from_row(row) for row in rows]


async def record_successful_delivery(
    external_id: str,
    delivered_at: datetime,
    *,
    rng: random.Random | None = None,
) -> None:
    """
    Schedule the next reminder after a delivery went through.

    Always recomputes forward from `delivered_at` with the user's current
    cadence. Pause state is not checked. The update only applies if the
    cadence is unchanged since it was read, so a concurrent cadence change
    wins and is not overwritten with a schedule for the old cadence.
    """
    delivered_at = _local(delivered_at)

    for _ in range(MAX_RESCHEDULE_ATTEMPTS):
        async with get_transaction() as conn:
            row = await user_queries.get_user_by_external_id(conn, external_id)
            if not row:
                logger.warning(f"User {external_id} vanished before rescheduling")
                return

            cadence = Cadence(row["cadence"])
            updated = await user_queries.update_next_due_if_cadence(
                conn,
                external_id,
                expected_cadence=cadence,
                next_due_at=next_due(cadence, delivered_at, rng),
                now=datetime.now(timezone.utc),
            )
        if updated:
            return

    logger.warning(
        f"Could not reschedule user {external_id}: cadence kept changing, "
        f"leaving the schedule set by the latest cadence change"
    )


async def get_user_stats() -> dict[str, int]:
    """Counts of total, active and paused users."""
    async with get_connection() as conn:
        return await user_queries.count_users(conn)
