"""User-related database queries using SQLAlchemy Core."""

from datetime import datetime
from typing import Any

from sqlalchemy import func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from ..enums import Cadence
from ..tables import users


async def get_user_by_external_id(
    conn: AsyncConnection,
    external_id: str,
) -> dict[str, Any] | None:
    """Get a user by their chat platform ID."""
    result = await conn.execute(
        select(users).where(users.c.external_id == external_id)
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def insert_user(
    conn: AsyncConnection,
    external_id: str,
    destination_id: str,
    cadence: Cadence,
    next_due_at: datetime,
    now: datetime,
) -> dict[str, Any]:
    """Create a new user and return the created record."""
    result = await conn.execute(
        insert(users)
        .values(
            external_id=external_id,
            destination_id=destination_id,
            cadence=cadence,
            next_due_at=next_due_at,
            is_paused=False,
            created_at=now,
            updated_at=now,
        )
        .returning(users)
    )
    return dict(result.mappings().one())


async def update_user(
    conn: AsyncConnection,
    external_id: str,
    now: datetime,
    **updates: Any,
) -> dict[str, Any] | None:
    """Update a user by external ID and return the updated record."""
    result = await conn.execute(
        update(users)
        .where(users.c.external_id == external_id)
        .values(updated_at=now, **updates)
        .returning(users)
    )
    row = result.mappings().first()
    return dict(row) if row else None


async def update_next_due_if_cadence(
    conn: AsyncConnection,
    external_id: str,
    expected_cadence: Cadence,
    next_due_at: datetime,
    now: datetime,
) -> bool:
    """
    Set next_due_at only if the user's cadence is still `expected_cadence`.

    Returns False when the row changed cadence underneath us (or vanished).
    """
    result = await conn.execute(
        update(users)
        .where(users.c.external_id == external_id)
        .where(users.c.cadence == expected_cadence)
        .values(next_due_at=next_due_at, updated_at=now)
    )
    return result.rowcount > 0


async def get_due_users(
    conn: AsyncConnection,
    as_of: datetime,
) -> list[dict[str, Any]]:
    """Get every non-paused user whose next_due_at is at or before `as_of`."""
    result = await conn.execute(
        select(users)
        .where(users.c.next_due_at.isnot(None))
        .where(users.c.next_due_at <= as_of)
        .where(users.c.is_paused.is_(False))
    )
    return [dict(row) for row in result.mappings()]


async def count_users(conn: AsyncConnection) -> dict[str, int]:
    """Count total and paused users."""
    result = await conn.execute(
        select(users.c.is_paused, func.count().label("n")).group_by(users.c.is_paused)
    )
    counts = {"total": 0, "active": 0, "paused": 0}
    for row in result.mappings():
        key = "paused" if row["is_paused"] else "active"
        counts[key] += row["n"]
        counts["total"] += row["n"]
    return counts
