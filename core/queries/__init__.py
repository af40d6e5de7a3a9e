"""Query layer for database operations using SQLAlchemy Core."""

from .users import (
    count_users,
    get_due_users,
    get_user_by_external_id,
    insert_user,
    update_next_due_if_cadence,
    update_user,
)

__all__ = [
    # Users
    "get_user_by_external_id",
    "insert_user",
    "update_user",
    "update_next_due_if_cadence",
    "get_due_users",
    "count_users",
]
