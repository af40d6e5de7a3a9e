"""
Core business logic - platform-agnostic.
Can be used by the Discord bot, the web API, or any other interface.
"""

# Database (SQLAlchemy)
from .database import get_connection, get_transaction, get_engine, close_engine, create_tables

# Enums
from .enums import Cadence, CADENCE_LABELS, DEFAULT_CADENCE

# Scheduling
from .schedule import next_due, describe_next_due

# Catalog
from .catalog import Catalog, CatalogItem, CatalogError, EmptyCatalogError, load_catalog, get_catalog

# User directory (async functions - must be awaited)
from .users import (
    User,
    find_by_external_id, create_user, update_cadence,
    pause_user, resume_user, find_due_users, record_successful_delivery,
    get_user_stats,
)

__all__ = [
    # Database (SQLAlchemy)
    'get_connection', 'get_transaction', 'get_engine', 'close_engine', 'create_tables',
    # Enums
    'Cadence', 'CADENCE_LABELS', 'DEFAULT_CADENCE',
    # Scheduling
    'next_due', 'describe_next_due',
    # Catalog
    'Catalog', 'CatalogItem', 'CatalogError', 'EmptyCatalogError', 'load_catalog', 'get_catalog',
    # Users
    'User',
    'find_by_external_id', 'create_user', 'update_cadence',
    'pause_user', 'resume_user', 'find_due_users', 'record_successful_delivery',
    'get_user_stats',
]
