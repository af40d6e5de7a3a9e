"""Enum definitions shared by the schema, the scheduler and the bot."""

import enum

from sqlalchemy import Enum as SQLEnum


# =====================================================
# Python Enum Classes
# =====================================================


class Cadence(str, enum.Enum):
    daily = "daily"
    twice_weekly = "twice_weekly"
    weekly = "weekly"
    biweekly = "biweekly"
    monthly = "monthly"


DEFAULT_CADENCE = Cadence.weekly

CADENCE_LABELS: dict[Cadence, str] = {
    Cadence.daily: "Once a day",
    Cadence.twice_weekly: "Twice a week",
    Cadence.weekly: "Once a week",
    Cadence.biweekly: "Every two weeks",
    Cadence.monthly: "Once a month",
}


# =====================================================
# SQLAlchemy Enum Types
# Stored as plain text so SQLite and PostgreSQL share one schema
# =====================================================

cadence_enum = SQLEnum(Cadence, name="cadence", native_enum=False, length=20)
