"""
Centralized configuration for the Something Sweet bot.

All settings come from environment variables (loaded from .env.local/.env by
the entry points) so the same code runs locally and on Railway.
"""

import os
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

project_root = Path(__file__).parent.parent

STORAGE_BACKENDS = ("sqlite", "postgres")

DEFAULT_SWEEP_INTERVAL_MINUTES = 60
DEFAULT_SQLITE_PATH = project_root / "data" / "something-sweet.db"


class ConfigError(Exception):
    """Raised when the process is misconfigured. Fatal at startup."""


def is_dev_mode() -> bool:
    """Check if running in development mode (--dev flag or DEV_MODE env)."""
    return os.getenv("DEV_MODE", "").lower() in ("true", "1", "yes")


def is_production() -> bool:
    """Check if running on Railway (production environment)."""
    return bool(os.environ.get("RAILWAY_ENVIRONMENT"))


def get_api_port() -> int:
    """Get API server port from env or default."""
    return int(os.getenv("API_PORT", "8000"))


def get_bot_token() -> str:
    """Discord bot token. Missing token is a fatal startup error."""
    token = os.environ.get("DISCORD_BOT_TOKEN")
    if not token:
        raise ConfigError(
            "DISCORD_BOT_TOKEN environment variable is required. "
            "Create a bot in the Discord developer portal and put its token in .env"
        )
    return token


def get_storage_backend() -> str:
    """
    Which storage backend to use.

    Defaults to PostgreSQL in production and the embedded SQLite file
    everywhere else.
    """
    backend = os.environ.get("STORAGE_BACKEND", "").strip().lower()
    if not backend:
        return "postgres" if is_production() else "sqlite"
    if backend not in STORAGE_BACKENDS:
        raise ConfigError(
            f"STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, got {backend!r}"
        )
    return backend


def get_sqlite_path() -> Path:
    """SQLite database file for the development backend."""
    return Path(os.environ.get("SQLITE_PATH", DEFAULT_SQLITE_PATH))


def get_sweep_interval_minutes() -> int:
    """Minutes between two delivery sweeps."""
    raw = os.environ.get("SWEEP_INTERVAL_MINUTES", str(DEFAULT_SWEEP_INTERVAL_MINUTES))
    try:
        minutes = int(raw)
    except ValueError:
        raise ConfigError(f"SWEEP_INTERVAL_MINUTES must be an integer, got {raw!r}")
    if minutes <= 0:
        raise ConfigError("SWEEP_INTERVAL_MINUTES must be positive")
    return minutes


def get_reminder_timezone() -> ZoneInfo:
    """Timezone in which the 08:00-20:00 reminder window is applied."""
    name = os.environ.get("REMINDER_TIMEZONE", "UTC")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigError(f"Unknown REMINDER_TIMEZONE: {name!r}")


def get_catalog_path() -> Path | None:
    """Optional override for the sweet ideas catalog file."""
    path = os.environ.get("CATALOG_PATH")
    return Path(path) if path else None


# Required environment variables for production
# Format: (name, description, required_in_dev)
REQUIRED_ENV_VARS = [
    ("DISCORD_BOT_TOKEN", "Discord bot token", True),
    ("DATABASE_URL", "PostgreSQL connection string", False),
]

# Variables only needed by one storage backend
BACKEND_ENV_VARS = {
    "DATABASE_URL": "postgres",
}


def check_required_env_vars() -> tuple[bool, list[str]]:
    """
    Check that required environment variables are set.

    Returns:
        (all_ok, warnings): Tuple of success flag and list of warning messages
    """
    warnings = []
    errors = []
    in_dev = is_dev_mode()

    for name, description, required_in_dev in REQUIRED_ENV_VARS:
        if name in BACKEND_ENV_VARS and BACKEND_ENV_VARS[name] != get_storage_backend():
            continue
        value = os.environ.get(name)

        if not value:
            if is_production():
                errors.append(f"  ✗ {name}: Not set ({description})")
            elif required_in_dev or not in_dev:
                warnings.append(f"  ⚠ {name}: Not set ({description})")

    if errors:
        for error in errors:
            print(error)
        return False, warnings

    return True, warnings
