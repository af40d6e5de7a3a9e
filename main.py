"""
Unified backend entry point.

Architecture:
- One Python process, one asyncio event loop
- Three peer services running concurrently:
  1. FastAPI (HTTP health/status endpoints)
  2. Discord bot (WebSocket connection to Discord, slash commands)
  3. Sweep scheduler (sends due reminders every SWEEP_INTERVAL_MINUTES)

We use FastAPI's lifespan to manage startup/shutdown, but at runtime
all services are equal peers in the event loop. The lifespan pattern
gives us uvicorn's signal handling for free.

Run with: python main.py [--no-bot] [--port PORT]
"""

import asyncio
import logging
import os
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv

# Load .env.local first (if exists), then .env as fallback
# .env.local is gitignored and used for local dev overrides
load_dotenv(project_root / ".env.local")  # Local overrides (gitignored)
load_dotenv()  # Fallback to .env

import sentry_sdk
from fastapi import FastAPI
from pydantic import BaseModel

from core import close_engine, create_tables, get_catalog, get_user_stats
from core.config import (
    check_required_env_vars,
    get_bot_token,
    get_reminder_timezone,
    get_storage_backend,
    get_sweep_interval_minutes,
    is_production,
)
from core.notifications import (
    NotificationService,
    get_next_sweep_time,
    init_scheduler,
    shutdown_scheduler,
)
from core.notifications.channels import DiscordProvider, WhatsAppProvider

# Import bot from discord_bot module
from discord_bot.main import bot

logger = logging.getLogger(__name__)

# Track bot task for cleanup
_bot_task: asyncio.Task | None = None


def bot_disabled() -> bool:
    return os.getenv("DISABLE_DISCORD_BOT", "").lower() in ("true", "1", "yes")


def init_sentry() -> None:
    """Enable error reporting when SENTRY_DSN is configured."""
    dsn = os.environ.get("SENTRY_DSN")
    if not dsn:
        return
    sentry_sdk.init(
        dsn=dsn,
        environment="production" if is_production() else "development",
        traces_sample_rate=0.0,
    )
    print("Sentry error reporting enabled")


def build_notification_service() -> NotificationService:
    """Register every provider. Discord is the default."""
    notifications = NotificationService()
    notifications.register_provider(DiscordProvider(bot), is_default=True)
    notifications.register_provider(WhatsAppProvider())
    return notifications


async def start_bot(token: str):
    """
    Start Discord bot (non-blocking).

    Uses bot.start() instead of bot.run() so it can run
    alongside FastAPI in the same event loop.
    """
    try:
        await bot.start(token)
    except Exception as e:
        print(f"Discord bot error: {e}")
        raise


async def stop_bot():
    """Stop Discord bot gracefully."""
    if bot and not bot.is_closed():
        await bot.close()
        print("Discord bot stopped")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    FastAPI lifespan context manager.

    Validates configuration, then starts the Discord bot and the sweep
    scheduler as peers of the web server. Configuration errors abort startup.
    """
    global _bot_task

    ok, warnings = check_required_env_vars()
    for warning in warnings:
        print(warning)
    if not ok:
        raise RuntimeError("Missing required environment variables")

    # Fail fast on bad configuration before touching Discord
    catalog = get_catalog()
    interval_minutes = get_sweep_interval_minutes()
    reminder_tz = get_reminder_timezone()
    print(f"Loaded {len(catalog)} sweet ideas across {len(catalog.categories())} categories")

    print(f"Preparing database ({get_storage_backend()})...")
    await create_tables()

    if bot_disabled():
        print("Discord bot disabled (--no-bot flag or DISABLE_DISCORD_BOT=true)")
        print("  └─ Sweeps are disabled too: there is no provider to deliver with")
    else:
        token = get_bot_token()
        notifications = build_notification_service()

        async def start_sweeps():
            # First sweep runs as soon as Discord is connected
            init_scheduler(notifications, catalog, interval_minutes)

        bot.add_listener(start_sweeps, "on_ready")
        print(
            f"Sweeps every {interval_minutes} minutes, "
            f"reminders between 08:00 and 20:00 {reminder_tz.key}"
        )

        print("Starting Discord bot...")
        _bot_task = asyncio.create_task(start_bot(token))

    yield  # FastAPI runs here, bot and scheduler run alongside it

    # Graceful shutdown of all peer services
    print("Shutting down peer services...")
    shutdown_scheduler()
    if _bot_task:
        await stop_bot()
    await close_engine()  # Close database connections
    if _bot_task:
        _bot_task.cancel()
        try:
            await _bot_task
        except asyncio.CancelledError:
            pass


# Create FastAPI app with lifespan
app = FastAPI(
    title="Something Sweet",
    lifespan=lifespan,
)


@app.get("/")
async def root():
    """API status."""
    return {
        "status": "ok",
        "bot_ready": bot.is_ready() if bot else False,
    }


@app.get("/api/status")
async def api_status():
    """API status endpoint."""
    return {
        "status": "ok",
        "bot_ready": bot.is_ready() if bot else False,
    }


class UserStats(BaseModel):
    """Registered user counts."""

    total: int
    active: int
    paused: int


class HealthResponse(BaseModel):
    """Schema for the /health endpoint."""

    status: str
    bot_connected: bool
    bot_latency_ms: int | None = None
    next_sweep_at: datetime | None = None
    users: UserStats


@app.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint with detailed status."""
    connected = bot.is_ready() if bot else False
    return HealthResponse(
        status="healthy",
        bot_connected=connected,
        bot_latency_ms=round(bot.latency * 1000) if connected else None,
        next_sweep_at=get_next_sweep_time(),
        users=UserStats(**await get_user_stats()),
    )


if __name__ == "__main__":
    import argparse
    import uvicorn

    parser = argparse.ArgumentParser(description="Something Sweet reminder bot")
    parser.add_argument(
        "--no-bot",
        action="store_true",
        help="Disable Discord bot and sweeps (useful for working on the API)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("API_PORT", "8000")),
        help="Port to run the server on (default: 8000)",
    )
    args = parser.parse_args()

    # Set env var so it persists across uvicorn reloads
    if args.no_bot:
        os.environ["DISABLE_DISCORD_BOT"] = "true"

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    init_sentry()

    # Run with uvicorn
    # Pass app object directly (not string) to avoid module reimport issues
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=args.port,
    )
