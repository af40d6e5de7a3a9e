"""
Something Sweet - Discord Bot
Main entry point for the bot.

The bot registers users, lets them choose a reminder frequency and answers
their commands. Scheduled reminders are sent by the sweep in core/.
"""

import asyncio
import logging

import discord
from discord.ext import commands
from dotenv import load_dotenv

from core.config import ConfigError, get_bot_token
from core.database import close_engine, create_tables

logger = logging.getLogger(__name__)


def create_bot() -> commands.Bot:
    """Create and configure the bot instance."""
    intents = discord.Intents.default()
    intents.message_content = True  # Required to answer unknown commands in DMs

    bot = commands.Bot(command_prefix="!", intents=intents, help_command=None)
    return bot


bot = create_bot()


# List of cogs to load (thin adapters, business logic in core/)
COGS = [
    "discord_bot.cogs.reminders_cog",
]


@bot.tree.error
async def on_app_command_error(interaction: discord.Interaction, error: discord.app_commands.AppCommandError):
    """
    Global error handler for slash commands.

    The only error path for commands: logs the failure and sends the user
    one generic apology.
    """
    command = interaction.command.name if interaction.command else "unknown"
    logger.error(f"Error in /{command}: {error}", exc_info=error)
    msg = "Something went wrong. Please try again later."
    if interaction.response.is_done():
        await interaction.followup.send(msg, ephemeral=True)
    else:
        await interaction.response.send_message(msg, ephemeral=True)


@bot.event
async def on_ready():
    """Called when the bot is ready and connected to Discord."""
    print(f"Bot is ready! Logged in as {bot.user}")

    # Load all cogs
    for cog in COGS:
        try:
            if cog not in bot.extensions:
                await bot.load_extension(cog)
                print(f"  ✓ Loaded {cog}")
            else:
                print(f"  - {cog} already loaded")
        except Exception as e:
            import traceback
            print(f"  ✗ Error loading {cog}: {e}")
            traceback.print_exc()

    # Sync slash commands with Discord
    try:
        synced = await bot.tree.sync()
        print(f"\nSynced {len(synced)} command(s):")
        for cmd in bot.tree.get_commands():
            print(f"  /{cmd.name}")
    except Exception as e:
        import traceback
        print(f"Error syncing commands: {e}")
        traceback.print_exc()


async def run_bot(token: str):
    """Create missing tables, then run the bot until it disconnects."""
    await create_tables()
    try:
        async with bot:
            await bot.start(token)
    finally:
        await close_engine()


def main():
    """Run the bot on its own, without the sweep or the web API."""
    load_dotenv()

    try:
        token = get_bot_token()
    except ConfigError as e:
        print(f"Error: {e}")
        exit(1)

    asyncio.run(run_bot(token))


if __name__ == "__main__":
    main()
