"""
Reminders Cog - Discord adapter for registration and reminder settings.

Thin layer over core/: every command looks the user up by Discord ID and
calls into the user directory. Unregistered users are pointed to /start.
"""

import logging
from datetime import datetime, timezone

import discord
from discord import app_commands
from discord.ext import commands
from discord.utils import format_dt

from core import (
    CADENCE_LABELS,
    Cadence,
    Catalog,
    create_user,
    describe_next_due,
    find_by_external_id,
    get_catalog,
    pause_user,
    resume_user,
    update_cadence,
)
from core.notifications import render_reminder

logger = logging.getLogger(__name__)

NOT_REGISTERED = "Please use /start first to register."
GENERIC_ERROR = "Something went wrong. Please try again later."
UNKNOWN_COMMAND = "Unknown command. Use /help to see available commands."
NOT_YOUR_PICKER = "This picker belongs to someone else. Use /frequency to open your own."

COMMANDS_HELP = (
    "/frequency - Change reminder frequency\n"
    "/pause - Pause reminders\n"
    "/resume - Resume reminders\n"
    "/status - Check your settings"
)

HELP_TEXT = (
    "**Something Sweet - Relationship Reminder Bot**\n\n"
    "Commands:\n"
    "/start - Register or see welcome message\n"
    "/frequency - Change how often you get reminders\n"
    "/pause - Temporarily stop reminders\n"
    "/resume - Start getting reminders again\n"
    "/status - Check your current settings\n"
    "/test - Get a random sweet idea now\n"
    "/help - Show this help message\n\n"
    "I'll send you random ideas for sweet things to do for your partner!"
)


async def send_error(interaction: discord.Interaction, message: str = GENERIC_ERROR):
    """Reply with an error whether or not the interaction was already answered."""
    if interaction.response.is_done():
        await interaction.followup.send(message, ephemeral=True)
    else:
        await interaction.response.send_message(message, ephemeral=True)


class CadenceButton(discord.ui.Button):
    """One button of the frequency picker."""

    def __init__(self, cadence: Cadence):
        super().__init__(
            label=CADENCE_LABELS[cadence],
            style=discord.ButtonStyle.primary,
            custom_id=f"freq_{cadence.value}",
        )
        self.cadence = cadence

    async def callback(self, interaction: discord.Interaction):
        user = await update_cadence(str(interaction.user.id), self.cadence)

        if not user:
            await interaction.response.send_message(NOT_REGISTERED, ephemeral=True)
            return

        when = describe_next_due(user.next_due_at, datetime.now(timezone.utc))
        await interaction.response.edit_message(
            content=(
                f"Frequency updated to: **{CADENCE_LABELS[self.cadence]}**\n\n"
                f"Your next reminder is scheduled {when} "
                f"({format_dt(user.next_due_at, 'D')})."
            ),
            view=None,
        )


class FrequencyView(discord.ui.View):
    """Five-button picker for the reminder cadence."""

    def __init__(self, owner_id: int):
        super().__init__(timeout=300)  # 5 minute timeout
        self.owner_id = owner_id
        for cadence in Cadence:
            self.add_item(CadenceButton(cadence))

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        """Only the user who opened the picker can use it."""
        if interaction.user.id != self.owner_id:
            await interaction.response.send_message(NOT_YOUR_PICKER, ephemeral=True)
            return False
        return True

    async def on_error(
        self,
        interaction: discord.Interaction,
        error: Exception,
        item: discord.ui.Item,
    ):
        logger.exception(f"Error updating frequency: {error}", exc_info=error)
        await send_error(interaction, "Something went wrong. Please try again.")


def format_status(user) -> str:
    """Settings summary shown by /status."""
    if user.is_paused:
        next_reminder = "Paused"
    elif user.next_due_at:
        next_reminder = f"{format_dt(user.next_due_at, 'F')} ({format_dt(user.next_due_at, 'R')})"
    else:
        next_reminder = "Not scheduled"

    return (
        "**Your Something Sweet Settings:**\n\n"
        f"Frequency: {CADENCE_LABELS[user.cadence]}\n"
        f"Status: {'Paused' if user.is_paused else 'Active'}\n"
        f"Next reminder: {next_reminder}\n"
        f"Member since: {format_dt(user.created_at, 'D')}"
    )


class RemindersCog(commands.Cog):
    """Cog for registering and managing sweet reminders."""

    def __init__(self, bot: commands.Bot, catalog: Catalog):
        self.bot = bot
        self.catalog = catalog

    @app_commands.command(name="start", description="Register for sweet reminders")
    async def start(self, interaction: discord.Interaction):
        """Register a new user, or greet a returning one."""
        await interaction.response.defer()

        external_id = str(interaction.user.id)
        user = await find_by_external_id(external_id)

        if user:
            await interaction.followup.send(
                "Welcome back! You're already registered.\n\n"
                f"Current frequency: {CADENCE_LABELS[user.cadence]}\n"
                f"Status: {'Paused' if user.is_paused else 'Active'}\n\n"
                "Use /frequency to change how often you get reminders.\n"
                "Use /pause or /resume to control notifications."
            )
            return

        # Reminders go to the user's DMs, not the channel they registered from
        dm_channel = interaction.user.dm_channel or await interaction.user.create_dm()
        user = await create_user(external_id, str(dm_channel.id))

        await interaction.followup.send(
            "Welcome to Something Sweet! 💕\n\n"
            "I'll send you random reminders to do kind things for your significant other.\n\n"
            f"Your current frequency is set to: {CADENCE_LABELS[user.cadence]}\n\n"
            f"Commands:\n{COMMANDS_HELP}"
        )

    @app_commands.command(name="frequency", description="Change how often you get reminders")
    async def frequency(self, interaction: discord.Interaction):
        await interaction.response.send_message(
            "How often would you like to receive sweet reminders?",
            view=FrequencyView(interaction.user.id),
        )

    @app_commands.command(name="pause", description="Temporarily stop reminders")
    async def pause(self, interaction: discord.Interaction):
        user = await pause_user(str(interaction.user.id))

        if not user:
            await interaction.response.send_message(NOT_REGISTERED)
            return

        await interaction.response.send_message(
            "Reminders paused. Use /resume when you're ready to continue."
        )

    @app_commands.command(name="resume", description="Start getting reminders again")
    async def resume(self, interaction: discord.Interaction):
        user = await resume_user(str(interaction.user.id))

        if not user:
            await interaction.response.send_message(NOT_REGISTERED)
            return

        await interaction.response.send_message(
            "Reminders resumed! You'll get your next reminder soon.\n\n"
            f"Frequency: {CADENCE_LABELS[user.cadence]}"
        )

    @app_commands.command(name="status", description="Check your current settings")
    async def status(self, interaction: discord.Interaction):
        user = await find_by_external_id(str(interaction.user.id))

        if not user:
            await interaction.response.send_message(
                "You are not registered yet. Use /start to begin."
            )
            return

        await interaction.response.send_message(format_status(user))

    @app_commands.command(name="test", description="Get a random sweet idea now")
    async def test(self, interaction: discord.Interaction):
        """Send one idea right away. Does not touch the schedule."""
        user = await find_by_external_id(str(interaction.user.id))

        if not user:
            await interaction.response.send_message(NOT_REGISTERED)
            return

        await interaction.response.send_message(render_reminder(self.catalog.sample()))

    @app_commands.command(name="help", description="Show available commands")
    async def help(self, interaction: discord.Interaction):
        await interaction.response.send_message(HELP_TEXT)

    @commands.Cog.listener()
    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError):
        """Prefix commands are not supported; point people to the slash commands."""
        if isinstance(error, commands.CommandNotFound):
            await ctx.reply(UNKNOWN_COMMAND)
            return
        logger.error(f"Prefix command error: {error}", exc_info=error)

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        """Typed-out slash commands in DMs arrive as plain text."""
        if message.author.bot or message.guild is not None:
            return
        if message.content.startswith("/"):
            await message.channel.send(UNKNOWN_COMMAND)


async def setup(bot: commands.Bot):
    await bot.add_cog(RemindersCog(bot, get_catalog()))
