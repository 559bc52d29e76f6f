"""
Discord bot client for the Project Bot.
"""

import asyncio
import signal
import sys
from dataclasses import dataclass, field
from typing import List, Optional

import discord
from discord import app_commands

from .config import (
    DISCORD_BOT_TOKEN,
    GUILD_ID,
    REMOVE_COMMANDS,
    ONBOARDING_ROLE_PROMPT_TITLE,
    ONBOARDING_VISIBILITY_PROMPT_TITLE,
)
from .guild_api import DiscordGuildAPI, GuildAPI
from .onboarding import OnboardingTargets
from .utils.logging import logger
from .workflow import ProjectBootstrapWorkflow

# Roles and channels for the project, Manage Server for onboarding
INVITE_PERMISSIONS = discord.Permissions(manage_roles=True, manage_channels=True, manage_guild=True)


@dataclass
class BotOptions:
    """Runtime options of a bot instance."""
    token: Optional[str] = DISCORD_BOT_TOKEN
    guild_id: str = GUILD_ID
    remove_commands: bool = REMOVE_COMMANDS
    targets: OnboardingTargets = field(default_factory=lambda: OnboardingTargets(
        role_prompt_title=ONBOARDING_ROLE_PROMPT_TITLE,
        visibility_prompt_title=ONBOARDING_VISIBILITY_PROMPT_TITLE,
    ))


class ProjectBot(discord.Client):
    """Discord bot client with application commands support.

    The bot owns the ``GuildAPI`` and the workflow; command handlers reach
    them through the bot instance they were registered on.
    """

    def __init__(self, options: Optional[BotOptions] = None, guild_api: Optional[GuildAPI] = None) -> None:
        intents = discord.Intents.default()
        super().__init__(intents=intents)
        self.options = options or BotOptions()
        self.tree = app_commands.CommandTree(self)
        self.guild_api = guild_api or DiscordGuildAPI(self)
        self.workflow = ProjectBootstrapWorkflow(self.guild_api, self.options.targets)
        self.registered_commands: List[app_commands.AppCommand] = []
        self._shutdown_task: Optional[asyncio.Task] = None

    @property
    def command_guild(self) -> Optional[discord.Object]:
        """Guild the commands are registered in, or None for global registration."""
        if not self.options.guild_id:
            return None
        return discord.Object(id=int(self.options.guild_id))

    async def setup_hook(self) -> None:
        """Called on login to register the commands."""
        logger.info("Adding commands...")
        guild = self.command_guild
        if guild is not None:
            self.tree.copy_global_to(guild=guild)
        self.registered_commands = await self.tree.sync(guild=guild)
        target = f"guild {guild.id}" if guild is not None else "globally"
        logger.info(f"Registered {len(self.registered_commands)} commands {target}")

    async def remove_commands(self) -> None:
        """Deregister every command this bot registered."""
        logger.info("Removing commands...")
        guild = self.command_guild
        self.tree.clear_commands(guild=guild)
        await self.tree.sync(guild=guild)
        self.registered_commands = []

    async def shutdown(self) -> None:
        """Optionally deregister commands, then close the connection."""
        if self.options.remove_commands and self.registered_commands:
            try:
                await self.remove_commands()
            except discord.HTTPException as e:
                logger.error(f"Cannot delete commands: {e}")
        await self.cleanup()

    def request_shutdown(self) -> None:
        """Schedule shutdown on the running loop once."""
        if self._shutdown_task is None:
            self._shutdown_task = asyncio.create_task(self.shutdown())

    async def cleanup(self) -> None:
        """Cleanup resources before shutdown."""
        logger.info("Cleaning up resources...")
        if not self.is_closed():
            await self.close()
        logger.info("Cleanup complete")


def create_bot(options: Optional[BotOptions] = None, guild_api: Optional[GuildAPI] = None) -> ProjectBot:
    """Create a new bot instance."""
    return ProjectBot(options, guild_api)


async def on_ready_handler(bot: ProjectBot) -> None:
    """Handle the on_ready event."""
    logger.info(f"Logged in as: {bot.user}")
    targets = bot.options.targets
    if targets.is_configured():
        logger.info(
            f"Onboarding prompts: role='{targets.role_prompt_title}', "
            f"visibility='{targets.visibility_prompt_title}'"
        )
    else:
        logger.warning("No onboarding prompt titles configured - onboarding will not be updated")
    logger.info(
        f"Invite URL: https://discord.com/api/oauth2/authorize?"
        f"client_id={bot.user.id}&permissions={INVITE_PERMISSIONS.value}&scope=bot%20applications.commands"
    )


def setup_signal_handlers(bot: ProjectBot) -> None:
    """Set up signal handlers for graceful shutdown."""
    def signal_handler(sig: int, frame) -> None:
        logger.info(f"Received signal {sig}, initiating graceful shutdown...")
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            sys.exit(0)
        else:
            loop.call_soon_threadsafe(bot.request_shutdown)

    # Register signal handlers (SIGTERM may not exist on Windows)
    signal.signal(signal.SIGINT, signal_handler)
    if hasattr(signal, 'SIGTERM'):
        signal.signal(signal.SIGTERM, signal_handler)


def run_bot(bot: ProjectBot) -> None:
    """Start the Discord bot and block until it is shut down."""
    token = bot.options.token
    if not token:
        raise ValueError("BOT_TOKEN environment variable is required")

    @bot.event
    async def on_ready() -> None:
        """Discord event handler for when the bot is ready."""
        await on_ready_handler(bot)

    setup_signal_handlers(bot)

    logger.info("Starting Discord Project Bot...")
    try:
        bot.run(token, log_handler=None)
    except discord.LoginFailure as e:
        logger.error(f"Invalid bot parameters: {e}")
        raise SystemExit(1) from e
    except (discord.GatewayNotFound, discord.ConnectionClosed) as e:
        logger.error(f"Cannot open the session: {e}")
        raise SystemExit(1) from e
    logger.info("Bot stopped")
