"""
Ping command for the Discord Project Bot.
"""

from typing import Callable

import discord

from ..utils.logging import logger
from ..utils.message_templates import MessageTemplates


def setup_ping_command(bot) -> Callable:
    """Set up the /ping command on the bot."""

    @bot.tree.command(name="ping", description="You'll never believe what the command does!")
    async def ping(interaction: discord.Interaction) -> None:
        """Handle the /ping command."""
        logger.info(f"/ping from {interaction.user}")
        await interaction.response.send_message(MessageTemplates.PONG)

    return ping
