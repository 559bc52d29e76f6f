"""
New project command for the Discord Project Bot.
"""

import traceback
import uuid
from typing import Callable

import discord
from discord import app_commands

from ..utils.logging import logger, WorkflowLog
from ..utils.text_utils import format_error_message, split_message
from ..workflow import ProjectRequest

INVOCATION_ID_LENGTH = 8


class InteractionResponder:
    """Acknowledges an interaction and sends follow-up messages to it."""

    def __init__(self, interaction: discord.Interaction) -> None:
        self.interaction = interaction

    async def acknowledge(self) -> None:
        await self.interaction.response.defer(thinking=True)

    async def send(self, content: str) -> None:
        chunks = split_message(content)
        if not self.interaction.response.is_done():
            # Nothing acknowledged yet, the first chunk becomes the response
            await self.interaction.response.send_message(chunks.pop(0))
        for chunk in chunks:
            await self.interaction.followup.send(chunk)


def setup_new_project_command(bot) -> Callable:
    """Set up the /new-project command on the bot."""

    @bot.tree.command(name="new-project", description="Creates a new project.")
    @app_commands.guild_only()
    @app_commands.rename(project_name="project-name")
    @app_commands.describe(project_name="A name for the new project")
    async def new_project(interaction: discord.Interaction, project_name: str) -> None:
        """Handle the /new-project command."""
        invocation_id = str(uuid.uuid4())[:INVOCATION_ID_LENGTH]
        log = WorkflowLog(invocation_id)
        logger.info(f"[{invocation_id}] User '{interaction.user}' started /new-project")

        request = ProjectRequest.from_option(project_name, interaction.guild_id)
        responder = InteractionResponder(interaction)

        try:
            report = await bot.workflow.run(request, responder, log=log)
        except Exception:
            logger.exception(f"[{invocation_id}] /new-project crashed")
            await responder.send(format_error_message("Unexpected error", traceback.format_exc()))
            return

        logger.info(
            f"[{invocation_id}] /new-project finished in {log.elapsed_seconds():.1f}s, state {report.state.value}, "
            f"created: {', '.join(report.created_resources()) or 'nothing'}"
        )

    return new_project
