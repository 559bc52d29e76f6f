"""
Discord bot commands for the Project Bot.
"""

from typing import Callable, Dict

from .new_project import setup_new_project_command, InteractionResponder
from .ping import setup_ping_command

# Command name -> function registering its handler on the bot
COMMANDS: Dict[str, Callable] = {
    "ping": setup_ping_command,
    "new-project": setup_new_project_command,
}


def setup_commands(bot) -> Dict[str, Callable]:
    """Register every command on the bot's command tree.

    Returns:
        Mapping of command name to the registered handler.
    """
    return {name: setup(bot) for name, setup in COMMANDS.items()}


__all__ = [
    "COMMANDS",
    "InteractionResponder",
    "setup_commands",
    "setup_new_project_command",
    "setup_ping_command",
]
