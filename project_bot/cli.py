"""
Command-line entry point for the Discord Project Bot.

Flags override the values read from the environment / .env file.
"""

import argparse
from typing import List, Optional

from .bot import BotOptions, create_bot, run_bot
from .commands import setup_commands
from .config import (
    DISCORD_BOT_TOKEN,
    GUILD_ID,
    REMOVE_COMMANDS,
    ONBOARDING_ROLE_PROMPT_TITLE,
    ONBOARDING_VISIBILITY_PROMPT_TITLE,
    init_config,
)
from .onboarding import OnboardingTargets
from .utils.startup_checks import run_startup_checks


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="project-bot",
        description="Discord bot that bootstraps project roles and channels.",
    )
    parser.add_argument(
        "--guild",
        default=GUILD_ID,
        help="Test guild ID. If not passed - bot registers commands globally",
    )
    parser.add_argument("--token", default=DISCORD_BOT_TOKEN, help="Bot access token")
    parser.add_argument(
        "--rmcmd",
        action=argparse.BooleanOptionalAction,
        default=REMOVE_COMMANDS,
        help="Remove all commands after shutting down",
    )
    parser.add_argument(
        "--role-prompt",
        default=ONBOARDING_ROLE_PROMPT_TITLE,
        help="Title of the onboarding prompt that receives a role option per project",
    )
    parser.add_argument(
        "--visibility-prompt",
        default=ONBOARDING_VISIBILITY_PROMPT_TITLE,
        help="Title of the onboarding prompt that receives a channel option per project",
    )
    return parser


def parse_options(argv: Optional[List[str]] = None) -> BotOptions:
    """Parse command-line flags into bot options."""
    args = build_parser().parse_args(argv)
    return BotOptions(
        token=args.token,
        guild_id=(args.guild or "").strip(),
        remove_commands=args.rmcmd,
        targets=OnboardingTargets(
            role_prompt_title=args.role_prompt or "",
            visibility_prompt_title=args.visibility_prompt or "",
        ),
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Run the bot: load config, check it, register commands, connect."""
    init_config()
    options = parse_options(argv)

    # Exits with an error if critical checks fail (missing bot token)
    run_startup_checks(options, exit_on_critical=True)

    bot = create_bot(options)
    setup_commands(bot)
    run_bot(bot)
