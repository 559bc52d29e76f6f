"""
Configuration settings for the Discord Project Bot.
"""

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv

# Load environment variables (safe - just reads .env file)
load_dotenv()

# Track initialization state for config.yaml loading
_initialized = False


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Discord Configuration
DISCORD_BOT_TOKEN = os.getenv("BOT_TOKEN") or os.getenv("DISCORD_BOT_TOKEN")

# Test guild id - commands are registered globally when empty
GUILD_ID = os.getenv("GUILD_ID", "").strip()

# Remove all registered commands on shutdown
REMOVE_COMMANDS = _env_flag("REMOVE_COMMANDS", "true")

# Onboarding prompts that receive an option for every new project
ONBOARDING_ROLE_PROMPT_TITLE = os.getenv("NEWPROJECT_ONBOARDING_PROMPT_TITLE", "")
ONBOARDING_VISIBILITY_PROMPT_TITLE = os.getenv("NEWPROJECT_ONBOARDING_VISIBILITY_PROMPT_TITLE", "")

# Project layout
TEXT_CHANNEL_NAME = "main"
VOICE_CHANNEL_NAME = "Huddle"

# Project Paths
BASE_DIR = Path(__file__).parent.parent
CONFIG_YAML_PATH = BASE_DIR / "config.yaml"

# Onboarding option descriptions, overridable from config.yaml
DEFAULT_ROLE_OPTION_DESCRIPTION = "Join the {project} project team"
DEFAULT_VISIBILITY_OPTION_DESCRIPTION = "See {project} project channels"
ONBOARDING_TEMPLATES: dict = {}

# Discord Message Configuration
MAX_MESSAGE_LENGTH = 1950  # Discord max is 2000, keep a small buffer

# Startup check thresholds
MIN_TOKEN_LENGTH = 50


def init_config() -> None:
    """Initialize configuration by loading config.yaml.

    This function should be called once at application startup.
    It's safe to call multiple times.
    """
    global _initialized

    if _initialized:
        return

    if CONFIG_YAML_PATH.exists():
        try:
            with open(CONFIG_YAML_PATH, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            ONBOARDING_TEMPLATES.update(data.get("onboarding") or {})
        except (OSError, yaml.YAMLError, AttributeError) as e:
            logging.getLogger("project_bot").warning(f"Ignoring unreadable {CONFIG_YAML_PATH.name}: {e}")

    _initialized = True


def get_option_description(kind: str, project_name: str) -> str:
    """Get the onboarding option description for a new project.

    Args:
        kind: Either 'role' or 'visibility'.
        project_name: The project name substituted for ``{project}``.

    Returns:
        The formatted description.
    """
    if kind == "role":
        template = ONBOARDING_TEMPLATES.get("role_option_description", DEFAULT_ROLE_OPTION_DESCRIPTION)
    elif kind == "visibility":
        template = ONBOARDING_TEMPLATES.get("visibility_option_description", DEFAULT_VISIBILITY_OPTION_DESCRIPTION)
    else:
        raise ValueError(f"Unknown onboarding option kind: {kind}")
    return template.format(project=project_name)


def is_initialized() -> bool:
    """Check if configuration has been initialized."""
    return _initialized
