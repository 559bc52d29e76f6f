"""
Discord Project Bot.

Registers the /ping and /new-project slash commands; /new-project creates a
role, a private category with a text and a voice channel, and adds the
project to the guild's onboarding prompts.
"""

__version__ = "1.0.0"
