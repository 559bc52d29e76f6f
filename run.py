"""
Discord Project Bot
A Discord bot that bootstraps a role, category and channels for new projects.

Entry point for the application.
"""

from project_bot.cli import main

if __name__ == "__main__":
    main()
