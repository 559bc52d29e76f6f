"""
Tests for the command-line entry point.
"""

from unittest.mock import MagicMock, patch

from project_bot.bot import BotOptions
from project_bot.cli import build_parser, main, parse_options


class TestParseOptions:
    """Tests for parse_options."""

    def test_flags_override_environment(self):
        """
        Tests command line flags:
        - --guild is stripped and overrides GUILD_ID
        - --token overrides the environment token
        - --no-rmcmd keeps commands registered on exit
        - Prompt titles can be given on the command line
        """
        options = parse_options([
            "--guild", " 1234 ",
            "--token", "abc",
            "--no-rmcmd",
            "--role-prompt", "Teams",
            "--visibility-prompt", "Channels",
        ])

        assert isinstance(options, BotOptions)
        assert options.guild_id == "1234"
        assert options.token == "abc"
        assert options.remove_commands is False
        assert options.targets.role_prompt_title == "Teams"
        assert options.targets.visibility_prompt_title == "Channels"

    def test_rmcmd_flag(self):
        """Tests that --rmcmd turns command removal on."""
        assert parse_options(["--rmcmd"]).remove_commands is True

    def test_defaults_come_from_config(self):
        """Tests that flag defaults are read from the configuration module."""
        with patch('project_bot.cli.GUILD_ID', "999"):
            parser = build_parser()

        assert parser.parse_args([]).guild == "999"


class TestMain:
    def test_wires_everything_in_order(self):
        """
        Tests main:
        - Config is loaded before the startup checks
        - The bot is created, commands registered, then the bot is run
        """
        calls = []
        bot = MagicMock()

        with patch('project_bot.cli.init_config', side_effect=lambda: calls.append("init_config")), \
                patch('project_bot.cli.run_startup_checks', side_effect=lambda o, exit_on_critical: calls.append("checks")), \
                patch('project_bot.cli.create_bot', side_effect=lambda o: calls.append("create_bot") or bot), \
                patch('project_bot.cli.setup_commands', side_effect=lambda b: calls.append("setup_commands")), \
                patch('project_bot.cli.run_bot', side_effect=lambda b: calls.append("run_bot")) as mock_run:
            main(["--token", "abc", "--guild", "1234"])

        assert calls == ["init_config", "checks", "create_bot", "setup_commands", "run_bot"]
        mock_run.assert_called_once_with(bot)
