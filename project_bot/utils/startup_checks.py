"""
Startup checks module for validating configuration before connecting.

This module validates:
- Discord bot token
- Command registration guild id
- Onboarding prompt titles
- The optional config.yaml file
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import yaml

from ..config import CONFIG_YAML_PATH, MIN_TOKEN_LENGTH
from .logging import logger


class CheckStatus(Enum):
    """Status of a startup check."""
    PASS = "PASS"
    WARN = "WARN"
    FAIL = "FAIL"
    SKIP = "SKIP"


@dataclass
class CheckResult:
    """Result of a single startup check."""
    name: str
    status: CheckStatus
    message: str
    details: Optional[str] = None


CRITICAL_CHECKS = ("Discord Bot Token", "Guild ID")


class StartupChecker:
    """Performs startup checks against the bot options."""

    def __init__(self, options) -> None:
        self.options = options
        self.results: List[CheckResult] = []

    def _add_result(
        self,
        name: str,
        status: CheckStatus,
        message: str,
        details: Optional[str] = None
    ) -> CheckResult:
        """Add a check result to the results list."""
        result = CheckResult(name=name, status=status, message=message, details=details)
        self.results.append(result)
        return result

    def check_discord_token(self) -> CheckResult:
        """Check if the Discord bot token is configured."""
        token = self.options.token
        if not token:
            return self._add_result(
                name="Discord Bot Token",
                status=CheckStatus.FAIL,
                message="BOT_TOKEN environment variable is not set",
                details="Set BOT_TOKEN in your .env file or pass --token"
            )

        if len(token) < MIN_TOKEN_LENGTH:
            return self._add_result(
                name="Discord Bot Token",
                status=CheckStatus.WARN,
                message="Discord token seems unusually short",
                details="Token may be invalid - verify in Discord Developer Portal"
            )

        return self._add_result(
            name="Discord Bot Token",
            status=CheckStatus.PASS,
            message="Discord bot token is configured"
        )

    def check_guild_id(self) -> CheckResult:
        """Check the guild id used for command registration."""
        guild_id = self.options.guild_id
        if not guild_id:
            return self._add_result(
                name="Guild ID",
                status=CheckStatus.SKIP,
                message="No guild id set - commands will be registered globally",
                details="Global commands can take up to an hour to appear"
            )

        if not guild_id.isdigit():
            return self._add_result(
                name="Guild ID",
                status=CheckStatus.FAIL,
                message=f"Guild id '{guild_id}' is not a numeric snowflake",
                details="Copy the server id with Developer Mode enabled"
            )

        return self._add_result(
            name="Guild ID",
            status=CheckStatus.PASS,
            message=f"Commands will be registered in guild {guild_id}"
        )

    def check_onboarding_prompts(self) -> CheckResult:
        """Check which onboarding prompts new projects are added to."""
        targets = self.options.targets
        if not targets.is_configured():
            return self._add_result(
                name="Onboarding Prompts",
                status=CheckStatus.SKIP,
                message="No onboarding prompt titles configured",
                details="Set NEWPROJECT_ONBOARDING_PROMPT_TITLE and/or "
                        "NEWPROJECT_ONBOARDING_VISIBILITY_PROMPT_TITLE to enable"
            )

        missing = []
        if not targets.role_prompt_title:
            missing.append("NEWPROJECT_ONBOARDING_PROMPT_TITLE")
        if not targets.visibility_prompt_title:
            missing.append("NEWPROJECT_ONBOARDING_VISIBILITY_PROMPT_TITLE")

        if missing:
            return self._add_result(
                name="Onboarding Prompts",
                status=CheckStatus.WARN,
                message=f"Partially configured - missing: {', '.join(missing)}",
                details="Only the configured prompt will be updated"
            )

        return self._add_result(
            name="Onboarding Prompts",
            status=CheckStatus.PASS,
            message=f"Updating '{targets.role_prompt_title}' and '{targets.visibility_prompt_title}'"
        )

    def check_config_file(self) -> CheckResult:
        """Check that config.yaml, if present, parses."""
        if not CONFIG_YAML_PATH.exists():
            return self._add_result(
                name="Config File",
                status=CheckStatus.SKIP,
                message=f"{CONFIG_YAML_PATH.name} not found - using default messages"
            )

        try:
            with open(CONFIG_YAML_PATH, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            return self._add_result(
                name="Config File",
                status=CheckStatus.WARN,
                message=f"Cannot read {CONFIG_YAML_PATH.name}: {e}",
                details="Default messages will be used"
            )

        if data is not None and not isinstance(data, dict):
            return self._add_result(
                name="Config File",
                status=CheckStatus.WARN,
                message=f"{CONFIG_YAML_PATH.name} must contain a mapping",
                details="Default messages will be used"
            )

        return self._add_result(
            name="Config File",
            status=CheckStatus.PASS,
            message=f"Loaded {CONFIG_YAML_PATH.name}"
        )

    def run_all_checks(self) -> List[CheckResult]:
        """Run all startup checks and log a summary."""
        logger.info("=" * 60)
        logger.info("Running startup checks...")
        logger.info("=" * 60)

        self.check_discord_token()
        self.check_guild_id()
        self.check_onboarding_prompts()
        self.check_config_file()

        for result in self.results:
            self._log_result(result)

        passed = sum(1 for r in self.results if r.status == CheckStatus.PASS)
        warned = sum(1 for r in self.results if r.status == CheckStatus.WARN)
        failed = sum(1 for r in self.results if r.status == CheckStatus.FAIL)
        skipped = sum(1 for r in self.results if r.status == CheckStatus.SKIP)

        summary = f"Startup checks complete: {passed} passed"
        if warned:
            summary += f", {warned} warnings"
        if failed:
            summary += f", {failed} failed"
        if skipped:
            summary += f", {skipped} skipped"

        logger.info(summary)
        logger.info("=" * 60)

        return self.results

    def _log_result(self, result: CheckResult) -> None:
        """Log a check result with appropriate formatting."""
        status_icons = {
            CheckStatus.PASS: "✓",
            CheckStatus.WARN: "⚠",
            CheckStatus.FAIL: "✗",
            CheckStatus.SKIP: "○",
        }

        icon = status_icons.get(result.status, "?")
        log_msg = f"[{icon}] {result.name}: {result.message}"

        if result.status == CheckStatus.PASS:
            logger.info(log_msg)
        elif result.status == CheckStatus.WARN:
            logger.warning(log_msg)
            if result.details:
                logger.warning(f"    └─ {result.details}")
        elif result.status == CheckStatus.FAIL:
            logger.error(log_msg)
            if result.details:
                logger.error(f"    └─ {result.details}")
        else:  # SKIP
            logger.info(log_msg)
            if result.details:
                logger.info(f"    └─ {result.details}")

    def has_critical_failures(self) -> bool:
        """Check if any critical checks failed (bot token, guild id)."""
        return any(
            r.name in CRITICAL_CHECKS and r.status == CheckStatus.FAIL
            for r in self.results
        )

    def get_failures(self) -> List[CheckResult]:
        """Get all failed check results."""
        return [r for r in self.results if r.status == CheckStatus.FAIL]

    def get_warnings(self) -> List[CheckResult]:
        """Get all warning check results."""
        return [r for r in self.results if r.status == CheckStatus.WARN]


def run_startup_checks(options, exit_on_critical: bool = True) -> StartupChecker:
    """Run all startup checks and optionally exit on critical failures.

    Args:
        options: The ``BotOptions`` to validate.
        exit_on_critical: If True, raise an exception on critical failures.

    Returns:
        The StartupChecker instance with results.

    Raises:
        SystemExit: If exit_on_critical is True and critical checks fail.
    """
    checker = StartupChecker(options)
    checker.run_all_checks()

    if exit_on_critical and checker.has_critical_failures():
        failure_names = [f.name for f in checker.get_failures()]
        raise SystemExit(
            f"Critical startup checks failed: {', '.join(failure_names)}. "
            "Please fix these issues before starting the bot."
        )

    return checker
