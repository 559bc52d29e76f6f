"""
Message templates for Discord messages.

This module provides centralized message templates to improve maintainability
and enable potential localization in the future.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ProjectSummary:
    """Data class for the resources created for a project."""
    project_name: str
    text_channel: str
    voice_channel: str
    updated_prompts: List[str] = field(default_factory=list)
    debug_lines: List[str] = field(default_factory=list)


class MessageTemplates:
    """Centralized message templates for Discord messages."""

    PONG = "pong!"

    STEP_FAILED = "{title}: {detail}"

    PROJECT_RESOURCES = (
        "- Category {project_name}\n"
        "- Text channel #{text_channel}\n"
        "- Voice channel {voice_channel}\n"
        "- Role @{project_name}"
    )

    PROJECT_CREATED = (
        "Successfully created project **{project_name}** with:\n"
        "{resources}"
    )

    ONBOARDING_UPDATED = "\n- Added to onboarding prompts: {prompts}"

    ONBOARDING_NOT_UPDATED = "\nNote: No onboarding prompts were updated."

    PARTIAL_SUCCESS = (
        "Successfully created project structures, but {error}\n"
        "Created for **{project_name}**:\n"
        "{resources}"
    )

    DEBUG_SECTION = "\n\nDebug info:\n{lines}"

    @classmethod
    def format_resources(cls, summary: ProjectSummary) -> str:
        """Format the created resources in a fixed order."""
        return cls.PROJECT_RESOURCES.format(
            project_name=summary.project_name,
            text_channel=summary.text_channel,
            voice_channel=summary.voice_channel,
        )

    @classmethod
    def format_debug(cls, lines: List[str]) -> str:
        if not lines:
            return ""
        return cls.DEBUG_SECTION.format(lines="\n".join(lines))

    @classmethod
    def format_success(cls, summary: ProjectSummary) -> str:
        """Format the message for a fully successful bootstrap."""
        message = cls.PROJECT_CREATED.format(
            project_name=summary.project_name,
            resources=cls.format_resources(summary),
        )
        if summary.updated_prompts:
            message += cls.ONBOARDING_UPDATED.format(prompts=", ".join(summary.updated_prompts))
        else:
            message += cls.ONBOARDING_NOT_UPDATED
        return message + cls.format_debug(summary.debug_lines)

    @classmethod
    def format_partial_success(cls, summary: ProjectSummary, error: str) -> str:
        """Format the message when only the onboarding step failed.

        ``error`` reads as the end of a sentence, e.g.
        "failed to update onboarding: 403 Forbidden".
        """
        message = cls.PARTIAL_SUCCESS.format(
            error=error,
            project_name=summary.project_name,
            resources=cls.format_resources(summary),
        )
        return message + cls.format_debug(summary.debug_lines)

    @classmethod
    def format_failure(cls, title: str, detail: str) -> str:
        """Format the message for a failed provisioning step."""
        if not detail:
            return f"Error: {title}."
        return cls.STEP_FAILED.format(title=title, detail=detail)
