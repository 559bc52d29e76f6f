"""
Error types for the project bootstrap workflow.

``GuildAPIError`` is raised by a single failed remote call. The workflow
catches it and re-raises one of the ``BootstrapError`` subclasses so the
report can tell which step failed.
"""

from typing import Optional


class GuildAPIError(Exception):
    """A remote guild operation failed."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class BootstrapError(Exception):
    """Base class for failures of the project bootstrap workflow."""

    title = "Project creation failed"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        if self.detail:
            return f"{self.title}: {self.detail}"
        return self.title


class MissingInput(BootstrapError):
    title = "Project name is required"


class RoleCreationFailed(BootstrapError):
    title = "Failed to create role"


class CategoryCreationFailed(BootstrapError):
    title = "Failed to create category"


class ChannelCreationFailed(BootstrapError):
    """Creating the text or voice channel failed."""

    def __init__(self, kind: str, detail: str = "") -> None:
        super().__init__(detail)
        self.kind = kind

    @property
    def title(self) -> str:  # type: ignore[override]
        return f"Failed to create {self.kind} channel"


class OnboardingFetchFailed(BootstrapError):
    title = "Failed to get onboarding"


class OnboardingUpdateFailed(BootstrapError):
    title = "Failed to update onboarding"
