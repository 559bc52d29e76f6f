"""
Project bootstrap workflow for the /new-project command.

Provisioning runs strictly in order: role, category, text channel, voice
channel. The first failure ends the run and nothing already created is
removed. Onboarding is updated last and only best-effort: a failure there
turns the outcome into a partial success, never a failure.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Protocol

from .config import TEXT_CHANNEL_NAME, VOICE_CHANNEL_NAME
from .errors import (
    BootstrapError,
    CategoryCreationFailed,
    ChannelCreationFailed,
    GuildAPIError,
    MissingInput,
    OnboardingFetchFailed,
    OnboardingUpdateFailed,
    RoleCreationFailed,
)
from .guild_api import (
    ChannelKind,
    ChannelSpec,
    GuildAPI,
    PermissionOverwrite,
    ProvisionedChannel,
    ProvisionedRole,
    SubjectType,
)
from .onboarding import OnboardingTargets, add_project_options
from .utils.logging import WorkflowLog
from .utils.message_templates import MessageTemplates, ProjectSummary


class BootstrapState(Enum):
    """States of a single workflow run."""
    ACKNOWLEDGED = "acknowledged"
    ROLE_CREATED = "role_created"
    CATEGORY_CREATED = "category_created"
    TEXT_CHANNEL_CREATED = "text_channel_created"
    VOICE_CHANNEL_CREATED = "voice_channel_created"
    ONBOARDING_CHECKED = "onboarding_checked"
    REPORTED = "reported"
    FAILED = "failed"
    PARTIALLY_SUCCEEDED = "partially_succeeded"


TERMINAL_STATES = frozenset({
    BootstrapState.REPORTED,
    BootstrapState.FAILED,
    BootstrapState.PARTIALLY_SUCCEEDED,
})


def _describe(error: Exception) -> str:
    """Error text for the report, falling back to the type for empty messages."""
    return str(error) or type(error).__name__


@dataclass(frozen=True)
class ProjectRequest:
    """A validated-or-not request to bootstrap one project."""
    name: Optional[str]
    guild_id: str

    @classmethod
    def from_option(cls, name: Optional[str], guild_id) -> "ProjectRequest":
        """Build a request from the raw command option, stripping whitespace."""
        return cls(name=name.strip() if name else None, guild_id=str(guild_id))


class Responder(Protocol):
    """Where the workflow acknowledges and reports (an interaction in practice)."""

    async def acknowledge(self) -> None:
        ...

    async def send(self, content: str) -> None:
        ...


@dataclass
class BootstrapReport:
    """Everything a workflow run produced, in creation order."""
    request: ProjectRequest
    text_channel_name: str = TEXT_CHANNEL_NAME
    voice_channel_name: str = VOICE_CHANNEL_NAME
    states: List[BootstrapState] = field(default_factory=list)
    role: Optional[ProvisionedRole] = None
    category: Optional[ProvisionedChannel] = None
    text_channel: Optional[ProvisionedChannel] = None
    voice_channel: Optional[ProvisionedChannel] = None
    updated_prompts: List[str] = field(default_factory=list)
    error: Optional[BootstrapError] = None
    debug_lines: List[str] = field(default_factory=list)

    @property
    def state(self) -> Optional[BootstrapState]:
        return self.states[-1] if self.states else None

    @property
    def failed(self) -> bool:
        return self.state is BootstrapState.FAILED

    @property
    def partially_succeeded(self) -> bool:
        return self.state is BootstrapState.PARTIALLY_SUCCEEDED

    @property
    def succeeded(self) -> bool:
        return self.state is BootstrapState.REPORTED

    def created_resources(self) -> List[str]:
        """Describe the created resources in a fixed order."""
        resources = []
        if self.category is not None:
            resources.append(f"category:{self.category.name}")
        if self.text_channel is not None:
            resources.append(f"text:{self.text_channel.name}")
        if self.voice_channel is not None:
            resources.append(f"voice:{self.voice_channel.name}")
        if self.role is not None:
            resources.append(f"role:{self.role.name}")
        return resources

    def render(self) -> str:
        """Render the final user-visible message."""
        if self.error is not None and not self.partially_succeeded:
            return MessageTemplates.format_failure(self.error.title, self.error.detail)

        summary = ProjectSummary(
            project_name=self.request.name or "",
            text_channel=self.text_channel_name,
            voice_channel=self.voice_channel_name,
            updated_prompts=list(self.updated_prompts),
            debug_lines=list(self.debug_lines),
        )
        if self.partially_succeeded:
            title = self.error.title
            error = f"{title[:1].lower()}{title[1:]}: {self.error.detail}"
            return MessageTemplates.format_partial_success(summary, error)
        return MessageTemplates.format_success(summary)


class ProjectBootstrapWorkflow:
    """Creates the role, category and channels of a new project.

    Args:
        api: Remote guild operations.
        targets: Onboarding prompt titles that receive the new project.
    """

    def __init__(
        self,
        api: GuildAPI,
        targets: Optional[OnboardingTargets] = None,
        text_channel_name: str = TEXT_CHANNEL_NAME,
        voice_channel_name: str = VOICE_CHANNEL_NAME,
    ) -> None:
        self.api = api
        self.targets = targets or OnboardingTargets()
        self.text_channel_name = text_channel_name
        self.voice_channel_name = voice_channel_name

    async def run(
        self,
        request: ProjectRequest,
        responder: Responder,
        log: Optional[WorkflowLog] = None,
    ) -> BootstrapReport:
        """Run the workflow and send exactly one final message.

        Returns:
            The report that was sent.
        """
        log = log or WorkflowLog(f"new-project:{request.guild_id}")
        report = BootstrapReport(
            request=request,
            text_channel_name=self.text_channel_name,
            voice_channel_name=self.voice_channel_name,
        )

        await responder.acknowledge()
        report.states.append(BootstrapState.ACKNOWLEDGED)

        try:
            await self._provision(request, report, log)
        except BootstrapError as e:
            log.error(str(e))
            report.error = e
            report.states.append(BootstrapState.FAILED)
            await responder.send(report.render())
            return report

        try:
            await self._update_onboarding(request, report, log)
        except (OnboardingFetchFailed, OnboardingUpdateFailed) as e:
            log.warning(str(e))
            report.error = e
            report.debug_lines = list(log.lines)
            report.states.append(BootstrapState.PARTIALLY_SUCCEEDED)
            await responder.send(report.render())
            return report

        report.debug_lines = list(log.lines)
        await responder.send(report.render())
        report.states.append(BootstrapState.REPORTED)
        return report

    async def _provision(self, request: ProjectRequest, report: BootstrapReport, log: WorkflowLog) -> None:
        if not request.name:
            raise MissingInput()

        name = request.name
        guild_id = request.guild_id
        log.info(f"Creating project '{name}' in guild {guild_id}")

        try:
            report.role = await self.api.create_role(guild_id, name, mentionable=True)
        except GuildAPIError as e:
            raise RoleCreationFailed(str(e)) from e
        report.states.append(BootstrapState.ROLE_CREATED)

        category_spec = ChannelSpec(
            name=name,
            kind=ChannelKind.CATEGORY,
            permission_overwrites=(
                PermissionOverwrite(report.role.id, SubjectType.ROLE, allow_view=True),
                PermissionOverwrite(guild_id, SubjectType.EVERYONE, allow_view=False),
            ),
        )
        try:
            report.category = await self.api.create_channel(guild_id, category_spec)
        except GuildAPIError as e:
            raise CategoryCreationFailed(str(e)) from e
        report.states.append(BootstrapState.CATEGORY_CREATED)

        text_spec = ChannelSpec(self.text_channel_name, ChannelKind.TEXT, parent_id=report.category.id)
        try:
            report.text_channel = await self.api.create_channel(guild_id, text_spec)
        except GuildAPIError as e:
            raise ChannelCreationFailed("text", str(e)) from e
        report.states.append(BootstrapState.TEXT_CHANNEL_CREATED)

        voice_spec = ChannelSpec(self.voice_channel_name, ChannelKind.VOICE, parent_id=report.category.id)
        try:
            report.voice_channel = await self.api.create_channel(guild_id, voice_spec)
        except GuildAPIError as e:
            raise ChannelCreationFailed("voice", str(e)) from e
        report.states.append(BootstrapState.VOICE_CHANNEL_CREATED)

    async def _update_onboarding(self, request: ProjectRequest, report: BootstrapReport, log: WorkflowLog) -> None:
        if not self.targets.is_configured():
            log.info("No onboarding prompt titles configured, skipping onboarding")
            report.states.append(BootstrapState.ONBOARDING_CHECKED)
            return

        try:
            onboarding = await self.api.get_onboarding(request.guild_id)
        except Exception as e:
            # Best-effort step: any failure here only downgrades the outcome
            raise OnboardingFetchFailed(_describe(e)) from e

        change = add_project_options(
            onboarding,
            self.targets,
            project_name=request.name,
            role_id=report.role.id,
            category_id=report.category.id,
            log=log,
        )

        if change.changed:
            log.info(f"Updating {len(change.updated_prompts)} prompts: {', '.join(change.updated_prompts)}")
            try:
                await self.api.update_onboarding(request.guild_id, change.config)
            except Exception as e:
                raise OnboardingUpdateFailed(_describe(e)) from e
            report.updated_prompts = change.updated_prompts

        report.states.append(BootstrapState.ONBOARDING_CHECKED)
