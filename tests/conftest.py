"""
Shared fixtures: a recording fake of the remote guild API and a responder.
"""

import itertools
from typing import List, Optional, Set

import pytest

from project_bot.errors import GuildAPIError
from project_bot.guild_api import ChannelSpec, ProvisionedChannel, ProvisionedRole
from project_bot.onboarding import OnboardingConfig


class FakeGuildAPI:
    """In-memory GuildAPI that records every call in order.

    ``fail_on`` holds step names that fail: "role", "category", "text",
    "voice", "get_onboarding", "update_onboarding". They raise ``error`` when
    given, otherwise a ``GuildAPIError``.
    """

    def __init__(
        self,
        onboarding: Optional[OnboardingConfig] = None,
        fail_on: Optional[Set[str]] = None,
        error: Optional[Exception] = None,
    ) -> None:
        self.onboarding = onboarding or OnboardingConfig()
        self.fail_on = set(fail_on or ())
        self.error = error
        self.calls: List[str] = []
        self.roles: List[ProvisionedRole] = []
        self.channels: List[ProvisionedChannel] = []
        self.updates: List[OnboardingConfig] = []
        self._ids = itertools.count(1001)

    def _maybe_fail(self, step: str) -> None:
        if step in self.fail_on:
            if self.error is not None:
                raise self.error
            raise GuildAPIError(f"{step} exploded", 500)

    async def create_role(self, guild_id: str, name: str, mentionable: bool) -> ProvisionedRole:
        self.calls.append("create_role")
        self._maybe_fail("role")
        role = ProvisionedRole(id=str(next(self._ids)), name=name, mentionable=mentionable)
        self.roles.append(role)
        return role

    async def create_channel(self, guild_id: str, spec: ChannelSpec) -> ProvisionedChannel:
        self.calls.append(f"create_channel:{spec.kind.value}")
        self._maybe_fail(spec.kind.value)
        channel = ProvisionedChannel(
            id=str(next(self._ids)),
            name=spec.name,
            kind=spec.kind,
            parent_id=spec.parent_id,
            permission_overwrites=spec.permission_overwrites,
        )
        self.channels.append(channel)
        return channel

    async def get_onboarding(self, guild_id: str) -> OnboardingConfig:
        self.calls.append("get_onboarding")
        self._maybe_fail("get_onboarding")
        return self.onboarding

    async def update_onboarding(self, guild_id: str, config: OnboardingConfig) -> OnboardingConfig:
        self.calls.append("update_onboarding")
        self._maybe_fail("update_onboarding")
        self.updates.append(config)
        self.onboarding = config
        return config


class FakeResponder:
    """Records acknowledgments and sent messages."""

    def __init__(self) -> None:
        self.events: List[str] = []
        self.messages: List[str] = []

    async def acknowledge(self) -> None:
        self.events.append("ack")

    async def send(self, content: str) -> None:
        self.events.append("send")
        self.messages.append(content)


@pytest.fixture
def guild_api():
    """A fresh fake guild API with an empty onboarding configuration."""
    return FakeGuildAPI()


@pytest.fixture
def responder():
    return FakeResponder()


@pytest.fixture
def fake_guild_api_factory():
    """Build fake guild APIs with custom onboarding or failures."""
    return FakeGuildAPI
