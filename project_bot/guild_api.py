"""
Remote guild operations used by the project bootstrap workflow.

``GuildAPI`` is the capability set the workflow depends on. ``DiscordGuildAPI``
implements it on top of a connected ``discord.Client``; tests substitute a
recording fake.
"""

import asyncio
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Protocol, Tuple

import aiohttp
import discord
from discord.http import Route

from .errors import GuildAPIError
from .onboarding import OnboardingConfig
from .utils.logging import logger


class ChannelKind(Enum):
    """Kind of channel to create."""
    CATEGORY = "category"
    TEXT = "text"
    VOICE = "voice"


class SubjectType(Enum):
    """Principal a permission overwrite applies to."""
    ROLE = "role"
    EVERYONE = "everyone"


@dataclass(frozen=True)
class PermissionOverwrite:
    """Allow or deny the view permission for one principal."""
    subject_id: str
    subject_type: SubjectType
    allow_view: bool


@dataclass(frozen=True)
class ChannelSpec:
    """Parameters of a channel creation call."""
    name: str
    kind: ChannelKind
    parent_id: Optional[str] = None
    permission_overwrites: Tuple[PermissionOverwrite, ...] = ()


@dataclass(frozen=True)
class ProvisionedRole:
    id: str
    name: str
    mentionable: bool


@dataclass(frozen=True)
class ProvisionedChannel:
    id: str
    name: str
    kind: ChannelKind
    parent_id: Optional[str] = None
    permission_overwrites: Tuple[PermissionOverwrite, ...] = ()


class GuildAPI(Protocol):
    """Protocol for remote guild operations (enables dependency injection).

    Every method raises ``GuildAPIError`` with the remote error text on failure.
    """

    async def create_role(self, guild_id: str, name: str, mentionable: bool) -> ProvisionedRole:
        """Create a role in the guild."""
        ...

    async def create_channel(self, guild_id: str, spec: ChannelSpec) -> ProvisionedChannel:
        """Create a category, text or voice channel in the guild."""
        ...

    async def get_onboarding(self, guild_id: str) -> OnboardingConfig:
        """Fetch the guild's onboarding configuration."""
        ...

    async def update_onboarding(self, guild_id: str, config: OnboardingConfig) -> OnboardingConfig:
        """Replace the guild's onboarding configuration."""
        ...


# Overwrite target type in the channel payload; @everyone is a role too
OVERWRITE_TYPE_ROLE = 0

VIEW_CHANNEL = discord.Permissions(view_channel=True).value

CHANNEL_TYPES = {
    ChannelKind.CATEGORY: discord.ChannelType.category.value,
    ChannelKind.TEXT: discord.ChannelType.text.value,
    ChannelKind.VOICE: discord.ChannelType.voice.value,
}

# Failures below the HTTP layer: dropped connections and request timeouts
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


def _to_overwrite_payloads(spec: ChannelSpec) -> List[dict]:
    """Build the raw ``permission_overwrites`` list of a channel payload.

    Overwrites are sent by id with an explicit role type, so a role that has
    not reached the client cache yet can still be referenced. The @everyone
    role shares the guild's id.
    """
    payloads = []
    for overwrite in spec.permission_overwrites:
        allow = VIEW_CHANNEL if overwrite.allow_view else 0
        deny = 0 if overwrite.allow_view else VIEW_CHANNEL
        payloads.append({
            "id": overwrite.subject_id,
            "type": OVERWRITE_TYPE_ROLE,
            "allow": str(allow),
            "deny": str(deny),
        })
    return payloads


@contextmanager
def _guild_api_errors() -> Iterator[None]:
    """Re-raise HTTP and transport failures as ``GuildAPIError``."""
    try:
        yield
    except discord.HTTPException as e:
        raise GuildAPIError(str(e), e.status) from e
    except TRANSPORT_ERRORS as e:
        raise GuildAPIError(str(e) or type(e).__name__) from e


class DiscordGuildAPI:
    """``GuildAPI`` backed by a discord.py client."""

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    async def _get_guild(self, guild_id: str) -> discord.Guild:
        guild = self._client.get_guild(int(guild_id))
        if guild is not None:
            return guild
        with _guild_api_errors():
            return await self._client.fetch_guild(int(guild_id))

    async def create_role(self, guild_id: str, name: str, mentionable: bool) -> ProvisionedRole:
        guild = await self._get_guild(guild_id)
        with _guild_api_errors():
            role = await guild.create_role(name=name, mentionable=mentionable)
        logger.info(f"Created role '{role.name}' ({role.id}) in guild {guild_id}")
        return ProvisionedRole(id=str(role.id), name=role.name, mentionable=role.mentionable)

    async def create_channel(self, guild_id: str, spec: ChannelSpec) -> ProvisionedChannel:
        if spec.kind not in CHANNEL_TYPES:
            raise ValueError(f"Unsupported channel kind: {spec.kind}")

        options = {
            "name": spec.name,
            "permission_overwrites": _to_overwrite_payloads(spec),
        }
        if spec.parent_id:
            options["parent_id"] = spec.parent_id

        with _guild_api_errors():
            data = await self._client.http.create_channel(int(guild_id), CHANNEL_TYPES[spec.kind], **options)

        logger.info(f"Created {spec.kind.value} channel '{data['name']}' ({data['id']}) in guild {guild_id}")
        return ProvisionedChannel(
            id=str(data["id"]),
            name=data["name"],
            kind=spec.kind,
            parent_id=spec.parent_id,
            permission_overwrites=spec.permission_overwrites,
        )

    async def get_onboarding(self, guild_id: str) -> OnboardingConfig:
        route = Route("GET", "/guilds/{guild_id}/onboarding", guild_id=int(guild_id))
        with _guild_api_errors():
            data = await self._client.http.request(route)
        try:
            return OnboardingConfig.from_dict(data or {})
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise GuildAPIError(f"Malformed onboarding payload: {e}") from e

    async def update_onboarding(self, guild_id: str, config: OnboardingConfig) -> OnboardingConfig:
        route = Route("PUT", "/guilds/{guild_id}/onboarding", guild_id=int(guild_id))
        with _guild_api_errors():
            data = await self._client.http.request(route, json=config.to_dict())
        logger.info(f"Updated onboarding for guild {guild_id}")
        try:
            return OnboardingConfig.from_dict(data or {})
        except (AttributeError, KeyError, TypeError, ValueError):
            logger.warning(f"Unreadable onboarding response for guild {guild_id}, keeping the sent configuration")
            return config
