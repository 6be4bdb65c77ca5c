"""Port interface for reading and updating guild members."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from h4bot.domain.shared.types import ChannelIdField, DiscordSnowflake, NicknameStr

if TYPE_CHECKING:
    from ...domain.nicknames.entities import Member


class MemberGateway(ABC):
    """Interface for member listing, renaming and voice presence."""

    @abstractmethod
    async def list_members(self, guild_id: DiscordSnowflake, limit: int) -> list["Member"]:
        """List up to ``limit`` members of a guild.

        Raises:
            MemberGatewayError: If the member list cannot be fetched at all.
        """
        ...

    @abstractmethod
    async def rename_member(
        self, guild_id: DiscordSnowflake, member_id: DiscordSnowflake, label: NicknameStr
    ) -> None:
        """Set a member's guild nickname. Exactly one remote call, no retries.

        Raises:
            MemberUpdateError: If the platform rejects this one update.
            MemberGatewayError: If the guild itself is unreachable.
        """
        ...

    @abstractmethod
    def current_voice_channel(
        self, guild_id: DiscordSnowflake, member_id: DiscordSnowflake
    ) -> ChannelIdField | None:
        """Return the voice channel a member is connected to, if any."""
        ...
