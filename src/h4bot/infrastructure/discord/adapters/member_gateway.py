"""Discord member gateway implementing MemberGateway over discord.py."""

from __future__ import annotations

import logging

import discord

from h4bot.application.interfaces.member_gateway import MemberGateway
from h4bot.domain.nicknames.entities import Member
from h4bot.domain.shared.exceptions import MemberGatewayError, MemberUpdateError
from h4bot.domain.shared.messages import LogTemplates

logger = logging.getLogger(__name__)


class DiscordMemberGateway(MemberGateway):
    def __init__(self, bot: discord.Client) -> None:
        self._bot = bot

    def _get_guild(self, guild_id: int) -> discord.Guild:
        guild = self._bot.get_guild(guild_id)
        if guild is None:
            logger.warning(LogTemplates.GUILD_NOT_FOUND, guild_id)
            raise MemberGatewayError(guild_id)
        return guild

    def _to_member(self, guild: discord.Guild, member: discord.Member) -> Member:
        bot_user = self._bot.user
        immutable = member.id == guild.owner_id or (bot_user is not None and member.id == bot_user.id)
        return Member(
            id=member.id,
            display_name=member.display_name or str(member.id),
            mutable=not immutable,
        )

    async def list_members(self, guild_id: int, limit: int) -> list[Member]:
        guild = self._get_guild(guild_id)
        try:
            return [self._to_member(guild, m) async for m in guild.fetch_members(limit=limit)]
        except (discord.HTTPException, discord.ClientException) as e:
            raise MemberGatewayError(guild_id, f"Could not list members: {e}") from e

    async def _resolve_member(self, guild: discord.Guild, member_id: int) -> discord.Member:
        member = guild.get_member(member_id)
        if member is not None:
            return member
        try:
            return await guild.fetch_member(member_id)
        except discord.NotFound as e:
            raise MemberUpdateError(member_id, "Member is no longer in the guild", status=404) from e
        except discord.HTTPException as e:
            raise MemberUpdateError(member_id, str(e), status=e.status) from e

    async def rename_member(self, guild_id: int, member_id: int, label: str) -> None:
        guild = self._get_guild(guild_id)
        member = await self._resolve_member(guild, member_id)
        try:
            await member.edit(nick=label)
        except discord.RateLimited as e:
            raise MemberUpdateError(
                member_id, "Rate limited", status=429, retry_after=e.retry_after
            ) from e
        except discord.Forbidden as e:
            raise MemberUpdateError(member_id, "Missing permission to rename", status=403) from e
        except discord.HTTPException as e:
            raise MemberUpdateError(member_id, str(e), status=e.status) from e

    def current_voice_channel(self, guild_id: int, member_id: int) -> int | None:
        guild = self._bot.get_guild(guild_id)
        if guild is None:
            return None
        member = guild.get_member(member_id)
        if member is None or member.voice is None or member.voice.channel is None:
            return None
        return member.voice.channel.id
