"""Slash-command music cog delegating to the queue controller."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import discord
from discord import app_commands
from discord.ext import commands

from h4bot.application.commands.join_voice import JoinStatus
from h4bot.application.commands.play_track import PlayTrackResult, PlayTrackStatus
from h4bot.application.queries.get_queue import GetQueueQuery, QueueInfo
from h4bot.domain.music.entities import Track
from h4bot.domain.shared.constants import LimitConstants
from h4bot.domain.shared.datetime_utils import UtcDateTime
from h4bot.domain.shared.messages import DiscordUIMessages, EmojiConstants, ErrorMessages
from h4bot.infrastructure.discord.guards.voice_guards import (
    ensure_user_in_voice,
    get_member,
    send_ephemeral,
)
from h4bot.utils.reply import format_duration, truncate

if TYPE_CHECKING:
    from ....config.container import Container

logger = logging.getLogger(__name__)


def render_play_result(result: PlayTrackResult, source_ref: str) -> str:
    track = result.track
    match result.status:
        case PlayTrackStatus.STARTED_PLAYING if track is not None:
            return DiscordUIMessages.SUCCESS_NOW_PLAYING.format(title=truncate(track.title))
        case PlayTrackStatus.QUEUED if track is not None:
            return DiscordUIMessages.SUCCESS_QUEUED.format(
                title=truncate(track.title), position=result.queue_position
            )
        case PlayTrackStatus.INVALID_SOURCE:
            return DiscordUIMessages.ERROR_INVALID_SOURCE
        case PlayTrackStatus.NOT_IN_VOICE:
            return DiscordUIMessages.STATE_NEED_TO_BE_IN_VOICE
        case PlayTrackStatus.CHANNEL_MISMATCH:
            return DiscordUIMessages.STATE_CHANNEL_MISMATCH
        case PlayTrackStatus.RESOLUTION_ERROR:
            return DiscordUIMessages.ERROR_TRACK_NOT_FOUND.format(query=truncate(source_ref))
        case _:
            return f"{EmojiConstants.ERROR} {result.message}"


def _requester_mention(track: Track) -> str | None:
    if not track.requested_by_id:
        return None
    return DiscordUIMessages.MENTION_USER.format(user_id=track.requested_by_id)


def build_queue_embed(info: QueueInfo) -> discord.Embed:
    embed = discord.Embed(
        title=DiscordUIMessages.EMBED_QUEUE.format(total_tracks=info.length),
        color=discord.Color.blurple(),
    )

    if info.current_track:
        embed.add_field(
            name=f"{EmojiConstants.MUSIC} {DiscordUIMessages.EMBED_NOW_PLAYING}",
            value=f"**{truncate(info.current_track.title)}**\n"
            f"Duration: {format_duration(info.current_track.duration_seconds)}",
            inline=False,
        )

    shown = info.upcoming[: LimitConstants.QUEUE_EMBED_MAX_TRACKS]
    for idx, track in enumerate(shown, start=1):
        requester = _requester_mention(track) or "Unknown"
        embed.add_field(
            name=f"{idx}. {truncate(track.title)}",
            value=f"Requested by: {requester}",
            inline=False,
        )

    footer = []
    if info.total_duration:
        footer.append(f"Total duration: {format_duration(info.total_duration)}")
    if len(info.upcoming) > len(shown):
        footer.append(f"+{len(info.upcoming) - len(shown)} more")
    if footer:
        embed.set_footer(text=" • ".join(footer))
    if info.session_started_at is not None:
        embed.description = f"Session started {UtcDateTime(info.session_started_at).discord_timestamp()}"
    return embed


class MusicCog(commands.Cog):
    def __init__(self, bot: commands.Bot, container: Container) -> None:
        self.bot = bot
        self.container = container

    # ─────────────────────────────────────────────────────────────────
    # Voice Events
    # ─────────────────────────────────────────────────────────────────

    @commands.Cog.listener()
    async def on_voice_state_update(
        self, member: discord.Member, before: discord.VoiceState, after: discord.VoiceState
    ) -> None:
        if self.bot.user is None or member.id != self.bot.user.id:
            return

        if before.channel is not None and after.channel is None:
            dropped = await self.container.queue_controller.handle_voice_disconnected(
                member.guild.id
            )
            if dropped:
                logger.info("Bot was disconnected from voice in guild %s", member.guild.id)

    @app_commands.command(name="join", description="Join your voice channel.")
    @app_commands.guild_only()
    async def join(self, interaction: discord.Interaction) -> None:
        member = await ensure_user_in_voice(interaction)
        if member is None:
            return

        assert interaction.guild is not None

        result = await self.container.queue_controller.join(interaction.guild.id, member.id)
        channel = f"<#{result.channel_id}>" if result.channel_id else "voice"

        match result.status:
            case JoinStatus.JOINED:
                await interaction.response.send_message(
                    DiscordUIMessages.SUCCESS_JOINED.format(channel=channel)
                )
            case JoinStatus.ALREADY_JOINED:
                await send_ephemeral(
                    interaction, DiscordUIMessages.STATE_ALREADY_JOINED.format(channel=channel)
                )
            case JoinStatus.CHANNEL_MISMATCH:
                await send_ephemeral(interaction, DiscordUIMessages.STATE_CHANNEL_MISMATCH)
            case JoinStatus.NOT_IN_VOICE:
                await send_ephemeral(interaction, DiscordUIMessages.STATE_NEED_TO_BE_IN_VOICE)
            case _:
                await send_ephemeral(interaction, DiscordUIMessages.ERROR_COULD_NOT_JOIN_VOICE)

    @app_commands.command(name="leave", description="Leave the voice channel.")
    @app_commands.guild_only()
    async def leave(self, interaction: discord.Interaction) -> None:
        if await get_member(interaction) is None:
            return

        assert interaction.guild is not None

        if await self.container.queue_controller.leave(interaction.guild.id):
            await interaction.response.send_message(DiscordUIMessages.SUCCESS_LEFT)
        else:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOT_CONNECTED_TO_VOICE)

    @app_commands.command(name="play", description="Play audio from a URL.")
    @app_commands.describe(url="Link to a video or audio", next="Play right after the current track")
    @app_commands.guild_only()
    async def play(self, interaction: discord.Interaction, url: str, next: bool = False) -> None:
        member = await get_member(interaction)
        if member is None:
            return

        assert interaction.guild is not None

        await interaction.response.defer(thinking=True)

        result = await self.container.queue_controller.request_play(
            interaction.guild.id, url, requester_id=member.id, play_next=next
        )
        message = render_play_result(result, url)
        if result.is_success:
            await interaction.followup.send(message)
        else:
            await interaction.followup.send(message, ephemeral=True)

    @app_commands.command(name="stop", description="Stop playback and clear the queue.")
    @app_commands.guild_only()
    async def stop(self, interaction: discord.Interaction) -> None:
        if await get_member(interaction) is None:
            return

        assert interaction.guild is not None

        removed = await self.container.queue_controller.stop(interaction.guild.id)
        if removed:
            await interaction.response.send_message(
                DiscordUIMessages.SUCCESS_STOPPED.format(count=removed)
            )
        else:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_PLAYING)

    @app_commands.command(name="skip", description="Skip the current track.")
    @app_commands.guild_only()
    async def skip(self, interaction: discord.Interaction) -> None:
        if await get_member(interaction) is None:
            return

        assert interaction.guild is not None

        skipped = await self.container.queue_controller.skip(interaction.guild.id)
        if skipped is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_PLAYING)
            return
        await interaction.response.send_message(
            DiscordUIMessages.SUCCESS_SKIPPED.format(title=truncate(skipped.title))
        )

    @app_commands.command(name="queue", description="Show the current queue.")
    @app_commands.guild_only()
    async def queue(self, interaction: discord.Interaction) -> None:
        if await get_member(interaction) is None:
            return

        assert interaction.guild is not None

        info = await self.container.get_queue_handler.handle(
            GetQueueQuery(guild_id=interaction.guild.id)
        )
        if info.is_empty:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_QUEUE_EMPTY)
            return

        await interaction.response.send_message(embed=build_queue_embed(info), ephemeral=True)

    @app_commands.command(name="now_playing", description="Show the track that is playing.")
    @app_commands.guild_only()
    async def now_playing(self, interaction: discord.Interaction) -> None:
        if await get_member(interaction) is None:
            return

        assert interaction.guild is not None

        track = await self.container.queue_controller.now_playing(interaction.guild.id)
        if track is None:
            await send_ephemeral(interaction, DiscordUIMessages.STATE_NOTHING_PLAYING)
            return

        embed = discord.Embed(
            title=truncate(track.title),
            url=track.webpage_url,
            description=f"Duration: {format_duration(track.duration_seconds)}",
            color=discord.Color.green(),
        )
        embed.set_author(name=DiscordUIMessages.EMBED_NOW_PLAYING)
        if track.author:
            embed.add_field(name="By", value=truncate(track.author), inline=True)
        if track.requested_by_id:
            embed.add_field(name="Requested by", value=_requester_mention(track), inline=True)
        if track.thumbnail_url:
            embed.set_thumbnail(url=track.thumbnail_url)
        await interaction.response.send_message(embed=embed)


async def setup(bot: commands.Bot) -> None:
    container = getattr(bot, "container", None)
    if container is None:
        raise RuntimeError(ErrorMessages.CONTAINER_NOT_FOUND)

    await bot.add_cog(MusicCog(bot, container))
