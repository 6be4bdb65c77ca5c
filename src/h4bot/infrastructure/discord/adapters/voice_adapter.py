"""Discord voice adapter implementing VoiceAdapter for connection and playback."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

import discord

from h4bot.application.interfaces.voice_adapter import VoiceAdapter
from h4bot.config.settings import AudioSettings
from h4bot.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from ....domain.music.entities import Track

logger = logging.getLogger(__name__)


class DiscordVoiceAdapter(VoiceAdapter):
    def __init__(self, bot: discord.Client, settings: AudioSettings | None = None) -> None:
        self._bot = bot
        self._settings = settings or AudioSettings()
        self._volume = self._settings.default_volume
        self._connect_timeout = self._settings.connect_timeout_seconds
        self._ffmpeg_options = self._settings.ffmpeg_options
        self._on_track_end: Callable[[int], Awaitable[None]] | None = None

    def _get_voice_client(self, guild_id: int) -> discord.VoiceClient | None:
        guild = self._bot.get_guild(guild_id)
        if not guild:
            return None

        vc = guild.voice_client
        return vc if isinstance(vc, discord.VoiceClient) else None

    async def connect(self, guild_id: int, channel_id: int) -> bool:
        guild = self._bot.get_guild(guild_id)
        if not guild:
            logger.warning(LogTemplates.GUILD_NOT_FOUND, guild_id)
            return False

        channel = guild.get_channel(channel_id)
        if not isinstance(channel, discord.VoiceChannel | discord.StageChannel):
            logger.warning(LogTemplates.CHANNEL_NOT_VOICE, channel_id)
            return False

        vc = self._get_voice_client(guild_id)
        if vc is not None and not vc.is_connected():
            logger.warning(LogTemplates.VOICE_STALE_CLEANUP, guild_id)
            await self.disconnect(guild_id)

        try:
            async with asyncio.timeout(self._connect_timeout):
                await channel.connect(self_deaf=True)
            logger.info(LogTemplates.VOICE_CONNECTED, channel.name, guild.name)
            return True
        except TimeoutError:
            logger.error(LogTemplates.VOICE_CONNECTION_TIMEOUT, channel_id)
            return False
        except discord.Forbidden:
            logger.error(LogTemplates.VOICE_NO_PERMISSION, channel_id)
            return False
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            return False

    async def disconnect(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            return True

        try:
            await vc.disconnect(force=True)
        except discord.ClientException as e:
            logger.error(LogTemplates.VOICE_CLIENT_ERROR, e)
            return False
        logger.info(LogTemplates.VOICE_DISCONNECTED, guild_id)
        return True

    async def play(self, guild_id: int, track: Track) -> bool:
        vc = self._get_voice_client(guild_id)
        if not vc:
            logger.warning(LogTemplates.VOICE_NOT_CONNECTED, guild_id)
            return False

        if not track.stream_url:
            logger.error(LogTemplates.YTDLP_NO_STREAM_URL, track.title)
            return False

        try:
            source = discord.FFmpegPCMAudio(
                track.stream_url,
                before_options=self._ffmpeg_options.get("before_options", ""),
                options=self._ffmpeg_options.get("options", ""),
            )
            volume_source = discord.PCMVolumeTransformer(source, volume=self._volume)

            def after_callback(error: Exception | None = None) -> None:
                # Runs on the FFmpeg reader thread.
                logger.info(LogTemplates.TRACK_ENDED, guild_id, error)
                if error:
                    logger.warning(LogTemplates.PLAYBACK_ERROR, guild_id, error)

                asyncio.run_coroutine_threadsafe(
                    self._handle_track_end(guild_id),
                    self._bot.loop,
                )

            vc.play(volume_source, after=after_callback)
        except discord.ClientException as e:
            logger.error(LogTemplates.PLAYBACK_FAILED_START, e)
            return False

        logger.info(LogTemplates.PLAYBACK_STARTED, track.title, guild_id)
        return True

    async def stop(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        if vc and (vc.is_playing() or vc.is_paused()):
            vc.stop()
            logger.info(LogTemplates.PLAYBACK_STOPPED, guild_id)
        return True

    def is_connected(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        return vc is not None and vc.is_connected()

    def is_playing(self, guild_id: int) -> bool:
        vc = self._get_voice_client(guild_id)
        return vc is not None and vc.is_playing()

    def get_current_channel_id(self, guild_id: int) -> int | None:
        vc = self._get_voice_client(guild_id)
        if vc and vc.channel:
            return vc.channel.id
        return None

    def set_on_track_end_callback(self, callback: Callable[[int], Awaitable[None]]) -> None:
        self._on_track_end = callback

    async def _handle_track_end(self, guild_id: int) -> None:
        if self._on_track_end is None:
            logger.warning(LogTemplates.PLAYBACK_NO_CALLBACK, guild_id)
            return

        logger.debug(LogTemplates.PLAYBACK_CALLING_CALLBACK, guild_id)
        try:
            await self._on_track_end(guild_id)
        except Exception as e:
            # Detached from any caller; log and drop.
            logger.error(LogTemplates.PLAYBACK_CALLBACK_ERROR, guild_id, e)
