"""Queue Controller - binds play requests to voice sessions and their queues."""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import TYPE_CHECKING

from ...domain.music.entities import Track
from ...domain.shared.exceptions import ResolutionError
from ...domain.shared.messages import ErrorMessages, LogTemplates
from ...domain.shared.types import DiscordSnowflake
from ..commands.join_voice import JoinResult, JoinStatus
from ..commands.play_track import PlayTrackResult, PlayTrackStatus

if TYPE_CHECKING:
    from ...domain.music.entities import VoiceSession
    from ...domain.music.repository import SessionRepository
    from ..interfaces.audio_resolver import AudioResolver
    from ..interfaces.member_gateway import MemberGateway
    from ..interfaces.voice_adapter import VoiceAdapter

logger = logging.getLogger(__name__)


class QueueController:
    """Orchestrates voice sessions, the playback queue and the audio transport.

    Every operation on a guild's session runs under that guild's lock, so
    concurrent requests are applied in arrival order.
    """

    def __init__(
        self,
        *,
        session_repository: SessionRepository,
        member_gateway: MemberGateway,
        voice_adapter: VoiceAdapter,
        audio_resolver: AudioResolver,
    ) -> None:
        self._session_repo = session_repository
        self._members = member_gateway
        self._voice = voice_adapter
        self._resolver = audio_resolver

        self._guild_locks: dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)

        # Stopping audio on purpose still fires the transport's track-end
        # event. Suppress the next one per guild so it doesn't advance the queue.
        self._ignore_next_voice_track_end: set[DiscordSnowflake] = set()

        self._voice.set_on_track_end_callback(self.handle_track_end)

    async def request_play(
        self,
        guild_id: DiscordSnowflake,
        source_ref: str,
        *,
        requester_id: DiscordSnowflake,
        play_next: bool = False,
    ) -> PlayTrackResult:
        source_ref = source_ref.strip()
        logger.info(LogTemplates.QUEUE_REQUEST_PLAY, guild_id, requester_id, source_ref)

        if not self._resolver.is_url(source_ref):
            return PlayTrackResult.error(
                PlayTrackStatus.INVALID_SOURCE, "Must provide a valid URL to a video or audio"
            )

        channel_id = self._members.current_voice_channel(guild_id, requester_id)
        if channel_id is None:
            return PlayTrackResult.error(
                PlayTrackStatus.NOT_IN_VOICE, "You are not in a voice channel"
            )

        async with self._guild_locks[guild_id]:
            session = await self._live_session(guild_id)
            if session is not None and not session.is_bound_to(channel_id):
                return PlayTrackResult.error(
                    PlayTrackStatus.CHANNEL_MISMATCH,
                    "Already playing in a different voice channel",
                )

            try:
                track = await self._resolver.resolve(source_ref)
            except ResolutionError as e:
                return PlayTrackResult.error(PlayTrackStatus.RESOLUTION_ERROR, e.message)
            if track is None:
                return PlayTrackResult.error(
                    PlayTrackStatus.RESOLUTION_ERROR, ErrorMessages.RESOLVER_RETURNED_NONE
                )
            track = track.with_requester(requester_id)

            session = await self._ensure_session(guild_id, channel_id, session)
            if session is None:
                return PlayTrackResult.error(
                    PlayTrackStatus.VOICE_ERROR, "Could not connect to voice channel"
                )

            queue = session.queue
            if play_next:
                new_length = queue.insert_after_head(track)
                position = 1 if new_length > 1 else 0
            else:
                new_length = queue.append(track)
                position = new_length - 1

            if new_length > 1:
                logger.info(LogTemplates.QUEUE_TRACK_APPENDED, track.title, guild_id, position)
                return PlayTrackResult.queued(track, position, new_length)

            if not await self._voice.play(guild_id, track):
                queue.clear()
                logger.warning(LogTemplates.QUEUE_TRACK_ROLLED_BACK, track.title, guild_id)
                return PlayTrackResult.error(
                    PlayTrackStatus.VOICE_ERROR, f"Could not start playback of {track.title}"
                )

            return PlayTrackResult.playing(track, new_length)

    async def _live_session(self, guild_id: int) -> VoiceSession | None:
        """Return the guild's session only if the transport still backs it.

        A session whose voice connection is gone (kicked, dropped) is deleted.
        If the bot was moved, the session follows it to the new channel.
        """
        session = await self._session_repo.get(guild_id)
        if session is None:
            return None

        if not self._voice.is_connected(guild_id):
            await self._session_repo.delete(guild_id)
            self._ignore_next_voice_track_end.discard(guild_id)
            logger.info(LogTemplates.SESSION_STALE_DROPPED, guild_id, session.channel_id)
            return None

        current = self._voice.get_current_channel_id(guild_id)
        if current is not None and not session.is_bound_to(current):
            logger.info(LogTemplates.SESSION_REBOUND, guild_id, session.channel_id, current)
            session.rebind(current)
        return session

    async def _ensure_session(
        self, guild_id: int, channel_id: int, session: VoiceSession | None
    ) -> VoiceSession | None:
        """Return a session whose transport is connected, joining if needed."""
        if session is not None and self._voice.is_connected(guild_id):
            return session
        if not await self._voice.connect(guild_id, channel_id):
            return None
        if session is None:
            session = await self._session_repo.create(guild_id, channel_id)
        return session

    async def join(self, guild_id: DiscordSnowflake, requester_id: DiscordSnowflake) -> JoinResult:
        channel_id = self._members.current_voice_channel(guild_id, requester_id)
        if channel_id is None:
            return JoinResult(status=JoinStatus.NOT_IN_VOICE)

        async with self._guild_locks[guild_id]:
            session = await self._live_session(guild_id)
            if session is not None and not session.is_bound_to(channel_id):
                return JoinResult(status=JoinStatus.CHANNEL_MISMATCH, channel_id=session.channel_id)

            already_joined = session is not None and self._voice.is_connected(guild_id)
            if await self._ensure_session(guild_id, channel_id, session) is None:
                return JoinResult(status=JoinStatus.VOICE_ERROR, channel_id=channel_id)

            status = JoinStatus.ALREADY_JOINED if already_joined else JoinStatus.JOINED
            return JoinResult(status=status, channel_id=channel_id)

    async def leave(self, guild_id: DiscordSnowflake) -> bool:
        """Stop, disconnect and forget the guild's session. Returns False if there was none."""
        async with self._guild_locks[guild_id]:
            session = await self._session_repo.get(guild_id)
            if self._voice.is_playing(guild_id):
                self._ignore_next_voice_track_end.add(guild_id)
                await self._voice.stop(guild_id)
            await self._voice.disconnect(guild_id)
            await self._session_repo.delete(guild_id)
            return session is not None

    async def handle_voice_disconnected(self, guild_id: DiscordSnowflake) -> bool:
        """Forget the session after the bot lost its voice connection from outside.

        Returns False if there was no session to forget.
        """
        async with self._guild_locks[guild_id]:
            session = await self._session_repo.get(guild_id)
            if session is None:
                return False
            await self._session_repo.delete(guild_id)
            self._ignore_next_voice_track_end.discard(guild_id)
            logger.info(LogTemplates.SESSION_STALE_DROPPED, guild_id, session.channel_id)
            return True

    async def stop(self, guild_id: DiscordSnowflake) -> int:
        """Stop playback and clear the queue. The session stays bound to its channel."""
        async with self._guild_locks[guild_id]:
            session = await self._session_repo.get(guild_id)
            if session is None:
                return 0

            if self._voice.is_playing(guild_id):
                self._ignore_next_voice_track_end.add(guild_id)
                await self._voice.stop(guild_id)

            removed = session.queue.clear()
            logger.info(LogTemplates.QUEUE_CLEARED, removed, guild_id)
            return removed

    async def skip(self, guild_id: DiscordSnowflake) -> Track | None:
        """Skip the current track; returns the skipped track, or None if nothing was playing."""
        async with self._guild_locks[guild_id]:
            session = await self._session_repo.get(guild_id)
            if session is None or session.now_playing is None:
                return None

            skipped = session.now_playing
            if self._voice.is_playing(guild_id):
                # The transport's track-end event advances the queue.
                await self._voice.stop(guild_id)
            else:
                await self._advance_locked(guild_id)
            return skipped

    async def now_playing(self, guild_id: DiscordSnowflake) -> Track | None:
        session = await self._session_repo.get(guild_id)
        return session.now_playing if session is not None else None

    async def handle_track_end(self, guild_id: DiscordSnowflake) -> None:
        if guild_id in self._ignore_next_voice_track_end:
            self._ignore_next_voice_track_end.discard(guild_id)
            logger.debug(LogTemplates.PLAYBACK_IGNORING_CALLBACK, guild_id)
            return

        async with self._guild_locks[guild_id]:
            await self._advance_locked(guild_id)

    async def _advance_locked(self, guild_id: int) -> None:
        session = await self._session_repo.get(guild_id)
        if session is None:
            return

        next_track = session.queue.advance()
        while next_track is not None:
            if await self._voice.play(guild_id, next_track):
                logger.info(LogTemplates.QUEUE_ADVANCED, guild_id, next_track.title)
                return
            logger.warning(LogTemplates.PLAYBACK_FAILED_START, next_track.title)
            next_track = session.queue.advance()

        logger.info(LogTemplates.QUEUE_EXHAUSTED, guild_id)

    async def leave_all(self) -> None:
        for session in await self._session_repo.all():
            try:
                await self.leave(session.guild_id)
            except Exception as e:
                # Shutdown path; keep leaving the other guilds.
                logger.warning(LogTemplates.VOICE_LEAVE_FAILED, session.guild_id, e)
