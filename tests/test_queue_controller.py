"""
Tests for the playback queue and QueueController

Tests for:
- PlaybackQueue ordering: append, insert after head, advance, clear
- request_play: first track plays, later ones queue, play-next ordering
- Preconditions: invalid source, not in voice, channel mismatch
- Failure paths: resolution errors, voice connect/play refusal
- stop / skip / leave and track-end suppression
"""

from unittest.mock import AsyncMock

import pytest

from h4bot.application.commands.join_voice import JoinStatus
from h4bot.application.commands.play_track import PlayTrackStatus
from h4bot.application.services.queue_controller import QueueController
from h4bot.domain.music.entities import PlaybackQueue
from h4bot.domain.shared.exceptions import ResolutionError

GUILD = 111
CHANNEL = 222
OTHER_CHANNEL = 333
USER = 444
URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


# ============================================================================
# PlaybackQueue Tests
# ============================================================================


class TestPlaybackQueue:
    """Tests for queue ordering."""

    def test_append_returns_new_length(self, make_track):
        queue = PlaybackQueue()
        assert queue.append(make_track("a")) == 1
        assert queue.append(make_track("b")) == 2
        assert len(queue) == 2

    def test_insert_after_head_keeps_current_track(self, make_track):
        """Should yield [A, C, B] when C is queued to play next after A and B."""
        a, b, c = make_track("a"), make_track("b"), make_track("c")
        queue = PlaybackQueue()
        queue.append(a)
        queue.append(b)

        queue.insert_after_head(c)

        assert queue.tracks == [a, c, b]

    def test_insert_after_head_on_empty_queue(self, make_track):
        queue = PlaybackQueue()
        a = make_track("a")
        assert queue.insert_after_head(a) == 1
        assert queue.peek_head() == a

    def test_advance_pops_head(self, make_track):
        a, b = make_track("a"), make_track("b")
        queue = PlaybackQueue(tracks=[a, b])

        assert queue.advance() == b
        assert queue.advance() is None
        assert queue.is_empty

    def test_advance_on_empty_queue(self):
        assert PlaybackQueue().advance() is None

    def test_upcoming_excludes_head(self, make_track):
        a, b, c = make_track("a"), make_track("b"), make_track("c")
        queue = PlaybackQueue(tracks=[a, b, c])
        assert queue.upcoming == [b, c]

    def test_clear_returns_removed_count(self, make_track):
        queue = PlaybackQueue(tracks=[make_track("a"), make_track("b")])

        assert queue.clear() == 2
        assert queue.clear() == 0


# ============================================================================
# QueueController Tests
# ============================================================================


@pytest.fixture
def controller(session_repository, mock_member_gateway, mock_voice_adapter, mock_audio_resolver):
    mock_member_gateway.current_voice_channel.return_value = CHANNEL
    return QueueController(
        session_repository=session_repository,
        member_gateway=mock_member_gateway,
        voice_adapter=mock_voice_adapter,
        audio_resolver=mock_audio_resolver,
    )


class TestRequestPlay:
    """Tests for play requests."""

    def test_registers_track_end_callback(self, controller, mock_voice_adapter):
        mock_voice_adapter.set_on_track_end_callback.assert_called_once_with(
            controller.handle_track_end
        )

    @pytest.mark.asyncio
    async def test_first_track_plays_second_is_queued(
        self, controller, mock_voice_adapter, mock_audio_resolver, make_track
    ):
        """Should start the first track and queue the second at position 1."""
        a, b = make_track("a"), make_track("b")
        mock_audio_resolver.resolve.side_effect = [a, b]

        first = await controller.request_play(GUILD, URL, requester_id=USER)
        second = await controller.request_play(GUILD, URL, requester_id=USER)

        assert first.status is PlayTrackStatus.STARTED_PLAYING
        assert first.queue_position == 0
        assert second.status is PlayTrackStatus.QUEUED
        assert second.queue_position == 1
        assert second.queue_length == 2
        mock_voice_adapter.connect.assert_awaited_once_with(GUILD, CHANNEL)
        mock_voice_adapter.play.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_track_is_tagged_with_requester(self, controller):
        result = await controller.request_play(GUILD, URL, requester_id=USER)
        assert result.track.requested_by_id == USER

    @pytest.mark.asyncio
    async def test_play_next_goes_after_current(
        self, controller, session_repository, mock_audio_resolver, make_track
    ):
        """Should produce [A, C, B] for play A, play B, play-next C."""
        a, b, c = make_track("a"), make_track("b"), make_track("c")
        mock_audio_resolver.resolve.side_effect = [a, b, c]

        await controller.request_play(GUILD, URL, requester_id=USER)
        await controller.request_play(GUILD, URL, requester_id=USER)
        result = await controller.request_play(GUILD, URL, requester_id=USER, play_next=True)

        session = await session_repository.get(GUILD)
        assert [t.id.value for t in session.queue.tracks] == ["a", "c", "b"]
        assert result.queue_position == 1

    @pytest.mark.asyncio
    async def test_invalid_source_is_rejected_before_resolving(
        self, controller, mock_audio_resolver, mock_voice_adapter
    ):
        mock_audio_resolver.is_url.return_value = False

        result = await controller.request_play(GUILD, "  not a url ", requester_id=USER)

        assert result.status is PlayTrackStatus.INVALID_SOURCE
        mock_audio_resolver.is_url.assert_called_once_with("not a url")
        mock_audio_resolver.resolve.assert_not_called()
        mock_voice_adapter.connect.assert_not_called()

    @pytest.mark.asyncio
    async def test_requester_not_in_voice(self, controller, mock_member_gateway, mock_voice_adapter):
        mock_member_gateway.current_voice_channel.return_value = None

        result = await controller.request_play(GUILD, URL, requester_id=USER)

        assert result.status is PlayTrackStatus.NOT_IN_VOICE
        mock_voice_adapter.connect.assert_not_called()

    @pytest.mark.asyncio
    async def test_channel_mismatch_leaves_queue_unchanged(
        self, controller, session_repository, mock_member_gateway, mock_audio_resolver
    ):
        """Should refuse requests from another channel without touching the queue."""
        await controller.request_play(GUILD, URL, requester_id=USER)
        mock_member_gateway.current_voice_channel.return_value = OTHER_CHANNEL
        mock_audio_resolver.resolve.reset_mock()

        result = await controller.request_play(GUILD, URL, requester_id=USER + 1)

        assert result.status is PlayTrackStatus.CHANNEL_MISMATCH
        session = await session_repository.get(GUILD)
        assert len(session.queue) == 1
        mock_audio_resolver.resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_resolution_error(self, controller, session_repository, mock_audio_resolver):
        mock_audio_resolver.resolve.side_effect = ResolutionError(URL, "Video unavailable")

        result = await controller.request_play(GUILD, URL, requester_id=USER)

        assert result.status is PlayTrackStatus.RESOLUTION_ERROR
        assert result.message == "Video unavailable"
        assert await session_repository.get(GUILD) is None

    @pytest.mark.asyncio
    async def test_resolver_returning_none(self, controller, mock_audio_resolver):
        mock_audio_resolver.resolve.return_value = None

        result = await controller.request_play(GUILD, URL, requester_id=USER)

        assert result.status is PlayTrackStatus.RESOLUTION_ERROR

    @pytest.mark.asyncio
    async def test_connect_failure(self, controller, session_repository, mock_voice_adapter):
        mock_voice_adapter.connect.return_value = False

        result = await controller.request_play(GUILD, URL, requester_id=USER)

        assert result.status is PlayTrackStatus.VOICE_ERROR
        assert await session_repository.get(GUILD) is None

    @pytest.mark.asyncio
    async def test_play_refusal_rolls_back_queue(
        self, controller, session_repository, mock_voice_adapter
    ):
        """Should remove the track again when the transport refuses to play it."""
        mock_voice_adapter.play.return_value = False

        result = await controller.request_play(GUILD, URL, requester_id=USER)

        assert result.status is PlayTrackStatus.VOICE_ERROR
        session = await session_repository.get(GUILD)
        assert session.queue.is_empty

    @pytest.mark.asyncio
    async def test_reconnects_when_transport_dropped(self, controller, mock_voice_adapter, make_track):
        await controller.request_play(GUILD, URL, requester_id=USER)
        mock_voice_adapter.is_connected.return_value = False

        await controller.request_play(GUILD, URL, requester_id=USER)

        assert mock_voice_adapter.connect.await_count == 2


class TestStaleSessions:
    """Tests for sessions whose voice connection changed outside the bot's commands."""

    @pytest.mark.asyncio
    async def test_play_from_other_channel_after_disconnect(
        self, controller, session_repository, mock_member_gateway, mock_voice_adapter
    ):
        """Should drop the dead session and start over in the requester's channel."""
        await controller.request_play(GUILD, URL, requester_id=USER)
        mock_voice_adapter.is_connected.return_value = False
        mock_member_gateway.current_voice_channel.return_value = OTHER_CHANNEL

        result = await controller.request_play(GUILD, URL, requester_id=USER + 1)

        assert result.status is PlayTrackStatus.STARTED_PLAYING
        mock_voice_adapter.connect.assert_awaited_with(GUILD, OTHER_CHANNEL)
        session = await session_repository.get(GUILD)
        assert session.channel_id == OTHER_CHANNEL
        assert len(session.queue) == 1

    @pytest.mark.asyncio
    async def test_join_from_other_channel_after_disconnect(
        self, controller, mock_member_gateway, mock_voice_adapter
    ):
        await controller.join(GUILD, USER)
        mock_voice_adapter.is_connected.return_value = False
        mock_member_gateway.current_voice_channel.return_value = OTHER_CHANNEL

        result = await controller.join(GUILD, USER)

        assert result.status is JoinStatus.JOINED
        assert result.channel_id == OTHER_CHANNEL

    @pytest.mark.asyncio
    async def test_session_follows_bot_when_moved(
        self, controller, session_repository, mock_member_gateway, mock_voice_adapter,
        mock_audio_resolver, make_track,
    ):
        """Should rebind to the channel the bot was moved to and keep the queue."""
        mock_audio_resolver.resolve.side_effect = [make_track("a"), make_track("b")]
        await controller.request_play(GUILD, URL, requester_id=USER)
        mock_voice_adapter.get_current_channel_id.return_value = OTHER_CHANNEL
        mock_member_gateway.current_voice_channel.return_value = OTHER_CHANNEL

        result = await controller.request_play(GUILD, URL, requester_id=USER)

        assert result.status is PlayTrackStatus.QUEUED
        assert result.queue_position == 1
        session = await session_repository.get(GUILD)
        assert session.channel_id == OTHER_CHANNEL
        mock_voice_adapter.connect.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_handle_voice_disconnected_forgets_session(
        self, controller, session_repository, mock_voice_adapter
    ):
        await controller.request_play(GUILD, URL, requester_id=USER)

        assert await controller.handle_voice_disconnected(GUILD) is True

        assert await session_repository.get(GUILD) is None
        mock_voice_adapter.disconnect.assert_not_called()
        assert await controller.handle_voice_disconnected(GUILD) is False


class TestJoinAndLeave:
    """Tests for join and leave."""

    @pytest.mark.asyncio
    async def test_join_creates_session(self, controller, session_repository):
        result = await controller.join(GUILD, USER)

        assert result.status is JoinStatus.JOINED
        assert result.channel_id == CHANNEL
        assert await session_repository.exists(GUILD)

    @pytest.mark.asyncio
    async def test_join_twice_reports_already_joined(self, controller):
        await controller.join(GUILD, USER)
        result = await controller.join(GUILD, USER)
        assert result.status is JoinStatus.ALREADY_JOINED

    @pytest.mark.asyncio
    async def test_join_from_other_channel(self, controller, mock_member_gateway):
        await controller.join(GUILD, USER)
        mock_member_gateway.current_voice_channel.return_value = OTHER_CHANNEL

        result = await controller.join(GUILD, USER)

        assert result.status is JoinStatus.CHANNEL_MISMATCH
        assert result.channel_id == CHANNEL

    @pytest.mark.asyncio
    async def test_join_not_in_voice(self, controller, mock_member_gateway):
        mock_member_gateway.current_voice_channel.return_value = None
        result = await controller.join(GUILD, USER)
        assert result.status is JoinStatus.NOT_IN_VOICE

    @pytest.mark.asyncio
    async def test_join_connect_failure(self, controller, mock_voice_adapter):
        mock_voice_adapter.connect.return_value = False
        result = await controller.join(GUILD, USER)
        assert result.status is JoinStatus.VOICE_ERROR

    @pytest.mark.asyncio
    async def test_leave_drops_session_and_disconnects(
        self, controller, session_repository, mock_voice_adapter
    ):
        await controller.request_play(GUILD, URL, requester_id=USER)
        mock_voice_adapter.is_playing.return_value = True

        assert await controller.leave(GUILD) is True

        mock_voice_adapter.stop.assert_awaited_once_with(GUILD)
        mock_voice_adapter.disconnect.assert_awaited_once_with(GUILD)
        assert await session_repository.get(GUILD) is None

    @pytest.mark.asyncio
    async def test_leave_without_session(self, controller):
        assert await controller.leave(GUILD) is False

    @pytest.mark.asyncio
    async def test_leave_all_continues_past_failures(
        self, controller, session_repository, mock_voice_adapter
    ):
        await session_repository.create(1, 10)
        await session_repository.create(2, 20)
        mock_voice_adapter.disconnect = AsyncMock(side_effect=[RuntimeError("boom"), True])

        await controller.leave_all()

        assert mock_voice_adapter.disconnect.await_count == 2
        assert await session_repository.get(2) is None


class TestStopSkipAndTrackEnd:
    """Tests for stop, skip and track-end handling."""

    async def _play_three(self, controller, mock_audio_resolver, make_track):
        tracks = [make_track("a"), make_track("b"), make_track("c")]
        mock_audio_resolver.resolve.side_effect = tracks
        for _ in tracks:
            await controller.request_play(GUILD, URL, requester_id=USER)
        return tracks

    @pytest.mark.asyncio
    async def test_track_end_advances_queue(
        self, controller, mock_voice_adapter, mock_audio_resolver, make_track
    ):
        a, b, c = await self._play_three(controller, mock_audio_resolver, make_track)

        await controller.handle_track_end(GUILD)

        assert (await controller.now_playing(GUILD)).id == b.id
        assert mock_voice_adapter.play.await_args.args[1].id == b.id

    @pytest.mark.asyncio
    async def test_track_end_skips_unplayable_tracks(
        self, controller, mock_voice_adapter, mock_audio_resolver, make_track
    ):
        """Should keep advancing past tracks the transport refuses."""
        a, b, c = await self._play_three(controller, mock_audio_resolver, make_track)
        mock_voice_adapter.play.side_effect = [False, True]

        await controller.handle_track_end(GUILD)

        assert (await controller.now_playing(GUILD)).id == c.id

    @pytest.mark.asyncio
    async def test_stop_clears_queue_and_suppresses_track_end(
        self, controller, session_repository, mock_voice_adapter, mock_audio_resolver, make_track
    ):
        """Should clear the queue and ignore the track-end the stop triggers."""
        await self._play_three(controller, mock_audio_resolver, make_track)
        mock_voice_adapter.is_playing.return_value = True

        removed = await controller.stop(GUILD)
        play_calls = mock_voice_adapter.play.await_count
        await controller.handle_track_end(GUILD)

        assert removed == 3
        assert mock_voice_adapter.play.await_count == play_calls
        session = await session_repository.get(GUILD)
        assert session.queue.is_empty
        assert session.channel_id == CHANNEL

    @pytest.mark.asyncio
    async def test_stop_without_session(self, controller):
        assert await controller.stop(GUILD) == 0

    @pytest.mark.asyncio
    async def test_skip_while_playing_stops_transport(
        self, controller, mock_voice_adapter, mock_audio_resolver, make_track
    ):
        """Should stop audio and let the track-end event advance the queue."""
        a, b, c = await self._play_three(controller, mock_audio_resolver, make_track)
        mock_voice_adapter.is_playing.return_value = True

        skipped = await controller.skip(GUILD)
        await controller.handle_track_end(GUILD)

        assert skipped.id == a.id
        mock_voice_adapter.stop.assert_awaited_once_with(GUILD)
        assert (await controller.now_playing(GUILD)).id == b.id

    @pytest.mark.asyncio
    async def test_skip_while_idle_advances_directly(
        self, controller, mock_voice_adapter, mock_audio_resolver, make_track
    ):
        a, b, c = await self._play_three(controller, mock_audio_resolver, make_track)
        mock_voice_adapter.is_playing.return_value = False

        skipped = await controller.skip(GUILD)

        assert skipped.id == a.id
        mock_voice_adapter.stop.assert_not_called()
        assert (await controller.now_playing(GUILD)).id == b.id

    @pytest.mark.asyncio
    async def test_skip_with_nothing_playing(self, controller):
        assert await controller.skip(GUILD) is None

    @pytest.mark.asyncio
    async def test_track_end_without_session(self, controller, mock_voice_adapter):
        await controller.handle_track_end(GUILD)
        mock_voice_adapter.play.assert_not_called()
