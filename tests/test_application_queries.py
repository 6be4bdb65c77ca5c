"""
Unit Tests for Application Layer Queries

Tests for:
- GetQueueQuery, GetQueueHandler, QueueInfo
- InMemorySessionRepository as the handler's backing store
"""

import pytest

from h4bot.application.queries.get_queue import GetQueueHandler, GetQueueQuery, QueueInfo
from h4bot.infrastructure.memory.session_repository import InMemorySessionRepository

GUILD_ID = 123456
CHANNEL_ID = 777


@pytest.fixture
def repository():
    return InMemorySessionRepository()


@pytest.fixture
def handler(repository):
    return GetQueueHandler(session_repository=repository)


# =============================================================================
# QueueInfo Tests
# =============================================================================


class TestQueueInfo:
    """Unit tests for the QueueInfo read model."""

    def test_empty(self):
        info = QueueInfo(guild_id=GUILD_ID)

        assert info.length == 0
        assert info.is_empty is True

    def test_length_counts_current_track(self, make_track):
        info = QueueInfo(
            guild_id=GUILD_ID,
            current_track=make_track("a"),
            upcoming=[make_track("b"), make_track("c")],
        )

        assert info.length == 3
        assert info.is_empty is False


# =============================================================================
# GetQueueHandler Tests
# =============================================================================


class TestGetQueueHandler:
    """Unit tests for GetQueueHandler."""

    @pytest.mark.asyncio
    async def test_no_session(self, handler):
        """Should return an empty queue when the bot is not in voice."""
        info = await handler.handle(GetQueueQuery(guild_id=GUILD_ID))

        assert info.is_empty
        assert info.total_duration == 0
        assert info.session_started_at is None

    @pytest.mark.asyncio
    async def test_populated_queue(self, handler, repository, make_track):
        session = await repository.create(GUILD_ID, CHANNEL_ID)
        session.queue.append(make_track("a", duration=100))
        session.queue.append(make_track("b", duration=None))
        session.queue.append(make_track("c", duration=20))

        info = await handler.handle(GetQueueQuery(guild_id=GUILD_ID))

        assert str(info.current_track.id) == "a"
        assert [str(t.id) for t in info.upcoming] == ["b", "c"]
        assert info.total_duration == 120
        assert info.session_started_at == session.created_at

    @pytest.mark.asyncio
    async def test_snapshot_is_detached(self, handler, repository, make_track):
        """Should not reflect queue changes made after the query ran."""
        session = await repository.create(GUILD_ID, CHANNEL_ID)
        session.queue.append(make_track("a"))
        session.queue.append(make_track("b"))

        info = await handler.handle(GetQueueQuery(guild_id=GUILD_ID))
        session.queue.append(make_track("c"))

        assert len(info.upcoming) == 1


# =============================================================================
# InMemorySessionRepository Tests
# =============================================================================


class TestInMemorySessionRepository:
    @pytest.mark.asyncio
    async def test_create_get_delete(self, repository):
        session = await repository.create(GUILD_ID, CHANNEL_ID)

        assert await repository.get(GUILD_ID) is session
        assert await repository.exists(GUILD_ID) is True
        assert await repository.all() == [session]

        assert await repository.delete(GUILD_ID) is True
        assert await repository.delete(GUILD_ID) is False
        assert await repository.get(GUILD_ID) is None

    @pytest.mark.asyncio
    async def test_create_replaces_existing(self, repository):
        await repository.create(GUILD_ID, CHANNEL_ID)
        replacement = await repository.create(GUILD_ID, 888)

        assert (await repository.get(GUILD_ID)) is replacement
        assert replacement.is_bound_to(888)
