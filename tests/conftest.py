import random
from unittest.mock import AsyncMock, MagicMock

import pytest

# ============================================================================
# Domain Entity Fixtures
# ============================================================================


@pytest.fixture
def sample_track():
    """Create a sample track for testing."""
    from h4bot.domain.music.entities import Track
    from h4bot.domain.music.value_objects import TrackId

    return Track(
        id=TrackId("test-track-123"),
        title="Test Track",
        webpage_url="https://youtube.com/watch?v=test123",
        stream_url="https://stream.url/test",
        duration_seconds=180,
        thumbnail_url="https://thumbnail.url/test.jpg",
        author="Test Artist",
    )


@pytest.fixture
def make_track():
    """Factory for distinct tracks keyed by a short name."""
    from h4bot.domain.music.entities import Track
    from h4bot.domain.music.value_objects import TrackId

    def _make(name: str, duration: int | None = 60) -> Track:
        return Track(
            id=TrackId(name),
            title=f"Track {name}",
            webpage_url=f"https://example.com/{name}",
            stream_url=f"https://stream.example.com/{name}",
            duration_seconds=duration,
        )

    return _make


@pytest.fixture
def make_members():
    """Factory for ``n`` mutable members with ids 1..n."""
    from h4bot.domain.nicknames.entities import Member

    def _make(n: int, start: int = 1) -> list[Member]:
        return [Member(id=i, display_name=f"member{i}") for i in range(start, start + n)]

    return _make


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


# ============================================================================
# Port Fixtures
# ============================================================================


@pytest.fixture
def mock_member_gateway():
    """Member gateway whose renames all succeed and whose voice lookups return None."""
    from h4bot.application.interfaces.member_gateway import MemberGateway

    gateway = MagicMock(spec=MemberGateway)
    gateway.list_members = AsyncMock(return_value=[])
    gateway.rename_member = AsyncMock(return_value=None)
    gateway.current_voice_channel = MagicMock(return_value=None)
    return gateway


@pytest.fixture
def mock_voice_adapter():
    """Voice adapter that connects and plays successfully."""
    from h4bot.application.interfaces.voice_adapter import VoiceAdapter

    adapter = MagicMock(spec=VoiceAdapter)
    adapter.connect = AsyncMock(return_value=True)
    adapter.disconnect = AsyncMock(return_value=True)
    adapter.play = AsyncMock(return_value=True)
    adapter.stop = AsyncMock(return_value=True)
    adapter.is_connected = MagicMock(return_value=True)
    adapter.is_playing = MagicMock(return_value=False)
    adapter.get_current_channel_id = MagicMock(return_value=None)
    adapter.set_on_track_end_callback = MagicMock()
    return adapter


@pytest.fixture
def mock_audio_resolver(sample_track):
    """Audio resolver that resolves every reference to ``sample_track``."""
    from h4bot.application.interfaces.audio_resolver import AudioResolver

    resolver = MagicMock(spec=AudioResolver)
    resolver.resolve = AsyncMock(return_value=sample_track)
    resolver.is_url = MagicMock(return_value=True)
    return resolver


@pytest.fixture
def session_repository():
    from h4bot.infrastructure.memory.session_repository import InMemorySessionRepository

    return InMemorySessionRepository()


# ============================================================================
# Discord Fixtures
# ============================================================================


@pytest.fixture
def mock_interaction():
    """Slash-command interaction from a guild member sitting in voice."""
    import discord

    interaction = MagicMock(spec=discord.Interaction)
    interaction.response = MagicMock()
    interaction.response.is_done.return_value = False
    interaction.response.send_message = AsyncMock()
    interaction.response.defer = AsyncMock()
    interaction.followup = MagicMock()
    interaction.followup.send = AsyncMock()
    interaction.edit_original_response = AsyncMock()

    interaction.guild = MagicMock()
    interaction.guild.id = 111111111
    interaction.guild.shard_id = 0
    interaction.guild_id = 111111111

    member = MagicMock(spec=discord.Member)
    member.id = 333333333
    member.display_name = "TestUser"
    member.voice = MagicMock()
    member.voice.channel = MagicMock()
    member.voice.channel.id = 444444444
    interaction.user = member

    return interaction


@pytest.fixture
def mock_container():
    """Container double exposing the handlers the cogs call."""
    container = MagicMock()
    container.rename_members_handler.handle = AsyncMock()
    container.queue_controller.join = AsyncMock()
    container.queue_controller.leave = AsyncMock()
    container.queue_controller.request_play = AsyncMock()
    container.queue_controller.stop = AsyncMock()
    container.queue_controller.skip = AsyncMock()
    container.queue_controller.now_playing = AsyncMock()
    container.queue_controller.handle_voice_disconnected = AsyncMock(return_value=True)
    container.get_queue_handler.handle = AsyncMock()
    container.status_client.fetch = AsyncMock()
    return container
