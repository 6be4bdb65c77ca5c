"""
Unit Tests for Dependency Injection Container

Tests for:
- Container initialization with settings
- Lazy initialization and caching of every component
- Bot instance management (set_bot, bot property, error when not set)
- Settings flowing into the components that use them
- Lifecycle methods (initialize, shutdown)
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from h4bot.config.container import Container, create_container
from h4bot.config.settings import DiscordSettings, NicknameSettings, Settings


@pytest.fixture
def settings():
    return Settings(
        discord=DiscordSettings(protected_ids=[42]),
        nicknames=NicknameSettings(max_concurrency=4, multiple_min_count=2),
    )


@pytest.fixture
def mock_bot():
    """Mock Discord bot instance."""
    bot = MagicMock()
    bot.user = MagicMock()
    bot.user.id = 123456789
    return bot


@pytest.fixture
def container(settings, mock_bot):
    container = create_container(settings)
    container.set_bot(mock_bot)
    return container


# =============================================================================
# Bot management
# =============================================================================


class TestBotManagement:
    def test_create_container_factory(self, settings):
        container = create_container(settings)

        assert isinstance(container, Container)
        assert container.settings is settings

    def test_bot_not_set_raises(self, settings):
        container = Container(settings=settings)

        with pytest.raises(RuntimeError, match="Bot not initialized"):
            _ = container.bot

    def test_discord_components_need_bot(self, settings):
        container = Container(settings=settings)

        with pytest.raises(RuntimeError):
            _ = container.member_gateway

    def test_set_bot(self, container, mock_bot):
        assert container.bot is mock_bot


# =============================================================================
# Lazy wiring
# =============================================================================


class TestLazyWiring:
    """Components are built on first access and cached afterwards."""

    @pytest.mark.parametrize(
        "attr",
        [
            "session_repository",
            "member_gateway",
            "voice_adapter",
            "audio_resolver",
            "status_client",
            "week_client",
            "member_selector",
            "batch_coordinator",
            "queue_controller",
            "rename_members_handler",
            "get_queue_handler",
            "command_stats",
        ],
    )
    def test_component_is_cached(self, container, attr):
        assert getattr(container, attr) is getattr(container, attr)

    def test_nothing_built_up_front(self, settings):
        container = Container(settings=settings)

        assert container._queue_controller is None
        assert container._batch_coordinator is None

    def test_batch_settings_are_applied(self, container):
        coordinator = container.batch_coordinator

        assert coordinator._max_concurrency == 4
        assert coordinator._fallback == "balls"
        assert coordinator.selector is container.member_selector
        assert container.member_selector._min_count == 2

    def test_rename_handler_wiring(self, container):
        handler = container.rename_members_handler

        assert handler._protected_ids == frozenset({42})
        assert handler._coordinator is container.batch_coordinator
        assert handler._gateway is container.member_gateway
        assert handler._fetch_limit == 1000

    def test_voice_components_share_repository(self, container):
        controller = container.queue_controller
        handler = container.get_queue_handler

        assert controller._session_repo is container.session_repository
        assert handler._session_repo is container.session_repository


# =============================================================================
# Lifecycle
# =============================================================================


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_initialize_registers_track_end_callback(self, container):
        await container.initialize()

        controller = container._queue_controller
        assert controller is not None
        assert container.voice_adapter._on_track_end == controller.handle_track_end

    @pytest.mark.asyncio
    async def test_shutdown_without_components(self, settings):
        """Should be a no-op when nothing was ever built."""
        container = Container(settings=settings)
        await container.shutdown()

    @pytest.mark.asyncio
    async def test_shutdown_drains_then_leaves(self, container):
        calls = []
        coordinator = MagicMock()
        coordinator.drain = AsyncMock(side_effect=lambda: calls.append("drain"))
        controller = MagicMock()
        controller.leave_all = AsyncMock(side_effect=lambda: calls.append("leave_all"))
        container._batch_coordinator = coordinator
        container._queue_controller = controller

        await container.shutdown()

        assert calls == ["drain", "leave_all"]
