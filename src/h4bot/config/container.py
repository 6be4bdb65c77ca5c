"""Dependency Injection Container

Manages the application's dependency graph, providing lazy initialization
and lifecycle management for adapters, services and handlers.
Components are created on-demand and cached for reuse throughout the application.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..domain.shared.messages import ErrorMessages

if TYPE_CHECKING:
    from discord.ext.commands import Bot

    from ..application.commands.rename_members import RenameMembersHandler
    from ..application.interfaces.audio_resolver import AudioResolver
    from ..application.interfaces.member_gateway import MemberGateway
    from ..application.interfaces.voice_adapter import VoiceAdapter
    from ..application.queries.get_queue import GetQueueHandler
    from ..application.services.batch_coordinator import BatchCoordinator
    from ..application.services.queue_controller import QueueController
    from ..domain.music.repository import SessionRepository
    from ..domain.nicknames.services import MemberSelector
    from ..infrastructure.discord.services.command_stats import CommandStats
    from ..infrastructure.http.discord_status import DiscordStatusClient
    from ..infrastructure.http.week_number import WeekNumberClient
    from .settings import Settings


@dataclass
class Container:
    """Dependency injection container.

    Components are lazily initialized when first accessed. Anything that
    talks to Discord needs ``set_bot`` to have been called first.
    """

    settings: Settings
    _bot: Bot | None = None
    _week_client: WeekNumberClient | None = None

    # Repositories
    _session_repository: SessionRepository | None = None

    # Infrastructure adapters
    _member_gateway: MemberGateway | None = None
    _voice_adapter: VoiceAdapter | None = None
    _audio_resolver: AudioResolver | None = None
    _status_client: DiscordStatusClient | None = None

    # Domain services
    _member_selector: MemberSelector | None = None

    # Application services
    _batch_coordinator: BatchCoordinator | None = None
    _queue_controller: QueueController | None = None

    # Command and query handlers
    _rename_members_handler: RenameMembersHandler | None = None
    _get_queue_handler: GetQueueHandler | None = None

    _command_stats: CommandStats | None = None

    def set_bot(self, bot: Bot) -> None:
        self._bot = bot

    @property
    def bot(self) -> Bot:
        if self._bot is None:
            raise RuntimeError(ErrorMessages.BOT_NOT_INITIALIZED)
        return self._bot

    # === Repositories ===

    @property
    def session_repository(self) -> SessionRepository:
        if self._session_repository is None:
            from ..infrastructure.memory.session_repository import InMemorySessionRepository

            self._session_repository = InMemorySessionRepository()
        return self._session_repository

    # === Infrastructure Adapters ===

    @property
    def member_gateway(self) -> MemberGateway:
        if self._member_gateway is None:
            from ..infrastructure.discord.adapters.member_gateway import DiscordMemberGateway

            self._member_gateway = DiscordMemberGateway(self.bot)
        return self._member_gateway

    @property
    def voice_adapter(self) -> VoiceAdapter:
        if self._voice_adapter is None:
            from ..infrastructure.discord.adapters.voice_adapter import DiscordVoiceAdapter

            self._voice_adapter = DiscordVoiceAdapter(self.bot, self.settings.audio)
        return self._voice_adapter

    @property
    def audio_resolver(self) -> AudioResolver:
        if self._audio_resolver is None:
            from ..infrastructure.audio.ytdlp_resolver import YtDlpResolver

            self._audio_resolver = YtDlpResolver(self.settings.audio)
        return self._audio_resolver

    @property
    def status_client(self) -> DiscordStatusClient:
        if self._status_client is None:
            from ..infrastructure.http.discord_status import DiscordStatusClient

            self._status_client = DiscordStatusClient()
        return self._status_client

    @property
    def week_client(self) -> WeekNumberClient:
        if self._week_client is None:
            from ..infrastructure.http.week_number import WeekNumberClient

            self._week_client = WeekNumberClient()
        return self._week_client

    # === Domain Services ===

    @property
    def member_selector(self) -> MemberSelector:
        if self._member_selector is None:
            from ..domain.nicknames.services import MemberSelector

            self._member_selector = MemberSelector(
                min_count=self.settings.nicknames.multiple_min_count
            )
        return self._member_selector

    # === Application Services ===

    @property
    def batch_coordinator(self) -> BatchCoordinator:
        if self._batch_coordinator is None:
            from ..application.services.batch_coordinator import BatchCoordinator

            self._batch_coordinator = BatchCoordinator(
                member_gateway=self.member_gateway,
                selector=self.member_selector,
                fallback_label=self.settings.nicknames.fallback_label,
                max_concurrency=self.settings.nicknames.max_concurrency,
            )
        return self._batch_coordinator

    @property
    def queue_controller(self) -> QueueController:
        """Get the queue controller. Creating it registers the track-end callback."""
        if self._queue_controller is None:
            from ..application.services.queue_controller import QueueController

            self._queue_controller = QueueController(
                session_repository=self.session_repository,
                member_gateway=self.member_gateway,
                voice_adapter=self.voice_adapter,
                audio_resolver=self.audio_resolver,
            )
        return self._queue_controller

    # === Command / Query Handlers ===

    @property
    def rename_members_handler(self) -> RenameMembersHandler:
        if self._rename_members_handler is None:
            from ..application.commands.rename_members import RenameMembersHandler

            nicknames = self.settings.nicknames
            self._rename_members_handler = RenameMembersHandler(
                member_gateway=self.member_gateway,
                batch_coordinator=self.batch_coordinator,
                labels=nicknames.labels,
                protected_ids=frozenset(self.settings.discord.protected_ids),
                member_fetch_limit=nicknames.member_fetch_limit,
            )
        return self._rename_members_handler

    @property
    def get_queue_handler(self) -> GetQueueHandler:
        if self._get_queue_handler is None:
            from ..application.queries.get_queue import GetQueueHandler

            self._get_queue_handler = GetQueueHandler(
                session_repository=self.session_repository,
            )
        return self._get_queue_handler

    @property
    def command_stats(self) -> CommandStats:
        if self._command_stats is None:
            from ..infrastructure.discord.services.command_stats import CommandStats

            self._command_stats = CommandStats()
        return self._command_stats

    # === Lifecycle ===

    async def initialize(self) -> None:
        """Wire the queue controller so track-end events advance queues from the start."""
        _ = self.queue_controller

    async def shutdown(self) -> None:
        """Wait for in-flight rename batches, then leave every voice channel."""
        if self._batch_coordinator is not None:
            await self._batch_coordinator.drain()

        if self._queue_controller is not None:
            await self._queue_controller.leave_all()


def create_container(settings: Settings) -> Container:
    """Create a new dependency injection container."""
    return Container(settings)
